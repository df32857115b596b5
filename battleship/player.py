import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from battleship.board import BOARD_SIZE, Board, BoardView
from battleship.errors import PlacementExhausted
from battleship.ship import Ship

logger = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 1000  # Per ship


class Player:
    """
    One side of the game: an own board holding the fleet, and a tracking view of
    the opponent's board.

    The tracking view is derived from the opponent's real board and only reveals
    cells that have been fired upon. Outcomes this player observed are also kept
    in `shots`, in firing order.
    """

    def __init__(self, name: str, board_size: int = BOARD_SIZE, rng: Optional[random.Random] = None):
        """
        Args:
            name (str): Display name of the player.
            board_size (int): Dimension of the square board.
            rng (Optional[random.Random]): Random source used for ship placement.
                                           A fresh unseeded one is created if omitted.
        """
        self._name = name
        self.board = Board(board_size)
        self.rng = rng if rng is not None else random.Random()
        self.opponent_view: Optional[BoardView] = None
        self.shots: Dict[Tuple[int, int], bool] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def shots_fired(self) -> int:
        return len(self.shots)

    @property
    def hits_scored(self) -> int:
        return sum(1 for hit in self.shots.values() if hit)

    def track(self, opponent: 'Player') -> None:
        """Binds this player's tracking view to the opponent's own board."""
        self.opponent_view = opponent.board.view()

    def place_ships(self, fleet: Sequence[Ship], max_attempts: int = MAX_PLACEMENT_ATTEMPTS) -> None:
        """
        Randomly places every ship of the fleet on this player's own board.

        For each ship a random origin and orientation are drawn until the board
        accepts the placement. Horizontal ships extend along x, vertical ones along y.
        Draws that would run off the board are discarded before asking the board.

        Args:
            fleet (Sequence[Ship]): Unplaced ships, placed in order.
            max_attempts (int): Maximum draws per ship.

        Raises:
            PlacementExhausted: If a ship cannot be placed within max_attempts draws.
        """
        size = self.board.size
        logger.info(f"Placing {len(fleet)} ships for {self.name}.")
        for ship in fleet:
            placed = False
            attempts = 0
            while not placed:
                if attempts >= max_attempts:
                    logger.error(f"Failed to place {ship.ship_type} for {self.name} after {max_attempts} attempts.")
                    raise PlacementExhausted(
                        f"Could not place {ship.ship_type} (size {ship.size}) on a {size}x{size} board "
                        f"for {self.name} after {max_attempts} attempts."
                    )
                attempts += 1
                x = self.rng.randrange(size)
                y = self.rng.randrange(size)
                horizontal = self.rng.random() < 0.5

                if horizontal:
                    if x + ship.size > size:
                        continue
                    coords = [(x + i, y) for i in range(ship.size)]
                else:
                    if y + ship.size > size:
                        continue
                    coords = [(x, y + i) for i in range(ship.size)]

                placed = self.board.place_ship(ship, coords)
            logger.debug(f"Placed {ship.ship_type} for {self.name} at {ship.coordinates} (attempt {attempts}).")

    def take_shot(self, opponent: 'Player', x: int, y: int) -> bool:
        """Fires at (x, y) on the opponent's own board. Returns True on a hit."""
        return opponent.board.check_hit(x, y)

    def has_lost(self, fleet: Sequence[Ship]) -> bool:
        return all(ship.is_sunk() for ship in fleet)

    def has_fired_at(self, x: int, y: int) -> bool:
        return (x, y) in self.shots

    def mark_opponent_board(self, x: int, y: int, hit: bool) -> None:
        """Records the observed outcome of a shot this player fired."""
        self.shots[(x, y)] = hit
        if self.opponent_view is not None and self.opponent_view.in_bounds(x, y) \
                and not self.opponent_view.is_fired(x, y):
            logger.warning(f"{self.name} recorded a shot at {(x, y)} that the opponent's board has not resolved.")

    def display_boards(self) -> str:
        """Renders the player's own board and the tracking view of the opponent."""
        lines: List[str] = [f"{self.name}'s Board:", self.board.display()]
        lines.append(f"{self.name}'s View of Opponent's Board:")
        if self.opponent_view is not None:
            lines.append(self.opponent_view.display())
        else:
            lines.append(Board(self.board.size).display())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<Player name={self.name!r} shots={self.shots_fired} hits={self.hits_scored}>"
