import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from battleship.errors import InvalidCoordinate, PlacementError
from battleship.ship import Ship

# --- Constants ---
BOARD_SIZE = 10
BOARD_EMPTY = 0      # Cell state: open water
BOARD_SHIP = 1       # Cell state: an unhit part of a ship
BOARD_HIT = 2        # Cell state: a ship part that has been hit
BOARD_MISS = 3       # Cell state: open water that has been fired upon

CELL_SYMBOLS: Dict[int, str] = {
    BOARD_EMPTY: '~',
    BOARD_SHIP: 'S',
    BOARD_HIT: 'H',
    BOARD_MISS: 'M',
}

logger = logging.getLogger(__name__)


def render_grid(grid: np.ndarray) -> str:
    """Renders a grid of cell codes as space-separated symbol rows, one row per line."""
    return "\n".join(" ".join(CELL_SYMBOLS[int(cell)] for cell in row) for row in grid)


class Board:
    """
    A square grid holding one player's ships and the outcome of every shot fired at it.

    The grid is indexed as grid[x, y]: x selects the row, y the column. Each occupied
    cell also maps back to the Ship that owns it, so resolving a shot updates the
    cell and the ship's hit count together.
    """

    def __init__(self, size: int = BOARD_SIZE):
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}.")
        self.size: int = size
        self.grid: np.ndarray = np.full((size, size), BOARD_EMPTY, dtype=int)
        self.ships: List[Ship] = []
        self.ship_map: Dict[Tuple[int, int], Ship] = {}

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise InvalidCoordinate(x, y, self.size)

    def cell(self, x: int, y: int) -> int:
        """Returns the cell code at (x, y)."""
        self._require_in_bounds(x, y)
        return int(self.grid[x, y])

    def is_fired(self, x: int, y: int) -> bool:
        """True if (x, y) has already been resolved as a hit or a miss."""
        return self.cell(x, y) in (BOARD_HIT, BOARD_MISS)

    def ship_at(self, x: int, y: int) -> Optional[Ship]:
        return self.ship_map.get((x, y))

    def place_ship(self, ship: Ship, coords: Sequence[Tuple[int, int]]) -> bool:
        """
        Places a ship on the board, all or nothing.

        Args:
            ship (Ship): The ship to place. Must not be placed yet.
            coords (Sequence[Tuple[int, int]]): The (x, y) cells the ship will occupy.

        Returns:
            bool: True if the ship was placed. False if any coordinate is off the board
                  or not empty, in which case the board is left untouched.

        Raises:
            PlacementError: If the coordinate count does not match the ship size.
        """
        if len(coords) != ship.size:
            raise PlacementError(
                f"{ship.ship_type} of size {ship.size} cannot occupy {len(coords)} cells."
            )
        for x, y in coords:
            if not self.in_bounds(x, y):
                logger.debug(f"Invalid placement: coordinate {(x, y)} is out of bounds.")
                return False
            if self.grid[x, y] != BOARD_EMPTY:
                logger.debug(f"Invalid placement: coordinate {(x, y)} is not empty.")
                return False
        # Duplicate coordinates would leave the ship unsinkable.
        if len(set(coords)) != len(coords):
            logger.debug(f"Invalid placement: duplicate coordinates in {list(coords)}.")
            return False

        ship.place_ship(coords)
        for x, y in ship.coordinates:
            self.grid[x, y] = BOARD_SHIP
            self.ship_map[(x, y)] = ship
        self.ships.append(ship)
        return True

    def check_hit(self, x: int, y: int) -> bool:
        """
        Resolves a shot at (x, y).

        A SHIP cell becomes HIT and the owning ship records the hit. An EMPTY cell
        becomes MISS. A cell already resolved as HIT or MISS is left unchanged.

        Returns:
            bool: True only if this shot struck an unhit ship part.

        Raises:
            InvalidCoordinate: If (x, y) is off the board.
            RuntimeError: If a SHIP cell has no owning ship. The board is left unchanged.
        """
        state = self.cell(x, y)
        if state == BOARD_SHIP:
            ship = self.ship_map.get((x, y))
            if ship is None:
                logger.error(f"Inconsistency: SHIP cell at {(x, y)} has no owning ship.")
                raise RuntimeError(f"Board is corrupt: SHIP cell at {(x, y)} has no owning ship.")
            self.grid[x, y] = BOARD_HIT
            ship.check_hit(x, y)
            logger.debug(f"Hit at {(x, y)}.")
            return True
        if state == BOARD_EMPTY:
            self.grid[x, y] = BOARD_MISS
            logger.debug(f"Miss at {(x, y)}.")
        else:
            logger.debug(f"Coordinate {(x, y)} was already resolved; no change.")
        return False

    def display(self) -> str:
        """Renders the full board, ships included."""
        return render_grid(self.grid)

    def view(self) -> 'BoardView':
        """Returns a read-only view that only reveals cells already fired upon."""
        return BoardView(self)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"<Board size={self.size} ships={len(self.ships)}>"


class BoardView:
    """
    Read-only projection of a Board as seen by the opponent.

    Unhit ship parts are reported as open water; hits and misses show through.
    The view holds no state of its own, so it always reflects the live board.
    """

    def __init__(self, board: Board):
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def in_bounds(self, x: int, y: int) -> bool:
        return self._board.in_bounds(x, y)

    def cell(self, x: int, y: int) -> int:
        state = self._board.cell(x, y)
        return BOARD_EMPTY if state == BOARD_SHIP else state

    def is_fired(self, x: int, y: int) -> bool:
        return self._board.is_fired(x, y)

    @property
    def grid(self) -> np.ndarray:
        """A masked copy of the underlying grid."""
        masked = self._board.grid.copy()
        masked[masked == BOARD_SHIP] = BOARD_EMPTY
        return masked

    def display(self) -> str:
        return render_grid(self.grid)

    def __str__(self) -> str:
        return self.display()
