import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from battleship.board import BOARD_SIZE
from battleship.errors import GameStateError, InvalidCoordinate, RepeatShot
from battleship.player import MAX_PLACEMENT_ATTEMPTS, Player
from battleship.ship import Ship, create_fleet

logger = logging.getLogger(__name__)


class GameState(Enum):
    SETUP = "setup"
    PLAYER1_TURN = "player1_turn"
    PLAYER2_TURN = "player2_turn"
    GAME_OVER = "game_over"


@dataclass
class ShotOutcome:
    """Result of one resolved shot."""
    shooter: Player
    target: Player
    x: int
    y: int
    hit: bool
    sunk: Optional[Ship] = None
    game_over: bool = False
    winner: Optional[Player] = None


class BattleshipGame:
    """
    Implements the core game logic: two players, their fleets, the turn state
    machine and the win condition.

    The game performs no I/O. A front end reads `state`/`current_player` and
    calls `fire` with the coordinates the current player chose.
    """

    def __init__(self,
                 player1_name: str,
                 player2_name: str,
                 board_size: int = BOARD_SIZE,
                 rng: Optional[random.Random] = None,
                 max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS):
        """
        Args:
            player1_name (str): Name of the player who moves first.
            player2_name (str): Name of the second player.
            board_size (int): The dimension of the square game boards.
            rng (Optional[random.Random]): Random source shared by both players' placement.
            max_placement_attempts (int): Retry cap per ship during placement.
        """
        logger.info(f"Initializing Battleship game with board size {board_size}x{board_size}")
        self.board_size = board_size
        self.rng = rng if rng is not None else random.Random()
        self.max_placement_attempts = max_placement_attempts

        self.player1 = Player(player1_name, board_size, self.rng)
        self.player2 = Player(player2_name, board_size, self.rng)
        self.player1.track(self.player2)
        self.player2.track(self.player1)

        self.fleets: Dict[int, List[Ship]] = {
            1: create_fleet(),
            2: create_fleet(),
        }

        self.state: GameState = GameState.SETUP
        self.turns_taken: int = 0
        self.winner: Optional[Player] = None

    def fleet_of(self, player: Player) -> List[Ship]:
        return self.fleets[1 if player is self.player1 else 2]

    @property
    def players(self) -> Tuple[Player, Player]:
        return self.player1, self.player2

    def initialize(self, announce: Optional[Callable[[Player], None]] = None) -> None:
        """
        Places both fleets and hands the first turn to player 1.

        Args:
            announce (Optional[Callable[[Player], None]]): Called with each player
                just before their fleet is placed.

        Raises:
            GameStateError: If the game has already been initialized.
            PlacementExhausted: If a fleet cannot be placed.
        """
        if self.state is not GameState.SETUP:
            raise GameStateError(f"Cannot initialize a game in state {self.state.name}.")
        for player in self.players:
            if announce is not None:
                announce(player)
            player.place_ships(self.fleet_of(player), self.max_placement_attempts)
        self.state = GameState.PLAYER1_TURN
        logger.info("Game initialized and ships placed.")

    @property
    def current_player(self) -> Player:
        if self.state is GameState.PLAYER1_TURN:
            return self.player1
        if self.state is GameState.PLAYER2_TURN:
            return self.player2
        raise GameStateError(f"No player to move in state {self.state.name}.")

    @property
    def opponent(self) -> Player:
        return self.player2 if self.current_player is self.player1 else self.player1

    def is_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def fire(self, x: int, y: int) -> ShotOutcome:
        """
        Processes a shot fired by the current player at (x, y) on the opponent's board.

        Off-board and repeated shots are rejected without consuming the turn.

        Returns:
            ShotOutcome: What the shot did, including whether it ended the game.

        Raises:
            GameStateError: If the game is not in a player's turn.
            InvalidCoordinate: If (x, y) is off the board.
            RepeatShot: If the current player already fired at (x, y).
        """
        shooter = self.current_player
        target = self.opponent

        if not target.board.in_bounds(x, y):
            logger.warning(f"{shooter.name} fired at invalid coordinate {(x, y)}.")
            raise InvalidCoordinate(x, y, self.board_size)
        if shooter.has_fired_at(x, y) or target.board.is_fired(x, y):
            logger.warning(f"{shooter.name} fired at already targeted coordinate {(x, y)}.")
            raise RepeatShot(x, y)

        hit = shooter.take_shot(target, x, y)
        shooter.mark_opponent_board(x, y, hit)
        self.turns_taken += 1

        outcome = ShotOutcome(shooter=shooter, target=target, x=x, y=y, hit=hit)
        if hit:
            ship = target.board.ship_at(x, y)
            if ship is not None and ship.is_sunk():
                outcome.sunk = ship
                logger.info(f"{target.name}'s {ship.ship_type} sunk by {shooter.name}.")

        if target.has_lost(self.fleet_of(target)):
            self.state = GameState.GAME_OVER
            self.winner = shooter
            outcome.game_over = True
            outcome.winner = shooter
            logger.info(f"GAME OVER! {shooter.name} wins after {self.turns_taken} shots.")
        elif self.state is GameState.PLAYER1_TURN:
            self.state = GameState.PLAYER2_TURN
        else:
            self.state = GameState.PLAYER1_TURN

        logger.debug(f"Fire result: {outcome}")
        return outcome

    def __str__(self):
        winner_str = f", Winner: {self.winner.name}" if self.winner else ""
        return f"BattleshipGame(Shots: {self.turns_taken}, State: {self.state.name}{winner_str})"

    def __repr__(self):
        return f"<BattleshipGame shots={self.turns_taken} state={self.state.name}>"
