"""Exception types raised by the Battleship game logic."""


class BattleshipError(Exception):
    """Base class for all game errors."""


class InvalidCoordinate(BattleshipError, ValueError):
    """A coordinate lies outside the board."""

    def __init__(self, x: int, y: int, board_size: int):
        self.x = x
        self.y = y
        self.board_size = board_size
        super().__init__(f"Coordinate ({x}, {y}) is outside the {board_size}x{board_size} board.")


class ParseError(BattleshipError, ValueError):
    """User input could not be read as a coordinate pair."""


class PlacementError(BattleshipError, ValueError):
    """A ship was bound to an invalid set of coordinates."""


class PlacementExhausted(BattleshipError, RuntimeError):
    """Random placement gave up after too many attempts."""


class RepeatShot(BattleshipError, ValueError):
    """A shot targeted a cell that was already fired upon."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        super().__init__(f"Coordinate ({x}, {y}) has already been fired upon.")


class GameStateError(BattleshipError, RuntimeError):
    """An action is not allowed in the current game state."""
