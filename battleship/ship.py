import logging
from typing import List, Sequence, Tuple

from battleship.errors import PlacementError

logger = logging.getLogger(__name__)

# Standard fleet, in placement order: (ship type, size)
STANDARD_FLEET: List[Tuple[str, int]] = [
    ("Carrier", 5),
    ("Battleship", 4),
    ("Cruiser", 3),
    ("Submarine", 3),
    ("Destroyer", 2),
]


class Ship:
    """
    Represents a single ship in the Battleship game.

    Attributes:
        ship_type (str): The type of the ship (e.g., "Carrier").
        size (int): The number of cells the ship occupies.
        coordinates (List[Tuple[int, int]]): (x, y) cells occupied by the ship.
                                             Empty until the ship is placed.
        hits (int): Number of confirmed hits taken. Never exceeds size.
    """

    def __init__(self, size: int, ship_type: str = "Ship"):
        """
        Initializes a Ship instance.

        Args:
            size (int): The size (length) of the ship. Must be positive.
            ship_type (str): The type name of the ship, used in messages.

        Raises:
            ValueError: If size is not a positive integer.
        """
        if size <= 0:
            raise ValueError(f"Ship size must be positive, got {size}.")
        self.ship_type: str = ship_type
        self.size: int = size
        self.coordinates: List[Tuple[int, int]] = []
        self.hits: int = 0

    @property
    def is_placed(self) -> bool:
        return bool(self.coordinates)

    def place_ship(self, coords: Sequence[Tuple[int, int]]) -> None:
        """
        Binds the ship to the grid coordinates it occupies.

        Args:
            coords (Sequence[Tuple[int, int]]): Exactly `size` (x, y) tuples.

        Raises:
            PlacementError: If the coordinate count does not match the ship size,
                            or if the ship has already been placed.
        """
        if self.coordinates:
            raise PlacementError(f"{self.ship_type} has already been placed at {self.coordinates}.")
        if len(coords) != self.size:
            logger.error(f"Attempted to place {self.ship_type} (size {self.size}) with {len(coords)} coordinates.")
            raise PlacementError(
                f"Incorrect number of coordinates ({len(coords)}) provided for {self.ship_type} of size {self.size}."
            )
        self.coordinates = [tuple(c) for c in coords]
        logger.debug(f"Placed {self.ship_type} at coordinates: {self.coordinates}")

    def check_hit(self, x: int, y: int) -> bool:
        """
        Registers a shot at (x, y) against this ship.

        Returns:
            bool: True if the coordinate belongs to the ship (hit count incremented),
                  False otherwise.
        """
        if (x, y) not in self.coordinates:
            return False
        # The board only reports each cell once, so this cap is never reached in play.
        if self.hits < self.size:
            self.hits += 1
        if self.is_sunk():
            logger.info(f"{self.ship_type} has been sunk.")
        return True

    def is_sunk(self) -> bool:
        return self.hits >= self.size

    def __str__(self) -> str:
        return f"{self.ship_type} (Size: {self.size})"

    def __repr__(self) -> str:
        if self.coordinates:
            status = "Sunk" if self.is_sunk() else f"{self.hits}/{self.size} hits"
            coord_str = str(self.coordinates)
        else:
            status = "Not placed"
            coord_str = "N/A"
        return f"Ship(type='{self.ship_type}', size={self.size}, coords={coord_str}, status='{status}')"


def create_fleet() -> List[Ship]:
    """Builds a fresh, unplaced copy of the standard fleet."""
    return [Ship(size, ship_type) for ship_type, size in STANDARD_FLEET]
