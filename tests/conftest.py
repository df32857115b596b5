import logging
import random
from typing import Iterable, List, Tuple

import pytest

from battleship.board import BOARD_EMPTY, Board


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def ship_cells(board: Board) -> List[Tuple[int, int]]:
    return [coord for ship in board.ships for coord in ship.coordinates]


def empty_cells(board: Board) -> List[Tuple[int, int]]:
    return [(x, y) for y in range(board.size) for x in range(board.size) if board.cell(x, y) == BOARD_EMPTY]


class ScriptedInput:
    """Feeds canned answers to prompts and remembers what was asked."""

    def __init__(self, answers: Iterable[str]):
        self.answers = iter(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        try:
            return next(self.answers)
        except StopIteration:
            raise EOFError from None
