"""
Console front end: prompts, coordinate parsing, screen clearing and the
interactive turn loop around a BattleshipGame.
"""

import logging
import os
import time
from typing import Callable, Tuple

from battleship.errors import InvalidCoordinate, ParseError, RepeatShot
from battleship.game import BattleshipGame, ShotOutcome
from battleship.player import Player

DEFAULT_PAUSE_SECONDS = 2.0

logger = logging.getLogger(__name__)


def parse_coordinates(text: str) -> Tuple[int, int]:
    """
    Parses an "x y" pair typed by a player. A comma may be used as separator.

    Raises:
        ParseError: If the text is not exactly two integers.
    """
    tokens = text.replace(",", " ").split()
    if len(tokens) != 2:
        raise ParseError(f"Expected two numbers 'x y', got {text.strip()!r}.")
    try:
        x, y = int(tokens[0]), int(tokens[1])
    except ValueError as e:
        raise ParseError(f"Coordinates must be whole numbers, got {text.strip()!r}.") from e
    return x, y


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


class ConsoleSession:
    """
    Drives one game at the terminal.

    I/O goes through the injected callables so the loop can be scripted.
    """

    def __init__(self,
                 game: BattleshipGame,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print,
                 pause_seconds: float = DEFAULT_PAUSE_SECONDS,
                 clear: bool = True,
                 sleep_fn: Callable[[float], None] = time.sleep,
                 clear_fn: Callable[[], None] = clear_screen):
        self.game = game
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.pause_seconds = pause_seconds
        self.clear = clear
        self.sleep_fn = sleep_fn
        self.clear_fn = clear_fn

    def clear_screen(self) -> None:
        if self.clear:
            self.clear_fn()

    def pause(self) -> None:
        if self.pause_seconds > 0:
            self.sleep_fn(self.pause_seconds)

    def setup(self) -> None:
        self.game.initialize(announce=lambda player: self.output_fn(f"Placing ships for {player.name}..."))

    def read_coordinates(self, player: Player) -> Tuple[int, int]:
        """Prompts until the player types a well-formed coordinate pair."""
        prompt = f"{player.name}'s turn. Enter coordinates to shoot (x y): "
        while True:
            try:
                return parse_coordinates(self.input_fn(prompt))
            except ParseError as e:
                logger.warning(f"Rejected input from {player.name}: {e}")
                self.output_fn(f"{e} Try again.")

    def play_turn(self) -> ShotOutcome:
        """Shows the current player's boards and resolves one accepted shot."""
        player = self.game.current_player
        self.clear_screen()
        self.output_fn(player.display_boards())
        while True:
            x, y = self.read_coordinates(player)
            try:
                outcome = self.game.fire(x, y)
                break
            except InvalidCoordinate as e:
                self.output_fn(f"{e} Use values from 0 to {self.game.board_size - 1}.")
            except RepeatShot as e:
                self.output_fn(f"{e} Pick another target.")

        self.output_fn("Hit!" if outcome.hit else "Miss.")
        if outcome.sunk is not None:
            self.output_fn(f"You sank {outcome.target.name}'s {outcome.sunk.ship_type}!")
        self.pause()
        return outcome

    def run(self) -> Player:
        """Plays turns until the game ends. Returns the winner."""
        while not self.game.is_over():
            self.play_turn()
        winner = self.game.winner
        self.clear_screen()
        self.output_fn(f"{winner.name} wins!")
        self.print_summary()
        return winner

    def print_summary(self) -> None:
        self.output_fn("=" * 40)
        for player in self.game.players:
            accuracy = player.hits_scored / player.shots_fired if player.shots_fired else 0.0
            self.output_fn(
                f"{player.name}: {player.shots_fired} shots, {player.hits_scored} hits ({accuracy:.0%})"
            )
        self.output_fn("=" * 40)


def read_player_name(input_fn: Callable[[str], str], output_fn: Callable[[str], None], number: int) -> str:
    """Prompts for a player name and keeps the first whitespace-delimited token."""
    while True:
        tokens = input_fn(f"Enter name for Player {number}: ").split()
        if tokens:
            return tokens[0]
        output_fn("A name is required.")
