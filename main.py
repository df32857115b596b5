import argparse
import logging
import os
import random
import sys
from typing import Any, Dict, List, Optional

import colorlog

from battleship.board import BOARD_SIZE
from battleship.console import DEFAULT_PAUSE_SECONDS, ConsoleSession, read_player_name
from battleship.errors import PlacementExhausted
from battleship.game import BattleshipGame
from battleship.player import MAX_PLACEMENT_ATTEMPTS

logger = logging.getLogger("battleship")

MIN_BOARD_SIZE = 5  # The Carrier must fit
MAX_BOARD_SIZE = 10

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def setup_logging(log_level_str: str = 'WARNING', log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for the application.

    Console logs go to stderr with colors so they stay apart from the boards
    printed on stdout.

    Args:
        log_level_str (str): The logging level as a string (e.g., 'DEBUG', 'INFO').
        log_file (Optional[str]): Path to the log file. If None, file logging is disabled.
                                   The directory is created if it doesn't exist.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    formatter = colorlog.ColoredFormatter(
        '%(log_color)s' + log_format,
        datefmt=date_format,
        log_colors={
            'DEBUG':    'cyan',
            'INFO':     'green',
            'WARNING':  'yellow',
            'ERROR':    'red',
            'CRITICAL': 'red,bg_white',
        },
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    file_handler = None
    if log_file:
        log_dir = os.path.dirname(log_file)
        try:
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode='a')
            file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        except OSError as e:
            print(f"Warning: Could not create log file {log_file}: {e}. File logging disabled.", file=sys.stderr)
            file_handler = None

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    if file_handler:
        root_logger.addHandler(file_handler)

    logger.debug(f"Logging configured with level {log_level_str}.")


def board_size_arg(value: str) -> int:
    size = int(value)
    if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise argparse.ArgumentTypeError(f"board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}")
    return size


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command-line arguments for a console game."""
    parser = argparse.ArgumentParser(description="Play two-player Battleship at the console.")

    # --- Game ---
    parser.add_argument('--board-size', type=board_size_arg, default=BOARD_SIZE, help='Dimension of the square boards.')
    parser.add_argument('--seed', type=int, default=None, help='Seed for ship placement, for reproducible layouts.')
    parser.add_argument('--max-placement-attempts', type=int, default=MAX_PLACEMENT_ATTEMPTS, help='Random placement attempts allowed per ship.')
    parser.add_argument('--player1', type=str, default=None, help='Name of player 1 (prompted if omitted).')
    parser.add_argument('--player2', type=str, default=None, help='Name of player 2 (prompted if omitted).')

    # --- Console ---
    parser.add_argument('--pause', type=float, default=DEFAULT_PAUSE_SECONDS, help='Seconds to show each shot result.')
    parser.add_argument('--no-clear', action='store_true', help='Do not clear the screen between turns.')

    # --- Logging ---
    parser.add_argument('--log-level', type=str, default='WARNING', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Set the logging verbosity.')
    parser.add_argument('--log-file', type=str, default=None, help='Path to save detailed logs.')

    return parser.parse_args(argv)


def first_token(value: Optional[str]) -> Optional[str]:
    tokens = value.split() if value else []
    return tokens[0] if tokens else None


def build_game_config(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Builds the keyword arguments for BattleshipGame from parsed arguments.

    Player names are not included; they may still need to be prompted for.
    """
    config = {
        'board_size': args.board_size,
        'rng': random.Random(args.seed),
        'max_placement_attempts': args.max_placement_attempts,
    }
    logger.debug(f"Game config: board_size={args.board_size}, seed={args.seed}, "
                 f"max_placement_attempts={args.max_placement_attempts}")
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.log_level, args.log_file)
    logger.info("Starting Battleship...")

    try:
        name1 = first_token(args.player1) or read_player_name(input, print, 1)
        name2 = first_token(args.player2) or read_player_name(input, print, 2)

        game = BattleshipGame(name1, name2, **build_game_config(args))
        session = ConsoleSession(game, input_fn=input, output_fn=print,
                                 pause_seconds=args.pause, clear=not args.no_clear)
        session.setup()
        winner = session.run()
    except PlacementExhausted as e:
        logger.error(f"Game setup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except EOFError:
        logger.warning("Input closed before the game finished.")
        print("\nInput closed. Game abandoned.", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Game interrupted by user (KeyboardInterrupt).")
        print("\nGame interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    logger.info(f"Game finished. Winner: {winner.name}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
