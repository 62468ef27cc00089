"""Hot-seat text front end for Kelasu."""

import logging
import sys
from collections.abc import Callable

from kelasu.game.engine import Game
from kelasu.game.errors import MOVE_SYNTAX, MoveCommandError
from kelasu.settings import get_settings


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Logs go to stderr so they don't mix with the board on stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


logger = logging.getLogger(__name__)


def run_cli(
    game: Game,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    confirm_moves: bool = True,
) -> Game:
    """Play a game to completion, reading commands from `read`.

    Args:
        game: Game to play
        read: Prompt function returning one line of input
        write: Output function
        confirm_moves: Ask for confirmation before applying each move

    Returns:
        The finished game
    """
    write("Welcome to Kelasu.")
    write(MOVE_SYNTAX)

    while game.is_ongoing():
        write(f"\n{game}")
        command = read("Input a move.\n> ").strip()

        if command.lower() == "help":
            write(MOVE_SYNTAX)
            continue

        try:
            verified = game.verify_move_str(command)
        except MoveCommandError as err:
            write(f"Move error: {err}")
            continue

        write(f"Move: {verified.move}")
        if confirm_moves and not read("Confirm move? [y/n]\n> ").strip().lower().startswith("y"):
            continue

        game.make_move(verified)

    write(f"\n{game}")
    return game


def main() -> None:
    """Console entry point."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting Kelasu hot-seat game")

    try:
        run_cli(Game.new(), confirm_moves=settings.confirm_moves)
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, exiting")


if __name__ == "__main__":
    main()
