"""Tests for the hot-seat text front end."""

from kelasu.game.board import Board
from kelasu.game.engine import Game
from kelasu.game.errors import MOVE_SYNTAX
from kelasu.game.pieces import Team
from kelasu.game.position import Pos
from kelasu.game.state import Finished, Winner
from kelasu.main import run_cli


class ScriptedIO:
    """Feeds canned input lines and records output."""

    def __init__(self, *lines: str) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []
        self.output: list[str] = []

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.lines.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


class TestRunCli:
    """Tests for run_cli."""

    def test_play_until_resign(self) -> None:
        """Test moves are applied until the game finishes."""
        io = ScriptedIO("move 13 to 23", "resign")

        game = run_cli(Game.new(), read=io.read, write=io.write, confirm_moves=False)

        assert game.state == Finished(Winner(Team.RED))
        assert game.board[Pos(23)] is not None
        assert "Welcome to Kelasu." in io.text
        assert "Winner: Red." in io.output[-1]

    def test_errors_are_reported(self) -> None:
        """Test bad commands print an error and ask again."""
        io = ScriptedIO("jump", "move 03 to 13", "resign")

        run_cli(Game.new(), read=io.read, write=io.write, confirm_moves=False)

        errors = [line for line in io.output if line.startswith("Move error: ")]
        assert len(errors) == 2
        assert "Invalid move syntax:" in errors[0]
        assert "cannot move that way" in errors[1]

    def test_help(self) -> None:
        io = ScriptedIO("help", "resign")

        run_cli(Game.new(), read=io.read, write=io.write, confirm_moves=False)

        assert io.output.count(MOVE_SYNTAX) == 2

    def test_confirmation(self) -> None:
        """Test a move is only applied once confirmed."""
        io = ScriptedIO("move 13 to 23", "n", "move 13 to 23", "y", "resign", "y")

        game = run_cli(Game.new(), read=io.read, write=io.write, confirm_moves=True)

        assert "Move: move 13 to 23" in io.output
        assert game.ply == 2
        assert game.board != Board.create_standard()
        assert not io.lines
