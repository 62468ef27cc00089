"""Tests for the game service."""

from datetime import datetime, timedelta

import pytest

from kelasu.game.board import Board
from kelasu.game.engine import GameEventType
from kelasu.game.moves import Relocate
from kelasu.game.pieces import Team
from kelasu.game.position import Pos
from kelasu.game.state import Finished, WinReason, Winner
from kelasu.services.game_service import GameService, get_game_service
from kelasu.settings import Settings

BLUE = "alice"
RED = "bob"


@pytest.fixture
def service() -> GameService:
    return GameService(Settings(move_timeout_seconds=10, stale_game_seconds=60))


class TestCreateGame:
    """Tests for creating matches."""

    def test_create_game_standard(self, service: GameService) -> None:
        """Test creating a standard match."""
        game_id = service.create_game(BLUE, RED)

        assert len(game_id) == 8
        game = service.get_game(game_id)
        assert game is not None
        assert game.board == Board.create_standard()
        assert game.turn is Team.BLUE

        managed = service.get_managed_game(game_id)
        assert managed is not None
        assert managed.players == {Team.BLUE: BLUE, Team.RED: RED}

    def test_create_game_custom_position(self, service: GameService) -> None:
        """Test creating a match from a custom board and turn."""
        board = Board.from_string("S" + "." * 98 + "s")

        game_id = service.create_game(BLUE, RED, board=board, turn=Team.RED)

        game = service.get_game(game_id)
        assert game is not None
        assert game.turn is Team.RED
        assert game.board == board

    def test_create_game_unique_ids(self, service: GameService) -> None:
        """Test that game IDs are unique."""
        ids = {service.create_game(BLUE, RED) for _ in range(20)}
        assert len(ids) == 20

    def test_cannot_play_self(self, service: GameService) -> None:
        """Test a player cannot take both sides."""
        with pytest.raises(ValueError):
            service.create_game(BLUE, BLUE)

    def test_get_player_team(self, service: GameService) -> None:
        """Test looking up a player's team."""
        game_id = service.create_game(BLUE, RED)

        assert service.get_player_team(game_id, BLUE) is Team.BLUE
        assert service.get_player_team(game_id, RED) is Team.RED
        assert service.get_player_team(game_id, "carol") is None
        assert service.get_player_team("NOPE", BLUE) is None

    def test_get_nonexistent_game(self, service: GameService) -> None:
        assert service.get_game("NOPE") is None
        assert service.get_managed_game("NOPE") is None


class TestSubmitMove:
    """Tests for submitting moves."""

    def test_submit_text_move(self, service: GameService) -> None:
        """Test a legal command is applied."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, BLUE, "move 13 to 23")

        assert result.success
        assert result.error is None
        assert result.message == "Ongoing match."
        assert [event.type for event in result.events] == [GameEventType.MOVE]

        game = service.get_game(game_id)
        assert game is not None
        assert game.board[Pos(23)] is not None
        assert game.power == 3

    def test_submit_move_object(self, service: GameService) -> None:
        """Test parsed moves are accepted as well as text."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, BLUE, Relocate(from_pos=Pos(13), to_pos=Pos(23)))

        assert result.success

    def test_game_not_found(self, service: GameService) -> None:
        result = service.submit_move("NOPE", BLUE, "resign")

        assert not result.success
        assert result.error == "game_not_found"

    def test_not_a_player(self, service: GameService) -> None:
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, "carol", "resign")

        assert not result.success
        assert result.error == "not_a_player"

    def test_not_your_turn(self, service: GameService) -> None:
        """Test the side not to move is rejected before parsing."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, RED, "move 83 to 73")

        assert not result.success
        assert result.error == "not_your_turn"

    def test_invalid_syntax(self, service: GameService) -> None:
        """Test unparseable commands report the syntax help."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, BLUE, "jump 13 23")

        assert not result.success
        assert result.error == "invalid_syntax"
        assert result.message is not None
        assert result.message.startswith("Invalid move syntax:")

    def test_illegal_move(self, service: GameService) -> None:
        """Test illegal moves leave the game unchanged."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, BLUE, "move 03 to 13")

        assert not result.success
        assert result.error == "illegal_move"
        assert result.message is not None
        assert result.message.startswith("That move is illegal: ")

        game = service.get_game(game_id)
        assert game is not None
        assert game.board == Board.create_standard()
        assert game.power == 4

    def test_game_over(self, service: GameService) -> None:
        """Test nothing is accepted after the game ends."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, BLUE, "resign")
        assert result.success
        assert result.message == "Winner: Red."

        result = service.submit_move(game_id, RED, "move 83 to 73")
        assert not result.success
        assert result.error == "game_over"

    def test_draw_flow(self, service: GameService) -> None:
        """Test an offer moves the decision to the opponent."""
        game_id = service.create_game(BLUE, RED)

        result = service.submit_move(game_id, BLUE, "draw")
        assert result.success
        assert result.message == "The opponent is offering a draw."

        result = service.submit_move(game_id, RED, "draw")
        assert result.success
        assert result.message == "Draw."


class TestIdleGames:
    """Tests for idle resignation and cleanup."""

    def test_expire_idle_games(self, service: GameService) -> None:
        """Test the side to move resigns after the timeout."""
        game_id = service.create_game(BLUE, RED)
        managed = service.get_managed_game(game_id)
        assert managed is not None
        start = datetime(2026, 1, 1, 12, 0, 0)
        managed.last_activity = start

        assert service.expire_idle_games(now=start + timedelta(seconds=5)) == []
        assert service.expire_idle_games(now=start + timedelta(seconds=11)) == [game_id]

        assert managed.game.state == Finished(Winner(Team.RED))
        assert managed.game.win_reason is WinReason.RESIGNATION

    def test_expire_skips_finished(self, service: GameService) -> None:
        game_id = service.create_game(BLUE, RED)
        service.submit_move(game_id, BLUE, "resign")

        later = datetime.now() + timedelta(hours=1)
        assert service.expire_idle_games(now=later) == []

    def test_timeout_disabled(self) -> None:
        """Test a timeout of 0 never resigns anyone."""
        service = GameService(Settings(move_timeout_seconds=0))
        service.create_game(BLUE, RED)

        later = datetime.now() + timedelta(days=1)
        assert service.expire_idle_games(now=later) == []

    def test_cleanup_stale_games(self, service: GameService) -> None:
        """Test finished matches are dropped once stale, ongoing ones never."""
        finished_id = service.create_game(BLUE, RED)
        ongoing_id = service.create_game(BLUE, RED)
        service.submit_move(finished_id, BLUE, "resign")

        assert service.cleanup_stale_games(now=datetime.now()) == 0

        later = datetime.now() + timedelta(seconds=120)
        assert service.cleanup_stale_games(now=later) == 1
        assert service.get_game(finished_id) is None
        assert service.get_game(ongoing_id) is not None

    def test_remove_game(self, service: GameService) -> None:
        game_id = service.create_game(BLUE, RED)

        assert service.remove_game(game_id)
        assert not service.remove_game(game_id)
        assert service.get_game(game_id) is None


class TestGetGameService:
    """Tests for the global service accessor."""

    def test_singleton(self) -> None:
        assert get_game_service() is get_game_service()
