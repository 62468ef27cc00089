"""Match service for front ends.

Holds the active Kelasu matches in memory, maps players to teams and
serializes every verify/apply pair behind one lock, so two requests for the
same match can never interleave. Front ends (chat bots, CLIs) call into this
service and show MoveResult.message to the player.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from datetime import datetime

from kelasu.game.board import Board
from kelasu.game.engine import Game, GameEvent
from kelasu.game.errors import InvalidMove, InvalidMoveSyntax
from kelasu.game.moves import Move, Resign, parse_move
from kelasu.game.pieces import Team
from kelasu.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    """Result of attempting to make a move."""

    success: bool
    error: str | None = None
    message: str | None = None
    events: list[GameEvent] = field(default_factory=list)


@dataclass
class ManagedGame:
    """A match being managed by the service.

    Attributes:
        game: The engine state
        players: Map of team to player ID
        created_at: When the match was created
        last_activity: When a move was last applied
    """

    game: Game
    players: dict[Team, str]
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)

    def team_of(self, player_id: str) -> Team | None:
        for team, pid in self.players.items():
            if pid == player_id:
                return team
        return None


_GAME_ID_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
_GAME_ID_LENGTH = 8


def _generate_game_id() -> str:
    """Generate a game ID."""
    return "".join(random.choices(_GAME_ID_ALPHABET, k=_GAME_ID_LENGTH))


class GameService:
    """Manages active matches.

    This service is responsible for:
    - Creating matches between two players
    - Rejecting moves from the side not to move
    - Verifying and applying moves atomically per match
    - Resigning idle players and dropping old matches
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.games: dict[str, ManagedGame] = {}
        self._lock = threading.Lock()

    def create_game(
        self,
        blue_player: str,
        red_player: str,
        board: Board | None = None,
        turn: Team = Team.BLUE,
    ) -> str:
        """Create a new match.

        Args:
            blue_player: Player ID for Blue
            red_player: Player ID for Red
            board: Custom starting board (standard layout if None)
            turn: Team to move first

        Returns:
            The game ID
        """
        if blue_player == red_player:
            raise ValueError("A player cannot play against themselves")

        game = Game.new() if board is None else Game.from_position(turn, board)

        with self._lock:
            game_id = _generate_game_id()
            while game_id in self.games:
                game_id = _generate_game_id()

            self.games[game_id] = ManagedGame(
                game=game,
                players={Team.BLUE: blue_player, Team.RED: red_player},
            )

        logger.info(f"Game {game_id} created: {blue_player} (Blue) vs {red_player} (Red)")
        return game_id

    def get_game(self, game_id: str) -> Game | None:
        managed_game = self.games.get(game_id)
        if managed_game is None:
            return None
        return managed_game.game

    def get_managed_game(self, game_id: str) -> ManagedGame | None:
        return self.games.get(game_id)

    def get_player_team(self, game_id: str, player_id: str) -> Team | None:
        """Get the team a player controls in a match, or None."""
        managed_game = self.games.get(game_id)
        if managed_game is None:
            return None
        return managed_game.team_of(player_id)

    def submit_move(self, game_id: str, player_id: str, move: Move | str) -> MoveResult:
        """Verify and apply a move for a player.

        Args:
            game_id: The game ID
            player_id: The player making the move
            move: A Move, or command text to parse

        Returns:
            MoveResult indicating success or failure
        """
        with self._lock:
            managed_game = self.games.get(game_id)
            if managed_game is None:
                return MoveResult(success=False, error="game_not_found", message="Game not found")

            team = managed_game.team_of(player_id)
            if team is None:
                return MoveResult(
                    success=False,
                    error="not_a_player",
                    message="You are not playing in this game",
                )

            game = managed_game.game
            if not game.is_ongoing():
                return MoveResult(success=False, error="game_over", message="Game is already over")

            if team is not game.turn:
                return MoveResult(success=False, error="not_your_turn", message="It is not your turn")

            return self._apply(game_id, managed_game, move)

    def _apply(self, game_id: str, managed_game: ManagedGame, move: Move | str) -> MoveResult:
        game = managed_game.game
        try:
            parsed = parse_move(move) if isinstance(move, str) else move
            verified = game.verify_move(parsed)
        except InvalidMoveSyntax as err:
            return MoveResult(success=False, error="invalid_syntax", message=str(err))
        except InvalidMove as err:
            return MoveResult(success=False, error="illegal_move", message=f"That move is illegal: {err}")

        events = game.make_move(verified)
        managed_game.last_activity = datetime.now()
        logger.debug(f"Game {game_id}: applied {verified.move}")

        return MoveResult(success=True, message=str(game.state), events=events)

    def expire_idle_games(self, now: datetime | None = None) -> list[str]:
        """Resign on behalf of the side to move in matches idle for too long.

        Args:
            now: Current time (defaults to datetime.now())

        Returns:
            IDs of the matches that were resigned
        """
        if not self.settings.move_timeout_enabled:
            return []

        now = now or datetime.now()
        expired: list[str] = []

        with self._lock:
            for game_id, managed_game in self.games.items():
                game = managed_game.game
                if not game.is_ongoing():
                    continue
                idle = (now - managed_game.last_activity).total_seconds()
                if idle <= self.settings.move_timeout_seconds:
                    continue

                logger.warning(
                    f"Game {game_id}: {managed_game.players[game.turn]} timed out, resigning"
                )
                game.make_move(game.verify_move(Resign()))
                managed_game.last_activity = now
                expired.append(game_id)

        return expired

    def remove_game(self, game_id: str) -> bool:
        with self._lock:
            removed = self.games.pop(game_id, None) is not None
        if removed:
            logger.info(f"Game {game_id} removed")
        return removed

    def cleanup_stale_games(self, now: datetime | None = None) -> int:
        """Remove finished matches that haven't been touched recently.

        Returns:
            Number of matches cleaned up
        """
        now = now or datetime.now()
        max_age = self.settings.stale_game_seconds

        with self._lock:
            stale_games = [
                game_id
                for game_id, managed_game in self.games.items()
                if not managed_game.game.is_ongoing()
                and (now - managed_game.last_activity).total_seconds() > max_age
            ]
            for game_id in stale_games:
                del self.games[game_id]

        if stale_games:
            logger.info(f"Cleaned up {len(stale_games)} stale games")
        return len(stale_games)


# Global singleton instance
_game_service: GameService | None = None


def get_game_service() -> GameService:
    """Get the global game service instance."""
    global _game_service
    if _game_service is None:
        _game_service = GameService()
    return _game_service
