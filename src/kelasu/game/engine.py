"""Core game engine for Kelasu.

Game owns all mutable match state. The only way to change it is
make_move(), which takes a VerifiedMove produced by verify_move() against the
game's current state. A finished game never changes again.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, assert_never

from kelasu.game.board import Board, BoardSnapshot
from kelasu.game.errors import InvalidMove
from kelasu.game.moves import DeclineDraw, Draw, Merge, Move, Relocate, Resign, parse_move
from kelasu.game.pieces import PieceKind, Team
from kelasu.game.position import VICTORY_TILES, Pos
from kelasu.game.state import Finished, GameState, Ongoing, Phase, WinReason, Winner
from kelasu.game.verifier import VerifiedMove, verify_move, verify_piece_move

logger = logging.getLogger(__name__)

# A (turn, board) pair seen this many times ends the game in a draw
REPETITION_LIMIT = 4

# Blue turns in a row without a Blank moving or merging before a draw
STAGNATION_LIMIT = 64

_COMPASS_DIRECTIONS = [
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
]


class GameEventType(Enum):
    """Types of events produced by a move."""

    MOVE = "move"
    CAPTURE = "capture"
    CONVERSION = "conversion"
    MERGE = "merge"
    DRAW_OFFERED = "draw_offered"
    DRAW_DECLINED = "draw_declined"
    TURN_CHANGED = "turn_changed"
    GAME_OVER = "game_over"
    DRAW = "draw"


@dataclass
class GameEvent:
    """An event that happened while applying a move.

    Attributes:
        type: Type of event
        ply: Number of moves applied so far, including this one
        data: Event-specific data
    """

    type: GameEventType
    ply: int
    data: dict[str, Any] = field(default_factory=dict)


class Game:
    """A single Kelasu match.

    Attributes:
        board: Current board
        turn: Team to move
        power: Moves (or merged Blanks) the side to move may still spend this turn
        phase: Whether a draw offer is pending
        winner: Outcome once finished, None while ongoing
        win_reason: Why the game finished
        ply: Number of moves applied so far
        stagnation: Blue turns since a Blank last moved or merged
    """

    def __init__(self, board: Board, turn: Team = Team.BLUE) -> None:
        self.board = board
        self.turn = turn
        self.power = board.stone_count(turn)
        self.phase = Phase.RELOCATING
        self.winner: Winner | None = None
        self.win_reason: WinReason | None = None
        self.ply = 0
        self.stagnation = 0
        self._position_tracker: Counter[tuple[Team, BoardSnapshot]] = Counter()

    @classmethod
    def new(cls) -> "Game":
        """Create a game from the standard starting position, Blue to move."""
        return cls(Board.create_standard(), Team.BLUE)

    @classmethod
    def from_position(cls, turn: Team, board: Board) -> "Game":
        """Create a game from an arbitrary position."""
        return cls(board, turn)

    @property
    def state(self) -> GameState:
        if self.winner is not None:
            return Finished(self.winner)
        return Ongoing(draw_offered=self.phase is Phase.DRAW_PENDING)

    @property
    def draw_offered(self) -> bool:
        return self.winner is None and self.phase is Phase.DRAW_PENDING

    def is_ongoing(self) -> bool:
        return self.winner is None

    def repetitions(self, turn: Team, board: Board) -> int:
        """How many times a (turn, board) pair has been reached at a turn change."""
        return self._position_tracker[(turn, board.snapshot())]

    def verify_move(self, move: Move) -> VerifiedMove:
        """Verify a move against the current state.

        Raises:
            InvalidMove: If the move is illegal
        """
        try:
            return verify_move(self.state, self.turn, self.board, move)
        except InvalidMove as err:
            logger.debug(f"Move rejected for {self.turn}: {move} - {err}")
            raise

    def verify_move_str(self, text: str) -> VerifiedMove:
        """Parse and verify a move command.

        Raises:
            InvalidMoveSyntax: If the text cannot be parsed
            InvalidMove: If the move is illegal
        """
        return self.verify_move(parse_move(text))

    def make_move(self, verified: VerifiedMove) -> list[GameEvent]:
        """Apply a verified move. Mutates the game in place.

        Args:
            verified: Result of verify_move() on this game's current state

        Returns:
            Events describing what happened, in order

        Raises:
            TypeError: If given anything but a VerifiedMove
            RuntimeError: If the game is already finished
        """
        if not isinstance(verified, VerifiedMove):
            raise TypeError("make_move requires a VerifiedMove from verify_move()")
        if not self.is_ongoing():
            raise RuntimeError("make_move must only be called while the game is ongoing.")

        self.ply += 1
        events: list[GameEvent] = []
        move = verified.move

        match move:
            case Resign():
                self._finish(self.turn.other(), WinReason.RESIGNATION, events)
                return events
            case Draw():
                self._apply_draw(events)
                return events
            case DeclineDraw():
                self._apply_decline(events)
                return events
            case Relocate():
                self._apply_relocate(move, events)
            case Merge():
                self._apply_merge(move, events)
            case _:
                assert_never(move)

        self._post_move_checks(events)
        return events

    def _event(self, events: list[GameEvent], event_type: GameEventType, **data: Any) -> None:
        events.append(GameEvent(type=event_type, ply=self.ply, data=data))

    def _pass_turn(self, events: list[GameEvent]) -> None:
        self.turn = self.turn.other()
        self._event(events, GameEventType.TURN_CHANGED, turn=self.turn, power=self.power)

    def _apply_draw(self, events: list[GameEvent]) -> None:
        if self.phase is Phase.DRAW_PENDING:
            # The receiver answering "draw" accepts the offer
            self._finish(None, WinReason.AGREEMENT, events)
            return

        # Hand the offer to the opponent without spending power
        self.phase = Phase.DRAW_PENDING
        self._event(events, GameEventType.DRAW_OFFERED, team=self.turn)
        self._pass_turn(events)

    def _apply_decline(self, events: list[GameEvent]) -> None:
        if self.phase is not Phase.DRAW_PENDING:
            return
        self.phase = Phase.RELOCATING
        self._event(events, GameEventType.DRAW_DECLINED, team=self.turn)
        self._pass_turn(events)

    def _apply_relocate(self, move: Relocate, events: list[GameEvent]) -> None:
        piece = self.board[move.from_pos]
        if piece is None:
            raise RuntimeError(f"No piece at {move.from_pos}; move was not verified")

        self.power -= 1
        if piece.kind is PieceKind.BLANK:
            self.stagnation = 0

        self._event(
            events,
            GameEventType.MOVE,
            piece=piece,
            from_pos=move.from_pos,
            to_pos=move.to_pos,
        )

        target = self.board[move.to_pos]
        ray = move.from_pos.dir_to(move.to_pos)
        diagonal = ray is not None and 0 not in ray[0]

        if piece.kind is PieceKind.DIPLOMAT and diagonal and target is not None:
            # Diplomats convert on the diagonal instead of displacing
            converted = target.with_team(self.turn)
            self.board[move.to_pos] = converted
            self._event(events, GameEventType.CONVERSION, piece=converted, position=move.to_pos)
        else:
            if target is not None:
                self._event(events, GameEventType.CAPTURE, piece=target, position=move.to_pos)
            self.board[move.to_pos] = piece

        self.board[move.from_pos] = None

    def _apply_merge(self, move: Merge, events: list[GameEvent]) -> None:
        destination = self.board[move.destination]
        if destination is None:
            raise RuntimeError(f"No piece at {move.destination}; merge was not verified")

        self.stagnation = 0
        self.power -= len(move.pieces)

        for pos in move.sacrificed:
            self.board[pos] = None
        self.board[move.destination] = destination.with_kind(move.kind)

        self._event(
            events,
            GameEventType.MERGE,
            kind=move.kind,
            position=move.destination,
            sacrificed=move.sacrificed,
        )

    def _post_move_checks(self, events: list[GameEvent]) -> None:
        """Check for victory, then pass the turn once power is spent."""
        occupied = [self.board[pos] for pos in VICTORY_TILES]
        if all(piece is not None and piece.team is self.turn for piece in occupied):
            self._finish(self.turn, WinReason.OCCUPATION, events)
            return

        enemy = self.turn.other()
        enemy_stones = self.board.stone_count(enemy)
        if self.board.piece_count(enemy) == 0 or enemy_stones == 0:
            self._finish(self.turn, WinReason.DOMINATION, events)
            return

        if self.power > 0:
            return

        # The next side's power is its own Stone count
        self.power = enemy_stones
        self._pass_turn(events)

        key = (self.turn, self.board.snapshot())
        self._position_tracker[key] += 1
        if self._position_tracker[key] >= REPETITION_LIMIT:
            self._finish(None, WinReason.REPETITION, events)
            return

        if self.turn is Team.BLUE:
            self.stagnation += 1
            if self.stagnation > STAGNATION_LIMIT:
                self._finish(None, WinReason.STAGNATION, events)

    def _finish(self, team: Team | None, reason: WinReason, events: list[GameEvent]) -> None:
        self.winner = Winner(team)
        self.win_reason = reason
        self.phase = Phase.RELOCATING

        if self.winner.is_draw:
            self._event(events, GameEventType.DRAW, reason=reason)
        else:
            self._event(events, GameEventType.GAME_OVER, winner=team, reason=reason)

        logger.info(f"Game finished after {self.ply} moves: {self.winner} ({reason.value})")

    def legal_relocations(self) -> list[Relocate]:
        """Get every relocation the side to move could make right now.

        Empty while the game is finished or a draw offer is pending.
        """
        if not self.is_ongoing() or self.phase is Phase.DRAW_PENDING:
            return []

        relocations: list[Relocate] = []
        for from_pos, _ in self.board.get_pieces_for_team(self.turn):
            for to_pos in _ray_targets(from_pos):
                try:
                    verify_piece_move(self.board, self.turn, from_pos, to_pos)
                except InvalidMove:
                    continue
                relocations.append(Relocate(from_pos=from_pos, to_pos=to_pos))
        return relocations

    def __str__(self) -> str:
        return (
            f"{self.state}\n"
            f"{self.turn}'s turn.\n"
            f"Remaining Stone Power: {self.power}.\n"
            f"\n{self.board}\n"
        )


def _ray_targets(origin: Pos) -> list[Pos]:
    """Get every cell on one of the eight compass rays from origin."""
    targets: list[Pos] = []
    for dx, dy in _COMPASS_DIRECTIONS:
        current = origin.shift(dx, dy)
        while current is not None:
            targets.append(current)
            current = current.shift(dx, dy)
    return targets
