"""Move legality checks for Kelasu.

verify_move() is the only way to obtain a VerifiedMove, and Game.make_move()
only accepts VerifiedMove. Verification never mutates anything.
"""

import logging
from typing import assert_never

from kelasu.game.board import Board
from kelasu.game.errors import (
    DrawNotOffered,
    DrawOffered,
    EmptyTile,
    GameOver,
    HomeMerge,
    InvalidMergeCount,
    InvalidMergeKind,
    InvalidPieceMove,
    NonPolyominoMerge,
    NotYourPiece,
    PieceMoveReason,
)
from kelasu.game.moves import DeclineDraw, Draw, Merge, Move, Relocate, Resign
from kelasu.game.pieces import MoveKind, PieceKind, Team
from kelasu.game.polyomino import PolyominoError, verify_polyomino
from kelasu.game.position import Direction, Pos
from kelasu.game.state import Finished, GameState, Ongoing

logger = logging.getLogger(__name__)

_VERIFIER_TOKEN = object()


class VerifiedMove:
    """A move that passed verify_move() against a specific game state.

    Not constructible outside this module; use verify_move().
    """

    __slots__ = ("_move",)

    def __init__(self, move: Move, *, _token: object = None) -> None:
        if _token is not _VERIFIER_TOKEN:
            raise TypeError("VerifiedMove can only be created by verify_move()")
        self._move = move

    @property
    def move(self) -> Move:
        return self._move

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VerifiedMove):
            return NotImplemented
        return self._move == other._move

    def __hash__(self) -> int:
        return hash(self._move)

    def __repr__(self) -> str:
        return f"VerifiedMove({self._move!r})"


def assume_verified(move: Move) -> VerifiedMove:
    """Wrap a move as verified WITHOUT checking it.

    Escape hatch for replaying moves that are already known to be legal.
    Applying an illegal move this way leaves the game in an undefined state.
    """
    logger.debug(f"Skipping verification for {move}")
    return VerifiedMove(move, _token=_VERIFIER_TOKEN)


def verify_move(state: GameState, turn: Team, board: Board, move: Move) -> VerifiedMove:
    """Check a move against the current game.

    Args:
        state: Current game state
        turn: Team to move
        board: Current board
        move: Candidate move

    Returns:
        The move wrapped as a VerifiedMove

    Raises:
        InvalidMove: A subclass describing the rule that was broken
    """
    match state:
        case Finished():
            raise GameOver()
        case Ongoing(draw_offered=draw_offered):
            pass
        case _:
            assert_never(state)

    # A pending draw must be answered before anything else happens
    if draw_offered and not isinstance(move, Resign | Draw | DeclineDraw):
        raise DrawOffered()

    match move:
        case Resign() | Draw():
            pass
        case DeclineDraw():
            if not draw_offered:
                raise DrawNotOffered()
        case Relocate(from_pos=from_pos, to_pos=to_pos):
            verify_piece_move(board, turn, from_pos, to_pos)
        case Merge():
            verify_merge(board, turn, move)
        case _:
            assert_never(move)

    return VerifiedMove(move, _token=_VERIFIER_TOKEN)


def verify_piece_move(board: Board, turn: Team, from_pos: Pos, to_pos: Pos) -> None:
    """Check that the piece at from_pos may move to to_pos.

    Power is not checked here; the turn passes as soon as it runs out.

    Raises:
        EmptyTile: No piece at from_pos
        NotYourPiece: The piece belongs to the other team
        InvalidPieceMove: The piece's movement rules forbid it
    """
    piece = board[from_pos]
    if piece is None:
        raise EmptyTile()
    if piece.team is not turn:
        raise NotYourPiece()

    ray = from_pos.dir_to(to_pos)
    if ray is None:
        raise InvalidPieceMove(PieceMoveReason.NON_COMPASS_MOVE)
    direction, distance = ray

    rule = piece.rule_for(direction)
    if rule is None:
        raise InvalidPieceMove(PieceMoveReason.NON_COMPASS_MOVE)
    move_kind, max_range = rule

    if distance > max_range:
        raise InvalidPieceMove(PieceMoveReason.TOO_FAR)

    # Recall teleports home, so only it may pass over pieces
    if move_kind is not MoveKind.RECALL:
        for pos in path_between(from_pos, direction, distance):
            if board[pos] is not None:
                raise InvalidPieceMove(PieceMoveReason.BLOCKED)

    target = board[to_pos]
    if target is not None and target.team is turn:
        raise InvalidPieceMove(PieceMoveReason.FRIENDLY_FIRE)

    match move_kind:
        case MoveKind.MOVE_ONLY if target is not None:
            raise InvalidPieceMove(PieceMoveReason.BLOCKED)
        case MoveKind.CAPTURE_ONLY | MoveKind.CONVERT if target is None:
            raise InvalidPieceMove(PieceMoveReason.MUST_CAPTURE)
        case MoveKind.MOVE_MOVE_CAPTURE if distance == 1 and target is not None:
            raise InvalidPieceMove(PieceMoveReason.RUNNER_NO_MELEE)
        case MoveKind.RECALL if distance < max_range:
            raise InvalidPieceMove(PieceMoveReason.CANNOT_RECALL_HERE)
        case _:
            pass


def path_between(from_pos: Pos, direction: Direction, distance: int) -> list[Pos]:
    """Get the cells strictly between from_pos and the cell `distance` steps away."""
    dx, dy = direction
    path: list[Pos] = []
    current = from_pos
    for _ in range(distance - 1):
        step = current.shift(dx, dy)
        if step is None:
            break
        path.append(step)
        current = step
    return path


def verify_merge(board: Board, turn: Team, merge: Merge) -> None:
    """Check that a merge is legal.

    Every position must hold one of the mover's Blanks outside their home rows,
    and together the positions must form one connected group. Connectivity is
    checked on a copy, so the destination stays last in merge.pieces.

    Raises:
        InvalidMergeKind: The target kind cannot be merged into
        InvalidMergeCount: Wrong number of positions for the target kind
        EmptyTile / NotYourPiece / InvalidPieceMove / HomeMerge: A bad position
        NonPolyominoMerge: The positions are disconnected or repeated
    """
    cost = merge.kind.merge_cost
    if cost is None:
        raise InvalidMergeKind()
    if len(merge.pieces) != cost:
        raise InvalidMergeCount(cost)

    home_rows = turn.home_rows
    for pos in merge.pieces:
        piece = board[pos]
        if piece is None:
            raise EmptyTile()
        if piece.team is not turn:
            raise NotYourPiece()
        if piece.kind is not PieceKind.BLANK:
            raise InvalidPieceMove(PieceMoveReason.NON_BLANK_MERGE)
        if pos.row in home_rows:
            raise HomeMerge()

    try:
        verify_polyomino(list(merge.pieces))
    except PolyominoError as err:
        raise NonPolyominoMerge(err.reason) from err
