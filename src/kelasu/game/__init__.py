"""Rules engine for Kelasu."""

from kelasu.game.board import Board
from kelasu.game.board_parser import STANDARD_LAYOUT, BoardParseError
from kelasu.game.engine import Game, GameEvent, GameEventType
from kelasu.game.errors import (
    MOVE_SYNTAX,
    InvalidMove,
    InvalidMoveSyntax,
    KelasuError,
    MoveCommandError,
)
from kelasu.game.moves import DeclineDraw, Draw, Merge, Move, Relocate, Resign, parse_move
from kelasu.game.pieces import MoveKind, Piece, PieceKind, Team
from kelasu.game.position import VICTORY_TILES, Pos
from kelasu.game.state import Finished, GameState, Ongoing, Phase, WinReason, Winner
from kelasu.game.verifier import VerifiedMove, verify_move

__all__ = [
    # Position
    "Pos",
    "VICTORY_TILES",
    # Pieces
    "MoveKind",
    "Piece",
    "PieceKind",
    "Team",
    # Board
    "Board",
    "BoardParseError",
    "STANDARD_LAYOUT",
    # Moves
    "DeclineDraw",
    "Draw",
    "Merge",
    "Move",
    "Relocate",
    "Resign",
    "MOVE_SYNTAX",
    "parse_move",
    # Errors
    "KelasuError",
    "MoveCommandError",
    "InvalidMove",
    "InvalidMoveSyntax",
    # State
    "Finished",
    "GameState",
    "Ongoing",
    "Phase",
    "WinReason",
    "Winner",
    # Verification
    "VerifiedMove",
    "verify_move",
    # Engine
    "Game",
    "GameEvent",
    "GameEventType",
]
