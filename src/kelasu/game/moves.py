"""Move definitions and text parsing for Kelasu."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from kelasu.game.errors import (
    MOVE_SYNTAX,
    InvalidMergeCount,
    InvalidMergeKind,
    InvalidParameter,
    MissingParameter,
    UnknownMove,
)
from kelasu.game.pieces import PieceKind, UnknownPiece
from kelasu.game.position import Pos

logger = logging.getLogger(__name__)

__all__ = [
    "MOVE_SYNTAX",
    "DeclineDraw",
    "Draw",
    "Merge",
    "Move",
    "Relocate",
    "Resign",
    "parse_move",
    "parse_pos",
]


@dataclass(frozen=True)
class Resign:
    """Concede the game to the opponent."""

    def __str__(self) -> str:
        return "resign"


@dataclass(frozen=True)
class Draw:
    """Offer a draw, or accept one that is on the table."""

    def __str__(self) -> str:
        return "draw"


@dataclass(frozen=True)
class DeclineDraw:
    """Refuse the draw currently on offer."""

    def __str__(self) -> str:
        return "decline"


@dataclass(frozen=True)
class Relocate:
    """Move the piece at from_pos to to_pos.

    Attributes:
        from_pos: Source position
        to_pos: Destination position
    """

    from_pos: Pos
    to_pos: Pos

    def __str__(self) -> str:
        return f"move {self.from_pos} to {self.to_pos}"


@dataclass(frozen=True)
class Merge:
    """Sacrifice a group of Blanks to transform the destination Blank.

    Attributes:
        kind: Kind the destination piece becomes
        pieces: Every position in the group; the last one is the destination
    """

    kind: PieceKind
    pieces: tuple[Pos, ...]

    @property
    def destination(self) -> Pos:
        return self.pieces[-1]

    @property
    def sacrificed(self) -> tuple[Pos, ...]:
        return self.pieces[:-1]

    def __str__(self) -> str:
        others = " ".join(str(p) for p in self.sacrificed)
        return f"merge {self.kind.name.lower()} at {self.destination} with {others}"


Move = Resign | Draw | DeclineDraw | Relocate | Merge

_INVALID_POS = "Positions must be <yx> coordinates from 00 to 99."


def parse_pos(token: str) -> Pos:
    """Parse a two-digit <yx> coordinate.

    Raises:
        InvalidParameter: If the token is not exactly two ASCII digits
    """
    if len(token) != 2 or not all(c in "0123456789" for c in token):
        raise InvalidParameter(_INVALID_POS)
    return Pos(int(token))


def parse_move(text: str) -> Move:
    """Parse a move command.

    Grammar (case-insensitive, whitespace separated):
        move <yx> to <yx>
        merge <piece> at <yx> with <yx> <yx> ...
        resign | exit | quit
        draw
        decline

    Raises:
        InvalidMoveSyntax: If the text is malformed
        InvalidMergeKind: If the merge target cannot be merged into
        InvalidMergeCount: If a merge lists the wrong number of positions
    """
    tokens = iter(text.strip().lower().split())

    verb = _next_token(tokens, "What kind of move did you want to make?")
    match verb:
        case "resign" | "exit" | "quit":
            return Resign()
        case "draw":
            return Draw()
        case "decline":
            return DeclineDraw()
        case "move":
            return _parse_relocate(tokens)
        case "merge":
            return _parse_merge(tokens)
        case _:
            logger.debug(f"Unknown move verb: {verb!r}")
            raise UnknownMove(verb)


def _next_token(tokens: Iterator[str], on_missing: str) -> str:
    token = next(tokens, None)
    if token is None:
        raise MissingParameter(on_missing)
    return token


def _expect_keyword(
    tokens: Iterator[str],
    keyword: str,
    on_missing: str,
    error: type[InvalidParameter | MissingParameter] = InvalidParameter,
) -> None:
    if _next_token(tokens, on_missing) != keyword:
        raise error(f"missing '{keyword}'")


def _parse_relocate(tokens: Iterator[str]) -> Relocate:
    from_pos = parse_pos(_next_token(tokens, "From where?"))
    _expect_keyword(tokens, "to", "To where?")
    to_pos = parse_pos(_next_token(tokens, "Where to?"))
    return Relocate(from_pos=from_pos, to_pos=to_pos)


def _parse_merge(tokens: Iterator[str]) -> Merge:
    try:
        kind = PieceKind.from_name(_next_token(tokens, "What do you want to merge into?"))
    except UnknownPiece:
        raise InvalidParameter("Specify what kind of piece you want to merge into.") from None

    cost = kind.merge_cost
    if cost is None:
        raise InvalidMergeKind()

    _expect_keyword(tokens, "at", "At where?", MissingParameter)
    destination = parse_pos(_next_token(tokens, "At where?"))
    _expect_keyword(tokens, "with", "With which other pieces?", MissingParameter)

    others = [parse_pos(token) for token in tokens]
    if len(others) != cost - 1:
        raise InvalidMergeCount(cost)

    return Merge(kind=kind, pieces=(*others, destination))
