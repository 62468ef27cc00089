"""Piece definitions for Kelasu."""

from dataclasses import dataclass, replace
from enum import Enum

from kelasu.game.position import Direction


class UnknownPiece(ValueError):
    """Raised when a piece name or glyph is not recognized."""

    def __init__(self, text: str = "") -> None:
        super().__init__("I don't recognize that piece. Check for spelling issues.")
        self.text = text


class Team(Enum):
    """The two sides. Blue starts at the top (rows 0-1) and moves first."""

    BLUE = "blue"
    RED = "red"

    def other(self) -> "Team":
        """Get the opposing team."""
        return Team.RED if self is Team.BLUE else Team.BLUE

    def __invert__(self) -> "Team":
        return self.other()

    @property
    def home_rows(self) -> range:
        """Rows where this team may not merge."""
        return range(0, 2) if self is Team.BLUE else range(8, 10)

    def __str__(self) -> str:
        return self.name.capitalize()


class MoveKind(Enum):
    """How a piece may use one of its rays."""

    MOVE_ONLY = "move_only"  # Destination must be empty
    CAPTURE_ONLY = "capture_only"  # Destination must hold an enemy
    MOVE_CAPTURE = "move_capture"  # Either
    MOVE_MOVE_CAPTURE = "move_move_capture"  # Either, but no capture at distance 1
    RECALL = "recall"  # Must travel the full range, ignores blockers
    CONVERT = "convert"  # Must target an enemy; Diplomat diagonals convert it


# One (kind, max range) entry per ray
RayRule = tuple[MoveKind, int]

# Ray slot order: forward, fore-diagonal, side, back-diagonal, back
FORWARD, FORE_DIAGONAL, SIDE, BACK_DIAGONAL, BACK = range(5)


class PieceKind(Enum):
    """Piece kinds. Values are the lowercase board glyphs."""

    BLANK = "b"
    WARRIOR = "w"
    RUNNER = "r"
    DIPLOMAT = "d"
    CHAMPION = "c"
    GENERAL = "g"
    STONE = "s"

    @classmethod
    def from_name(cls, name: str) -> "PieceKind":
        """Look up a kind by its full name, case-insensitively."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise UnknownPiece(name) from None

    @classmethod
    def from_glyph(cls, glyph: str) -> "PieceKind":
        """Look up a kind by its single-letter glyph, case-insensitively."""
        try:
            return cls(glyph.lower())
        except ValueError:
            raise UnknownPiece(glyph) from None

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    def moves(self) -> tuple[RayRule, ...]:
        """Get the movement table as seen by Blue.

        Order: forward, fore-diagonal, side, back-diagonal, back.
        """
        return _MOVE_TABLE[self]

    @property
    def merge_cost(self) -> int | None:
        """Number of Blanks, destination included, needed to create this kind.

        None for Blank, which cannot be a merge target.
        """
        return _MERGE_COSTS.get(self)

    def __str__(self) -> str:
        return self.display_name


_MO, _CO, _MC, _MMC, _RC, _CV = (
    MoveKind.MOVE_ONLY,
    MoveKind.CAPTURE_ONLY,
    MoveKind.MOVE_CAPTURE,
    MoveKind.MOVE_MOVE_CAPTURE,
    MoveKind.RECALL,
    MoveKind.CONVERT,
)

_MOVE_TABLE: dict[PieceKind, tuple[RayRule, ...]] = {
    PieceKind.BLANK: ((_MO, 1), (_MO, 0), (_MO, 1), (_MO, 0), (_MO, 0)),
    PieceKind.WARRIOR: ((_MC, 1), (_CO, 1), (_MC, 1), (_MO, 0), (_RC, 9)),
    PieceKind.RUNNER: ((_MO, 0), (_MMC, 10), (_MO, 0), (_MMC, 10), (_MO, 0)),
    PieceKind.DIPLOMAT: ((_MO, 3), (_CV, 1), (_MO, 3), (_CV, 1), (_MO, 3)),
    PieceKind.CHAMPION: ((_MC, 10), (_MC, 1), (_MC, 3), (_MO, 0), (_MO, 10)),
    PieceKind.GENERAL: ((_MC, 10),) * 5,
    PieceKind.STONE: ((_MO, 0),) * 5,
}

_MERGE_COSTS: dict[PieceKind, int] = {
    PieceKind.WARRIOR: 2,
    PieceKind.RUNNER: 4,
    PieceKind.DIPLOMAT: 4,
    PieceKind.CHAMPION: 5,
    PieceKind.GENERAL: 10,
    PieceKind.STONE: 21,
}

MERGEABLE_KINDS: tuple[PieceKind, ...] = tuple(_MERGE_COSTS)


def ray_index(direction: Direction) -> int | None:
    """Map a unit direction (dx, dy) to its ray slot.

    Positive dy is "forward" in the table; left and right share a slot.
    Returns None for anything that is not a unit compass vector.
    """
    dx, dy = direction
    return _RAY_SLOTS.get((abs(dx), dy))


_RAY_SLOTS: dict[Direction, int] = {
    (0, 1): FORWARD,
    (1, 1): FORE_DIAGONAL,
    (1, 0): SIDE,
    (1, -1): BACK_DIAGONAL,
    (0, -1): BACK,
}


@dataclass(frozen=True)
class Piece:
    """A piece on the board.

    Attributes:
        team: Owning team
        kind: Piece kind
    """

    team: Team
    kind: PieceKind

    def moves(self) -> tuple[RayRule, ...]:
        """Get the movement table adjusted for this piece's team.

        Red faces the other way, so its forward and back rays are swapped.
        """
        table = list(self.kind.moves())
        if self.team is Team.RED:
            table[FORWARD], table[BACK] = table[BACK], table[FORWARD]
        return tuple(table)

    def rule_for(self, direction: Direction) -> RayRule | None:
        """Get the (kind, max range) rule for moving in a direction."""
        slot = ray_index(direction)
        if slot is None:
            return None
        return self.moves()[slot]

    def with_team(self, team: Team) -> "Piece":
        return replace(self, team=team)

    def with_kind(self, kind: PieceKind) -> "Piece":
        return replace(self, kind=kind)

    @property
    def is_stone(self) -> bool:
        return self.kind is PieceKind.STONE

    @property
    def glyph(self) -> str:
        """Board glyph: uppercase for Blue, lowercase for Red."""
        letter = self.kind.value
        return letter.upper() if self.team is Team.BLUE else letter

    @classmethod
    def from_glyph(cls, glyph: str) -> "Piece":
        team = Team.BLUE if glyph.isupper() else Team.RED
        return cls(team=team, kind=PieceKind.from_glyph(glyph))

    def __str__(self) -> str:
        return f"{self.team} {self.kind}"


# A board cell: a piece or nothing
Tile = Piece | None

EMPTY_GLYPHS = frozenset(".:_")
