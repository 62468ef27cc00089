"""Board coordinates and compass geometry for Kelasu.

Positions are a single integer ``row * 10 + col`` on the 10x10 grid. Row 0
is Blue's back row and row 9 is Red's.
"""

from dataclasses import dataclass

BOARD_SIZE = 10
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# Unit direction as (dx, dy): dx along columns, dy along rows
Direction = tuple[int, int]

ORTHOGONAL_DIRECTIONS: tuple[Direction, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True, order=True)
class Pos:
    """A cell on the board.

    Attributes:
        index: Cell index in [0, 99], equal to row * 10 + col
    """

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index < CELL_COUNT:
            raise ValueError(f"Position out of range: {self.index}")

    @classmethod
    def from_coords(cls, row: int, col: int) -> "Pos":
        """Create a position from a row and column."""
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise ValueError(f"Coordinates out of range: ({row}, {col})")
        return cls(row * BOARD_SIZE + col)

    @property
    def row(self) -> int:
        return self.index // BOARD_SIZE

    @property
    def col(self) -> int:
        return self.index % BOARD_SIZE

    def dir_to(self, other: "Pos") -> tuple[Direction, int] | None:
        """Get the compass direction and distance to another position.

        Returns:
            ((dx, dy), distance) with dx, dy in {-1, 0, 1}, or None if the two
            cells do not share a row, column or diagonal (including self)
        """
        dx = other.col - self.col
        dy = other.row - self.row

        # Exactly one of "straight" and "diagonal" holds for a real ray;
        # both hold only when the positions are equal.
        if (dx == 0 or dy == 0) == (abs(dx) == abs(dy)):
            return None

        return (_sign(dx), _sign(dy)), max(abs(dx), abs(dy))

    def shift(self, dx: int, dy: int) -> "Pos | None":
        """Translate by (dx, dy). Returns None if the result leaves the board.

        Row and column are bounded separately, so a shift never wraps from
        one row onto the next.
        """
        col = self.col + dx
        row = self.row + dy
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            return None
        return Pos(row * BOARD_SIZE + col)

    def neighbors(self) -> list["Pos"]:
        """Get the orthogonally adjacent positions that are on the board."""
        shifted = (self.shift(dx, dy) for dx, dy in ORTHOGONAL_DIRECTIONS)
        return [p for p in shifted if p is not None]

    def __str__(self) -> str:
        return f"{self.row}{self.col}"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def all_positions() -> list[Pos]:
    """Get every position on the board in index order."""
    return [Pos(i) for i in range(CELL_COUNT)]


# The four center cells; holding all of them wins by occupation
VICTORY_TILES: tuple[Pos, ...] = (Pos(44), Pos(45), Pos(54), Pos(55))
