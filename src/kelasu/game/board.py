"""Board representation for Kelasu."""

from collections.abc import Iterable, Iterator

from kelasu.game.board_parser import STANDARD_LAYOUT, format_tiles, parse_tiles
from kelasu.game.pieces import Piece, PieceKind, Team, Tile
from kelasu.game.position import BOARD_SIZE, CELL_COUNT, VICTORY_TILES, Pos

# Snapshot of all 100 tiles, used as a hashable repetition key
BoardSnapshot = tuple[Tile, ...]


class Board:
    """A 10x10 grid of tiles.

    Tiles are stored flat in index order (row * 10 + col). Equality and hashing
    are structural; use snapshot() when the board needs to be stored as a key,
    since the board itself is mutable.
    """

    __slots__ = ("tiles",)

    def __init__(self, tiles: Iterable[Tile] | None = None) -> None:
        self.tiles: list[Tile] = [None] * CELL_COUNT if tiles is None else list(tiles)
        if len(self.tiles) != CELL_COUNT:
            raise ValueError(f"Board needs exactly {CELL_COUNT} tiles, got {len(self.tiles)}")

    @classmethod
    def create_standard(cls) -> "Board":
        """Create the standard starting position."""
        return cls.from_string(STANDARD_LAYOUT)

    @classmethod
    def create_empty(cls) -> "Board":
        """Create an empty board (useful for tests and scenario setup)."""
        return cls()

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Parse a board from its text layout.

        Raises:
            BoardParseError: If the layout is malformed
        """
        return cls(parse_tiles(text))

    def to_string(self) -> str:
        """Format the board as its canonical text layout."""
        return format_tiles(self.tiles)

    def __getitem__(self, pos: Pos) -> Tile:
        return self.tiles[pos.index]

    def __setitem__(self, pos: Pos, tile: Tile) -> None:
        self.tiles[pos.index] = tile

    def __iter__(self) -> Iterator[tuple[Pos, Tile]]:
        for index, tile in enumerate(self.tiles):
            yield Pos(index), tile

    def is_empty(self, pos: Pos) -> bool:
        return self.tiles[pos.index] is None

    def get_pieces_for_team(self, team: Team) -> list[tuple[Pos, Piece]]:
        """Get every (position, piece) owned by a team."""
        return [(pos, tile) for pos, tile in self if tile is not None and tile.team is team]

    def piece_count(self, team: Team) -> int:
        """Count a team's pieces that are not Stones."""
        return sum(1 for _, piece in self.get_pieces_for_team(team) if not piece.is_stone)

    def stone_count(self, team: Team) -> int:
        """Count a team's Stones."""
        return sum(1 for _, piece in self.get_pieces_for_team(team) if piece.is_stone)

    def count_kind(self, team: Team, kind: PieceKind) -> int:
        return sum(1 for _, piece in self.get_pieces_for_team(team) if piece.kind is kind)

    def copy(self) -> "Board":
        return Board(self.tiles)

    def snapshot(self) -> BoardSnapshot:
        """Get an immutable copy of the tiles."""
        return tuple(self.tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.tiles == other.tiles

    def __hash__(self) -> int:
        return hash(self.snapshot())

    def __repr__(self) -> str:
        return f"Board.from_string({self.to_string()!r})"

    def render(self) -> str:
        """Render the board for display, with row and column labels.

        Empty victory tiles are drawn as ":".
        """
        lines = ["   " + " ".join(str(col) for col in range(BOARD_SIZE))]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                pos = Pos.from_coords(row, col)
                tile = self[pos]
                if tile is not None:
                    cells.append(tile.glyph)
                elif pos in VICTORY_TILES:
                    cells.append(":")
                else:
                    cells.append(" ")
            lines.append(f"{row} |" + "|".join(cells) + "|")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
