"""Board text layout parser for Kelasu.

Layout format:
    - Exactly 100 glyphs; all whitespace is ignored
    - "." or ":" (or "_") = empty cell (":" conventionally marks a victory tile)
    - Piece letters: s (stone), b (blank), w (warrior), r (runner),
      d (diplomat), c (champion), g (general)
    - Uppercase = Blue, lowercase = Red
"""

from kelasu.game.pieces import EMPTY_GLYPHS, Piece, Tile, UnknownPiece
from kelasu.game.position import BOARD_SIZE, CELL_COUNT, VICTORY_TILES

STANDARD_LAYOUT = """
BBBBBBBBBB
BBBBBBBBBB
S.S....S.S
..........
....::....
....::....
..........
s.s....s.s
bbbbbbbbbb
bbbbbbbbbb
"""

_VICTORY_INDICES = frozenset(p.index for p in VICTORY_TILES)


class BoardParseError(ValueError):
    """Raised when a board layout string is malformed."""


def parse_tiles(text: str) -> list[Tile]:
    """Parse a board layout string into 100 tiles.

    Args:
        text: Layout string, see module docstring

    Returns:
        List of 100 tiles in index order

    Raises:
        BoardParseError: If a glyph is unknown or the glyph count is not 100
    """
    tiles: list[Tile] = []
    for glyph in text:
        if glyph.isspace():
            continue
        if glyph in EMPTY_GLYPHS:
            tiles.append(None)
            continue
        try:
            tiles.append(Piece.from_glyph(glyph))
        except UnknownPiece:
            raise BoardParseError(f"Invalid tile in string: {glyph!r}") from None

    if len(tiles) < CELL_COUNT:
        raise BoardParseError(f"Not enough tiles: got {len(tiles)}, expected {CELL_COUNT}")
    if len(tiles) > CELL_COUNT:
        raise BoardParseError(f"Too many tiles: got {len(tiles)}, expected {CELL_COUNT}")

    return tiles


def format_tiles(tiles: list[Tile]) -> str:
    """Format tiles back into the canonical 10-line layout.

    Empty victory tiles are written as ":" and other empty cells as ".".
    """
    lines = []
    for row in range(BOARD_SIZE):
        chars = []
        for col in range(BOARD_SIZE):
            index = row * BOARD_SIZE + col
            tile = tiles[index]
            if tile is not None:
                chars.append(tile.glyph)
            elif index in _VICTORY_INDICES:
                chars.append(":")
            else:
                chars.append(".")
        lines.append("".join(chars))
    return "\n".join(lines)
