"""
Tile codes produced by the tile synthesizer.

A tile code is the index of the tile's artwork in the tileset image, read row
by row (``code = row * TILESET_WIDTH + column``). Keeping the codes equal to
atlas indices means a rendering collaborator can clip the tileset with
``atlas_rect()`` and nothing else.

Three families of wall tiles exist:
- ``WALL_*``: pieces of a single room outline (straight runs and the four
  convex outline corners).
- ``CORNER_*``: concave corners, written where two independently stamped
  outlines meet and the rewrite rules merge them.
- ``BOWTIE_*``: two corners touching at a single cell along a diagonal.

``WALL`` is the undifferentiated fill behind everything.
"""

from enum import IntEnum

import numpy as np

from undercroft.config import TILESET_WIDTH
from undercroft.types import PixelRect


class TileCode(IntEnum):
    """Tile codes, valued as atlas indices in a TILESET_WIDTH-wide tileset."""

    WALL_TOPLEFT = 0
    WALL_TOP = 1
    WALL_TOPRIGHT = 2
    CORNER_BOTTOMRIGHT = 3
    CORNER_BOTTOMLEFT = 4
    WALL = 5
    WALL_LEFT = TILESET_WIDTH
    FLOOR = TILESET_WIDTH + 1
    WALL_RIGHT = TILESET_WIDTH + 2
    CORNER_TOPRIGHT = TILESET_WIDTH + 3
    CORNER_TOPLEFT = TILESET_WIDTH + 4
    WALL_BOTTOMLEFT = TILESET_WIDTH * 2
    WALL_BOTTOM = TILESET_WIDTH * 2 + 1
    WALL_BOTTOMRIGHT = TILESET_WIDTH * 2 + 2
    BOWTIE_TR_BL = TILESET_WIDTH * 2 + 3
    BOWTIE_TL_BR = TILESET_WIDTH * 2 + 4


# Size of lookup tables indexed by tile code.
TILE_CODE_LIMIT = max(TileCode) + 1

# Text rendering of each tile, used by TileMap.to_text() and the CLI preview.
GLYPHS: dict[TileCode, str] = {
    TileCode.WALL: " ",
    TileCode.FLOOR: ".",
    TileCode.WALL_TOP: "─",
    TileCode.WALL_BOTTOM: "─",
    TileCode.WALL_LEFT: "│",
    TileCode.WALL_RIGHT: "│",
    TileCode.WALL_TOPLEFT: "┌",
    TileCode.WALL_TOPRIGHT: "┐",
    TileCode.WALL_BOTTOMLEFT: "└",
    TileCode.WALL_BOTTOMRIGHT: "┘",
    TileCode.CORNER_TOPLEFT: "┘",
    TileCode.CORNER_TOPRIGHT: "└",
    TileCode.CORNER_BOTTOMLEFT: "┐",
    TileCode.CORNER_BOTTOMRIGHT: "┌",
    TileCode.BOWTIE_TR_BL: "┼",
    TileCode.BOWTIE_TL_BR: "┼",
}


def is_floor(code: int) -> bool:
    return code == TileCode.FLOOR


def is_wall(code: int) -> bool:
    """Everything that is not floor blocks movement, background included."""
    return code != TileCode.FLOOR


def glyph_table() -> np.ndarray:
    """Return a lookup array mapping tile code -> glyph string."""
    table = np.full(TILE_CODE_LIMIT, "?", dtype="U1")
    for code, glyph in GLYPHS.items():
        table[code] = glyph
    return table


def atlas_rect(
    code: int, tile_size: int, tileset_width: int = TILESET_WIDTH
) -> PixelRect:
    """Pixel rectangle ``(x, y, w, h)`` of a tile's artwork in the tileset.

    Args:
        code: The tile code (atlas index).
        tile_size: Edge length of one tile in pixels.
        tileset_width: Number of tiles per tileset row.
    """
    column = code % tileset_width
    row = code // tileset_width
    return (column * tile_size, row * tile_size, tile_size, tile_size)
