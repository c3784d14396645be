"""Rewrite rules that merge a corridor outline into walls already on the grid.

Rooms are stamped with plain writes. Corridors are stamped afterwards and
cross rooms and other corridors, so each corridor border cell is instead
*rewritten*: the rule for that cell's role (one of the four edges or four
corners of the corridor outline) looks at what is already there and decides
what the merged tile should be.

Edge rules, stated for ``TOP`` (the other edges mirror it):
    FLOOR                           -> FLOOR          floor always wins
    WALL_LEFT / WALL_RIGHT          -> CORNER_TOPLEFT / CORNER_TOPRIGHT
    CORNER_TOPLEFT / CORNER_TOPRIGHT   unchanged
    CORNER_BOTTOM*                  -> FLOOR
    WALL_BOTTOM                     -> FLOOR
    WALL_BOTTOMLEFT / RIGHT         -> CORNER_TOPLEFT / CORNER_TOPRIGHT
    anything else                   -> WALL_TOP

Corner rules, stated for ``TOP_LEFT``:
    FLOOR                           -> FLOOR
    WALL_TOP / WALL_LEFT               unchanged
    WALL_RIGHT                      -> CORNER_TOPRIGHT
    WALL_BOTTOM                     -> CORNER_BOTTOMLEFT
    CORNER_TOPLEFT / TOPRIGHT / BOTTOMLEFT   unchanged
    CORNER_BOTTOMRIGHT              -> FLOOR
    WALL_BOTTOMRIGHT                -> BOWTIE_TR_BL
    WALL_BOTTOMLEFT                 -> BOWTIE_TL_BR
    anything else                   -> WALL_TOPLEFT

Every table is closed under its own results: a tile a rule produces is left
alone by that same rule, so stamping the same outline twice changes nothing.
"""

from __future__ import annotations

from enum import Enum, auto

import numpy as np

from undercroft.environment.tile_types import TILE_CODE_LIMIT, TileCode

T = TileCode


class WallRole(Enum):
    """Position of a cell on a corridor outline."""

    TOP = auto()
    BOTTOM = auto()
    LEFT = auto()
    RIGHT = auto()
    TOP_LEFT = auto()
    TOP_RIGHT = auto()
    BOTTOM_LEFT = auto()
    BOTTOM_RIGHT = auto()


# role -> (explicit rules, result for every tile not listed)
_RULES: dict[WallRole, tuple[dict[TileCode, TileCode], TileCode]] = {
    WallRole.TOP: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_LEFT: T.CORNER_TOPLEFT,
            T.WALL_RIGHT: T.CORNER_TOPRIGHT,
            T.CORNER_TOPLEFT: T.CORNER_TOPLEFT,
            T.CORNER_TOPRIGHT: T.CORNER_TOPRIGHT,
            T.CORNER_BOTTOMLEFT: T.FLOOR,
            T.CORNER_BOTTOMRIGHT: T.FLOOR,
            T.WALL_BOTTOM: T.FLOOR,
            T.WALL_BOTTOMRIGHT: T.CORNER_TOPRIGHT,
            T.WALL_BOTTOMLEFT: T.CORNER_TOPLEFT,
        },
        T.WALL_TOP,
    ),
    WallRole.BOTTOM: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_LEFT: T.CORNER_BOTTOMLEFT,
            T.WALL_RIGHT: T.CORNER_BOTTOMRIGHT,
            T.CORNER_BOTTOMLEFT: T.CORNER_BOTTOMLEFT,
            T.CORNER_BOTTOMRIGHT: T.CORNER_BOTTOMRIGHT,
            T.CORNER_TOPLEFT: T.FLOOR,
            T.CORNER_TOPRIGHT: T.FLOOR,
            T.WALL_TOP: T.FLOOR,
            T.WALL_TOPLEFT: T.CORNER_BOTTOMLEFT,
            T.WALL_TOPRIGHT: T.CORNER_BOTTOMRIGHT,
        },
        T.WALL_BOTTOM,
    ),
    WallRole.LEFT: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_TOP: T.CORNER_TOPLEFT,
            T.WALL_BOTTOM: T.CORNER_BOTTOMLEFT,
            T.WALL_RIGHT: T.FLOOR,
            T.CORNER_TOPLEFT: T.CORNER_TOPLEFT,
            T.CORNER_BOTTOMLEFT: T.CORNER_BOTTOMLEFT,
            T.CORNER_TOPRIGHT: T.FLOOR,
            T.CORNER_BOTTOMRIGHT: T.FLOOR,
            T.WALL_TOPRIGHT: T.CORNER_TOPLEFT,
            T.WALL_BOTTOMRIGHT: T.CORNER_BOTTOMLEFT,
        },
        T.WALL_LEFT,
    ),
    WallRole.RIGHT: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_TOP: T.CORNER_TOPRIGHT,
            T.WALL_BOTTOM: T.CORNER_BOTTOMRIGHT,
            T.WALL_LEFT: T.FLOOR,
            T.CORNER_TOPRIGHT: T.CORNER_TOPRIGHT,
            T.CORNER_BOTTOMRIGHT: T.CORNER_BOTTOMRIGHT,
            T.CORNER_TOPLEFT: T.FLOOR,
            T.CORNER_BOTTOMLEFT: T.FLOOR,
            T.WALL_TOPLEFT: T.CORNER_TOPRIGHT,
            T.WALL_BOTTOMLEFT: T.CORNER_BOTTOMRIGHT,
        },
        T.WALL_RIGHT,
    ),
    WallRole.TOP_LEFT: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_TOP: T.WALL_TOP,
            T.WALL_LEFT: T.WALL_LEFT,
            T.WALL_RIGHT: T.CORNER_TOPRIGHT,
            T.WALL_BOTTOM: T.CORNER_BOTTOMLEFT,
            T.CORNER_TOPLEFT: T.CORNER_TOPLEFT,
            T.CORNER_TOPRIGHT: T.CORNER_TOPRIGHT,
            T.CORNER_BOTTOMLEFT: T.CORNER_BOTTOMLEFT,
            T.CORNER_BOTTOMRIGHT: T.FLOOR,
            T.WALL_BOTTOMRIGHT: T.BOWTIE_TR_BL,
            T.WALL_BOTTOMLEFT: T.BOWTIE_TL_BR,
            T.BOWTIE_TR_BL: T.BOWTIE_TR_BL,
            T.BOWTIE_TL_BR: T.BOWTIE_TL_BR,
        },
        T.WALL_TOPLEFT,
    ),
    WallRole.TOP_RIGHT: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_TOP: T.WALL_TOP,
            T.WALL_RIGHT: T.WALL_RIGHT,
            T.WALL_LEFT: T.CORNER_TOPLEFT,
            T.WALL_BOTTOM: T.CORNER_BOTTOMRIGHT,
            T.CORNER_TOPLEFT: T.CORNER_TOPLEFT,
            T.CORNER_TOPRIGHT: T.CORNER_TOPRIGHT,
            T.CORNER_BOTTOMRIGHT: T.CORNER_BOTTOMRIGHT,
            T.CORNER_BOTTOMLEFT: T.FLOOR,
            T.WALL_BOTTOMRIGHT: T.BOWTIE_TR_BL,
            T.WALL_BOTTOMLEFT: T.BOWTIE_TL_BR,
            T.BOWTIE_TR_BL: T.BOWTIE_TR_BL,
            T.BOWTIE_TL_BR: T.BOWTIE_TL_BR,
        },
        T.WALL_TOPRIGHT,
    ),
    WallRole.BOTTOM_LEFT: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_BOTTOM: T.WALL_BOTTOM,
            T.WALL_LEFT: T.WALL_LEFT,
            T.WALL_TOP: T.CORNER_TOPLEFT,
            T.WALL_RIGHT: T.CORNER_BOTTOMRIGHT,
            T.WALL_TOPLEFT: T.WALL_LEFT,
            T.CORNER_TOPLEFT: T.CORNER_TOPLEFT,
            T.CORNER_TOPRIGHT: T.FLOOR,
            T.CORNER_BOTTOMLEFT: T.CORNER_BOTTOMLEFT,
            T.CORNER_BOTTOMRIGHT: T.CORNER_BOTTOMRIGHT,
            T.WALL_TOPRIGHT: T.BOWTIE_TR_BL,
            T.BOWTIE_TR_BL: T.BOWTIE_TR_BL,
        },
        T.WALL_BOTTOMLEFT,
    ),
    WallRole.BOTTOM_RIGHT: (
        {
            T.FLOOR: T.FLOOR,
            T.WALL_BOTTOM: T.WALL_BOTTOM,
            T.WALL_RIGHT: T.WALL_RIGHT,
            T.WALL_TOP: T.CORNER_TOPRIGHT,
            T.WALL_LEFT: T.CORNER_BOTTOMLEFT,
            T.WALL_TOPRIGHT: T.WALL_RIGHT,
            T.CORNER_TOPLEFT: T.FLOOR,
            T.CORNER_TOPRIGHT: T.CORNER_TOPRIGHT,
            T.CORNER_BOTTOMLEFT: T.CORNER_BOTTOMLEFT,
            T.CORNER_BOTTOMRIGHT: T.CORNER_BOTTOMRIGHT,
            T.WALL_TOPLEFT: T.BOWTIE_TL_BR,
            T.BOWTIE_TL_BR: T.BOWTIE_TL_BR,
        },
        T.WALL_BOTTOMRIGHT,
    ),
}


def _build_lookup(role: WallRole) -> np.ndarray:
    rules, fallback = _RULES[role]
    table = np.full(TILE_CODE_LIMIT, fallback, dtype=np.uint8)
    for existing, result in rules.items():
        table[existing] = result
    table.flags.writeable = False
    return table


_LOOKUPS: dict[WallRole, np.ndarray] = {role: _build_lookup(role) for role in WallRole}


def rewrite(role: WallRole, existing: int) -> TileCode:
    """Return the tile that replaces ``existing`` when a ``role`` cell is drawn."""
    rules, fallback = _RULES[role]
    return rules.get(TileCode(existing), fallback)


def lookup_table(role: WallRole) -> np.ndarray:
    """Read-only array mapping existing tile code -> rewritten code for ``role``.

    Indexing with a whole run of tiles (``table[tiles[xs, y]]``) rewrites it in
    one step.
    """
    return _LOOKUPS[role]
