"""Tile synthesizer: rasterize rooms and corridors into a grid of tile codes.

Rooms never overlap, so they are stamped with plain writes. Corridors cross
rooms and each other, so every corridor border cell goes through the rewrite
rule for its role and merges with whatever is already on the grid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from undercroft.config import DEFAULT_CONFIG, DungeonConfig
from undercroft.environment.rewrite_rules import WallRole, lookup_table
from undercroft.environment.tile_types import TileCode, atlas_rect, glyph_table
from undercroft.types import (
    Bounds,
    GridTileCoord,
    GridTilePos,
    PixelRect,
    WorldTileCoord,
    WorldTilePos,
)
from undercroft.util.coordinates import Rect

if TYPE_CHECKING:
    from .generators.corridors import Corridor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TileMap:
    """A rasterized layout.

    Attributes:
        tiles: ``uint8`` array of tile codes, shape ``(width, height)``, indexed
            ``[x, y]``. Fortran order keeps x contiguous, so the buffer reads
            row by row. Read-only.
        origin: World coordinates of grid cell ``(0, 0)``.
        tile_size: Pixel size of one tile, for rendering collaborators.
        tileset_width: Tiles per row of the tileset image.
    """

    tiles: np.ndarray
    origin: WorldTilePos = (0, 0)
    tile_size: int = DEFAULT_CONFIG.tile_size
    tileset_width: int = DEFAULT_CONFIG.tileset_width

    @property
    def width(self) -> int:
        return int(self.tiles.shape[0])

    @property
    def height(self) -> int:
        return int(self.tiles.shape[1])

    def in_bounds(self, x: GridTileCoord, y: GridTileCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: GridTileCoord, y: GridTileCoord) -> TileCode:
        """Tile code at grid position ``(x, y)``.

        Raises:
            IndexError: If the position is outside the grid. Negative indices
                do not wrap around.
        """
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Tile ({x}, {y}) outside {self.width}x{self.height} grid"
            )
        return TileCode(int(self.tiles[x, y]))

    def world_tile_at(self, x: WorldTileCoord, y: WorldTileCoord) -> TileCode:
        """Tile code at layout coordinates ``(x, y)``."""
        gx, gy = self.to_grid(x, y)
        return self.tile_at(gx, gy)

    def to_grid(self, x: WorldTileCoord, y: WorldTileCoord) -> GridTilePos:
        return (x - self.origin[0], y - self.origin[1])

    @property
    def floor_mask(self) -> np.ndarray:
        """Boolean array, True where the tile is floor."""
        return self.tiles == TileCode.FLOOR

    def pixel_position(self, x: GridTileCoord, y: GridTileCoord) -> tuple[int, int]:
        """Top-left pixel of a grid cell when drawn at ``tile_size``."""
        return (x * self.tile_size, y * self.tile_size)

    def source_rect(self, x: GridTileCoord, y: GridTileCoord) -> PixelRect:
        """Tileset clip rectangle for the tile at grid position ``(x, y)``."""
        return atlas_rect(self.tile_at(x, y), self.tile_size, self.tileset_width)

    def to_text(self) -> str:
        """Render the grid as box-drawing text, one line per row."""
        if self.tiles.size == 0:
            return ""
        glyphs = glyph_table()[self.tiles]
        return "\n".join("".join(glyphs[:, y]) for y in range(self.height))


# =============================================================================
# STAMPING
# =============================================================================


def _rewrite(
    tiles: np.ndarray, role: WallRole, xs: slice | int, ys: slice | int
) -> None:
    """Rewrite a run of border cells in place through ``role``'s rule table."""
    tiles[xs, ys] = lookup_table(role)[tiles[xs, ys]]


def _stamp_room(tiles: np.ndarray, room: Rect, origin: WorldTilePos) -> None:
    left = room.left - origin[0]
    top = room.top - origin[1]
    right = left + room.width - 1
    bottom = top + room.height - 1

    tiles[left + 1 : right, top + 1 : bottom] = TileCode.FLOOR

    tiles[left, top] = TileCode.WALL_TOPLEFT
    tiles[right, top] = TileCode.WALL_TOPRIGHT
    tiles[left, bottom] = TileCode.WALL_BOTTOMLEFT
    tiles[right, bottom] = TileCode.WALL_BOTTOMRIGHT

    tiles[left + 1 : right, top] = TileCode.WALL_TOP
    tiles[left + 1 : right, bottom] = TileCode.WALL_BOTTOM
    tiles[left, top + 1 : bottom] = TileCode.WALL_LEFT
    tiles[right, top + 1 : bottom] = TileCode.WALL_RIGHT


def _stamp_horizontal(tiles: np.ndarray, left: int, top: int, rect: Rect) -> None:
    # Floor runs along every column of the rect; caps sit one column outside.
    right = left + rect.width - 1
    bottom = top + rect.height - 1
    rows = slice(top + 1, bottom)
    run = slice(left, right + 1)

    _rewrite(tiles, WallRole.TOP_LEFT, left - 1, top)
    _rewrite(tiles, WallRole.LEFT, left - 1, rows)
    _rewrite(tiles, WallRole.BOTTOM_LEFT, left - 1, bottom)

    _rewrite(tiles, WallRole.TOP, run, top)
    tiles[run, rows] = TileCode.FLOOR
    _rewrite(tiles, WallRole.BOTTOM, run, bottom)

    _rewrite(tiles, WallRole.TOP_RIGHT, right + 1, top)
    _rewrite(tiles, WallRole.RIGHT, right + 1, rows)
    _rewrite(tiles, WallRole.BOTTOM_RIGHT, right + 1, bottom)


def _stamp_vertical(tiles: np.ndarray, left: int, top: int, rect: Rect) -> None:
    # Floor runs along every row of the rect; caps sit one row outside.
    right = left + rect.width - 1
    bottom = top + rect.height - 1
    columns = slice(left + 1, right)
    run = slice(top, bottom + 1)

    _rewrite(tiles, WallRole.TOP_LEFT, left, top - 1)
    _rewrite(tiles, WallRole.TOP, columns, top - 1)
    _rewrite(tiles, WallRole.TOP_RIGHT, right, top - 1)

    _rewrite(tiles, WallRole.LEFT, left, run)
    tiles[columns, run] = TileCode.FLOOR
    _rewrite(tiles, WallRole.RIGHT, right, run)

    _rewrite(tiles, WallRole.BOTTOM_LEFT, left, bottom + 1)
    _rewrite(tiles, WallRole.BOTTOM, columns, bottom + 1)
    _rewrite(tiles, WallRole.BOTTOM_RIGHT, right, bottom + 1)


def _stamp_corridor(
    tiles: np.ndarray, corridor: Corridor, origin: WorldTilePos
) -> None:
    left = corridor.left - origin[0]
    top = corridor.top - origin[1]
    if corridor.horizontal:
        _stamp_horizontal(tiles, left, top, corridor.rect)
    else:
        _stamp_vertical(tiles, left, top, corridor.rect)


def _covers(bounds: Bounds, rect: Rect) -> bool:
    return (
        bounds.left <= rect.left
        and bounds.top <= rect.top
        and rect.right <= bounds.right
        and rect.bottom <= bounds.bottom
    )


def rasterize(
    rooms: Iterable[Rect],
    corridors: Iterable[Corridor],
    bounds: Bounds,
    config: DungeonConfig = DEFAULT_CONFIG,
) -> TileMap:
    """Stamp rooms, then corridors, onto a fresh grid covering ``bounds``.

    Rooms are stamped in sorted order and corridors in the given order; the
    result of merging depends on corridor order, so callers pass the list
    the corridor builder produced.

    Raises:
        ValueError: If a room or a corridor (caps included) lies outside
            ``bounds``.
    """
    room_list = sorted(rooms)
    corridor_list = list(corridors)

    for room in room_list:
        if not _covers(bounds, room):
            raise ValueError(f"{room} lies outside {bounds}")
    for corridor in corridor_list:
        if not _covers(bounds, corridor.footprint()):
            raise ValueError(f"{corridor} lies outside {bounds}")

    tiles = np.full(
        (max(bounds.width, 0), max(bounds.height, 0)),
        fill_value=TileCode.WALL,
        dtype=np.uint8,
        order="F",
    )
    origin: WorldTilePos = (bounds.left, bounds.top)

    for room in room_list:
        _stamp_room(tiles, room, origin)
    for corridor in corridor_list:
        _stamp_corridor(tiles, corridor, origin)

    tiles.flags.writeable = False
    logger.debug(
        f"Rasterized {len(room_list)} rooms and {len(corridor_list)} corridors "
        f"onto a {tiles.shape[0]}x{tiles.shape[1]} grid"
    )
    return TileMap(
        tiles=tiles,
        origin=origin,
        tile_size=config.tile_size,
        tileset_width=config.tileset_width,
    )
