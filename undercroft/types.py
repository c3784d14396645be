from __future__ import annotations

from typing import NamedTuple

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================


TileCoord = int  # Always integer tile position

# Layout coordinates - the shared grid rooms are generated on. Rooms are placed
# around the origin, so these are frequently negative.
WorldTileCoord = TileCoord  # Example: x=-4, y=3
WorldTilePos = tuple[WorldTileCoord, WorldTileCoord]

# Grid coordinates - zero-based indices into a rasterized TileMap
GridTileCoord = TileCoord  # Example: gx=0, gy=0
GridTilePos = tuple[GridTileCoord, GridTileCoord]

# =============================================================================
# PIXEL-BASED COORDINATE SYSTEMS
# =============================================================================

# Source rectangle inside a tileset image, in pixels: (x, y, width, height)
PixelRect = tuple[int, int, int, int]

# =============================================================================
# GENERATION-RELATED TYPES
# =============================================================================

# Master seed for deterministic generation. None means "use system entropy".
RandomSeed = int | str | None


class Bounds(NamedTuple):
    """Bounding box of a layout in tile units.

    ``bottom`` and ``right`` are exclusive, so ``right - left`` is the width
    of the rasterized grid.
    """

    top: WorldTileCoord = 0
    bottom: WorldTileCoord = 0
    left: WorldTileCoord = 0
    right: WorldTileCoord = 0

    @property
    def width(self) -> TileCoord:
        return self.right - self.left

    @property
    def height(self) -> TileCoord:
        return self.bottom - self.top
