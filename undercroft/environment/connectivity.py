"""Floor connectivity analysis for rasterized layouts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy import ndimage

if TYPE_CHECKING:
    from undercroft.environment.map import TileMap

# Orthogonal neighbours only: diagonal steps between floor tiles squeeze
# between two wall corners and do not count as a passage.
_FOUR_CONNECTED = np.array(
    [
        [0, 1, 0],
        [1, 1, 1],
        [0, 1, 0],
    ],
    dtype=bool,
)


def floor_regions(tile_map: TileMap) -> tuple[np.ndarray, int]:
    """Label the 4-connected floor regions of ``tile_map``.

    Returns:
        ``(labels, count)``: an int array shaped like the map where each floor
        tile carries its region number (1..count) and every other tile is 0.
    """
    if tile_map.tiles.size == 0:
        return np.zeros(tile_map.tiles.shape, dtype=np.int32), 0
    labels, count = ndimage.label(tile_map.floor_mask, structure=_FOUR_CONNECTED)
    return labels, int(count)


def is_connected(tile_map: TileMap) -> bool:
    """Whether every floor tile is reachable from every other one."""
    _, count = floor_regions(tile_map)
    return count <= 1
