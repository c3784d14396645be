"""Corridor graph: connect large rooms along a minimum spanning tree.

Large rooms anchor the layout. Their centroids are triangulated, the
triangulation is reduced to its minimum spanning tree, and every tree edge
becomes an L-shaped pair of corridors: a horizontal run along the origin's
row, then a vertical run along the destination's column. Small rooms only
survive if one of those runs passes through them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from undercroft.config import DungeonConfig
from undercroft.util.coordinates import Rect, Vec

from .rooms import is_large
from .triangulation import Edge, minimum_spanning_tree, triangulate

logger = logging.getLogger(__name__)


class Orientation(Enum):
    """Axis a corridor primarily spans."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Corridor:
    """A corridor footprint plus the axis it runs along.

    The orientation decides which wall-stamping pattern the tile synthesizer
    uses: horizontal corridors get end caps on the left and right, vertical
    ones on the top and bottom.
    """

    rect: Rect
    orientation: Orientation

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def left(self) -> int:
        return self.rect.left

    @property
    def top(self) -> int:
        return self.rect.top

    @property
    def width(self) -> int:
        return self.rect.width

    @property
    def height(self) -> int:
        return self.rect.height

    def footprint(self) -> Rect:
        """Tiles the corridor writes to, end caps included."""
        if self.horizontal:
            return Rect(self.left - 1, self.top, self.width + 2, self.height)
        return Rect(self.left, self.top - 1, self.width, self.height + 2)


@dataclass(frozen=True)
class CorridorGraph:
    """Result of ``build_corridors``.

    Attributes:
        corridors: Two corridors per tree edge, horizontal first.
        rooms: The pruned room set.
        edges: The spanning tree edges the corridors were built from.
    """

    corridors: tuple[Corridor, ...]
    rooms: frozenset[Rect]
    edges: tuple[Edge, ...]


def large_room_centroids(rooms: Iterable[Rect], config: DungeonConfig) -> list[Vec]:
    """Centroids of the large rooms, sorted and deduplicated."""
    return sorted({room.centroid() for room in rooms if is_large(room, config)})


def corridors_for_edge(edge: Edge, config: DungeonConfig) -> tuple[Corridor, Corridor]:
    """Build the L-shaped corridor pair for one spanning-tree edge.

    The horizontal run follows the origin's row and spans both x coordinates;
    the vertical run follows the destination's column and spans both y
    coordinates. Aligned endpoints give a one-tile-long run.
    """
    a = edge.origin()
    b = edge.destination()
    half = config.corridor_half_width
    thickness = config.corridor_width

    left, right = min(a.x, b.x), max(a.x, b.x)
    horizontal = Corridor(
        Rect(left, a.y - half, right - left + 1, thickness),
        Orientation.HORIZONTAL,
    )

    top, bottom = min(a.y, b.y), max(a.y, b.y)
    vertical = Corridor(
        Rect(b.x - half, top, thickness, bottom - top + 1),
        Orientation.VERTICAL,
    )
    return horizontal, vertical


def room_touches_edge(room: Rect, edge: Edge, config: DungeonConfig) -> bool:
    """Whether a corridor run of ``edge`` passes through ``room``.

    The room must overlap the run's band of rows (or columns) and lie strictly
    between the run's two endpoints along it.
    """
    a = edge.origin()
    b = edge.destination()
    half = config.corridor_half_width

    left, right = min(a.x, b.x), max(a.x, b.x)
    y = a.y
    if (
        room.top < y + half + 1
        and room.bottom > y - half
        and room.left > left
        and room.right < right
    ):
        return True

    top, bottom = min(a.y, b.y), max(a.y, b.y)
    x = b.x
    return (
        room.left < x + half + 1
        and room.right > x - half
        and room.top > top
        and room.bottom < bottom
    )


def _fallback_rooms(rooms: frozenset[Rect], config: DungeonConfig) -> frozenset[Rect]:
    large = frozenset(room for room in rooms if is_large(room, config))
    if large or not rooms:
        return large
    # Nothing can anchor a corridor: keep the biggest room so the dungeon is
    # never empty when rooms were generated.
    biggest = min(rooms, key=lambda room: (-room.area, room))
    return frozenset({biggest})


def build_corridors(rooms: Iterable[Rect], config: DungeonConfig) -> CorridorGraph:
    """Derive corridors from the large rooms and prune unreachable rooms.

    A room survives if it is large or if one of the corridor runs passes
    through it. When fewer than two large rooms exist there is no tree; the
    large rooms are kept, or the single biggest room if none is large.
    """
    room_set = frozenset(rooms)
    points = large_room_centroids(room_set, config)
    edges = minimum_spanning_tree(triangulate(points))

    if not edges:
        survivors = _fallback_rooms(room_set, config)
        logger.debug(
            f"No corridor graph for {len(points)} large rooms; "
            f"keeping {len(survivors)} of {len(room_set)} rooms"
        )
        return CorridorGraph(corridors=(), rooms=survivors, edges=())

    corridors: list[Corridor] = []
    for edge in edges:
        corridors.extend(corridors_for_edge(edge, config))

    survivors = frozenset(
        room
        for room in room_set
        if is_large(room, config)
        or any(room_touches_edge(room, edge, config) for edge in edges)
    )

    logger.debug(
        f"Spanning tree over {len(points)} large rooms: {len(edges)} edges, "
        f"{len(corridors)} corridors, kept {len(survivors)} of {len(room_set)} rooms"
    )
    return CorridorGraph(
        corridors=tuple(corridors), rooms=survivors, edges=tuple(edges)
    )
