"""Integer geometry on the shared tile grid.

``Rect`` is a value type: equality and hashing are structural, so two rooms
with the same position and size are the same room. This is what lets the
generator keep rooms in a ``set`` and collapse exact duplicates.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from undercroft.types import Bounds, TileCoord, WorldTileCoord


def sign(value: float) -> int:
    """Return -1, 0 or 1 according to the sign of ``value``."""
    return (value > 0) - (value < 0)


class Vec(NamedTuple):
    """A 2D integer vector, used both as a displacement and as a position."""

    x: int = 0
    y: int = 0

    def __add__(self, other: object) -> Vec:  # type: ignore[override]
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y)

    def sign(self) -> Vec:
        """Per-axis sign, i.e. a step of at most one tile on each axis."""
        return Vec(sign(self.x), sign(self.y))


@functools.total_ordering
@dataclass(frozen=True, eq=True, order=False)
class Rect:
    """Rectangle in tile coordinates.

    ``right`` and ``bottom`` are exclusive. Rects are ordered lexicographically
    on ``(top, left, bottom, right)``.
    """

    left: WorldTileCoord
    top: WorldTileCoord
    width: TileCoord
    height: TileCoord

    @classmethod
    def from_bounds(
        cls,
        left: WorldTileCoord,
        top: WorldTileCoord,
        right: WorldTileCoord,
        bottom: WorldTileCoord,
    ) -> Rect:
        """Create a Rect from its edge coordinates."""
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> WorldTileCoord:
        return self.left + self.width

    @property
    def bottom(self) -> WorldTileCoord:
        return self.top + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def sort_key(self) -> tuple[int, int, int, int]:
        return (self.top, self.left, self.bottom, self.right)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def centroid(self) -> Vec:
        return Vec(self.left + self.width // 2, self.top + self.height // 2)

    def intersection(self, other: Rect) -> Rect | None:
        """Overlapping area of the two rects, or None if they only touch."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if left < right and top < bottom:
            return Rect.from_bounds(left, top, right, bottom)
        return None

    def intersects(self, other: Rect) -> bool:
        # Shared edges are not an intersection.
        return (
            max(self.left, other.left) < min(self.right, other.right)
            and max(self.top, other.top) < min(self.bottom, other.bottom)
        )

    def contains_point(self, x: WorldTileCoord, y: WorldTileCoord) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def translated(self, dx: int, dy: int) -> Rect:
        return Rect(self.left + dx, self.top + dy, self.width, self.height)

    def expanded(self, amount: int) -> Rect:
        return Rect(
            self.left - amount,
            self.top - amount,
            self.width + 2 * amount,
            self.height + 2 * amount,
        )

    def union(self, other: Rect) -> Rect:
        return Rect.from_bounds(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def __repr__(self) -> str:
        return (
            f"Rect(left={self.left}, top={self.top}, "
            f"width={self.width}, height={self.height})"
        )


# =============================================================================
# BOUNDS HELPERS
# =============================================================================


def include_rect(bounds: Bounds, rect: Rect) -> Bounds:
    """Widen ``bounds`` so that it covers ``rect``."""
    return Bounds(
        top=min(bounds.top, rect.top),
        bottom=max(bounds.bottom, rect.bottom),
        left=min(bounds.left, rect.left),
        right=max(bounds.right, rect.right),
    )


def bounds_of(rects: Iterable[Rect]) -> Bounds:
    """Tight bounding box of ``rects``; an empty iterable gives zero bounds."""
    result: Bounds | None = None
    for rect in rects:
        if result is None:
            result = Bounds(rect.top, rect.bottom, rect.left, rect.right)
        else:
            result = include_rect(result, rect)
    return result if result is not None else Bounds()
