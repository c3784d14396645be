"""Delaunay triangulation and minimum spanning tree over room centroids.

Thin wrapper around ``scipy.spatial.Delaunay`` and
``scipy.sparse.csgraph.minimum_spanning_tree``. Point sets Qhull cannot
triangulate (fewer than three points, or all points on one line) are handled
directly: their Delaunay graph is just the chain of points in sorted order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import minimum_spanning_tree as _scipy_mst
from scipy.spatial import Delaunay

from undercroft.util.coordinates import Vec

logger = logging.getLogger(__name__)

IndexPair = tuple[int, int]


@dataclass(frozen=True)
class Edge:
    """A directed edge between two points."""

    org: Vec
    dest: Vec

    def origin(self) -> Vec:
        return self.org

    def destination(self) -> Vec:
        return self.dest

    @property
    def length(self) -> float:
        return math.hypot(self.dest.x - self.org.x, self.dest.y - self.org.y)


@dataclass(frozen=True)
class Triangulation:
    """The edge graph of a Delaunay triangulation.

    Attributes:
        points: The triangulated points, in input order.
        index_pairs: Unique undirected edges as ``(i, j)`` with ``i < j``,
            sorted.
    """

    points: tuple[Vec, ...]
    index_pairs: tuple[IndexPair, ...]

    def edges(self) -> list[Edge]:
        """Edges oriented from the earlier to the later point."""
        return [Edge(self.points[i], self.points[j]) for i, j in self.index_pairs]


def _is_collinear(points: np.ndarray) -> bool:
    offsets = points[1:] - points[0]
    direction = offsets[np.flatnonzero(np.any(offsets != 0, axis=1))[0]]
    cross = offsets[:, 0] * direction[1] - offsets[:, 1] * direction[0]
    return bool(np.all(cross == 0))


def _chain(points: tuple[Vec, ...]) -> set[IndexPair]:
    order = sorted(range(len(points)), key=lambda i: points[i])
    pairs: set[IndexPair] = set()
    for a, b in zip(order, order[1:], strict=False):
        pairs.add((min(a, b), max(a, b)))
    return pairs


def triangulate(points: Iterable[Vec]) -> Triangulation:
    """Triangulate a set of distinct points.

    Args:
        points: Distinct integer points. Order is preserved and decides edge
            orientation.

    Returns:
        The triangulation's edge graph. Zero or one point gives no edges.
    """
    pts = tuple(Vec(int(p[0]), int(p[1])) for p in points)
    if len(pts) < 2:
        return Triangulation(pts, ())

    coords = np.array(pts, dtype=np.int64)
    if len(pts) == 2 or _is_collinear(coords):
        if len(pts) > 2:
            logger.debug(f"{len(pts)} collinear points, chaining instead")
        return Triangulation(pts, tuple(sorted(_chain(pts))))

    tri = Delaunay(coords.astype(np.float64))
    pairs: set[IndexPair] = set()
    for simplex in tri.simplices:
        a, b, c = (int(i) for i in simplex)
        for i, j in ((a, b), (b, c), (a, c)):
            pairs.add((min(i, j), max(i, j)))
    return Triangulation(pts, tuple(sorted(pairs)))


def minimum_spanning_tree(triangulation: Triangulation) -> list[Edge]:
    """Minimum spanning tree of the triangulation, Euclidean edge weights.

    Edges are oriented from the earlier to the later point and returned in
    order of their point indices, so the result is deterministic for a given
    point order.
    """
    n = len(triangulation.points)
    if n < 2 or not triangulation.index_pairs:
        return []

    pts = triangulation.points
    rows = np.array([i for i, _ in triangulation.index_pairs], dtype=np.int64)
    cols = np.array([j for _, j in triangulation.index_pairs], dtype=np.int64)
    weights = np.array(
        [math.dist(pts[i], pts[j]) for i, j in triangulation.index_pairs],
        dtype=np.float64,
    )
    graph = coo_matrix((weights, (rows, cols)), shape=(n, n)).tocsr()
    tree = _scipy_mst(graph).tocoo()

    pairs = sorted(
        (min(int(i), int(j)), max(int(i), int(j)))
        for i, j in zip(tree.row, tree.col, strict=True)
    )
    return [Edge(pts[i], pts[j]) for i, j in pairs]
