"""Dungeon generation for Undercroft.

The pipeline is split into one module per stage:
- rooms: RNG-driven room field on a circle
- separation: drift overlapping rooms apart until none overlap
- triangulation: Delaunay graph and minimum spanning tree of room centroids
- corridors: L-shaped corridors along the tree, pruning unreached rooms

``Dungeon`` ties the stages together and rasterizes the result.
"""

from .corridors import Corridor, CorridorGraph, Orientation, build_corridors
from .dungeon import Dungeon, DungeonStage, GenerationOrderError
from .rooms import generate_rooms, is_large, random_room
from .separation import SeparationResult, SeparationStalledError, stabilize
from .triangulation import Edge, Triangulation, minimum_spanning_tree, triangulate

__all__ = [
    "Corridor",
    "CorridorGraph",
    "Dungeon",
    "DungeonStage",
    "Edge",
    "GenerationOrderError",
    "Orientation",
    "SeparationResult",
    "SeparationStalledError",
    "Triangulation",
    "build_corridors",
    "generate_rooms",
    "is_large",
    "minimum_spanning_tree",
    "random_room",
    "stabilize",
    "triangulate",
]
