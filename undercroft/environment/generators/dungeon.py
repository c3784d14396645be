"""Dungeon aggregate: the full rooms-and-corridors pipeline on one object.

A ``Dungeon`` walks through four stages, each of which needs the previous one:

1. ``generate_rooms``: scatter ``room_count`` dice-sized rooms on a circle.
2. ``stabilize``: drift the rooms apart until none overlap.
3. ``build_corridors``: connect the large rooms with L-shaped corridors
   along a minimum spanning tree and drop the rooms no corridor reaches.
4. ``rasterize``: stamp everything onto a grid of tile codes.

``build()`` runs whatever stages are still missing. After ``rasterize`` the
dungeon is a read-only snapshot.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from undercroft.config import DEFAULT_CONFIG, DungeonConfig
from undercroft.environment.map import TileMap
from undercroft.environment.map import rasterize as rasterize_layout
from undercroft.types import Bounds
from undercroft.util.coordinates import Rect, bounds_of
from undercroft.util.rng import RNGProvider

from .corridors import Corridor, build_corridors
from .rooms import generate_rooms
from .separation import stabilize

if TYPE_CHECKING:
    from undercroft.environment.tile_types import TileCode
    from undercroft.types import GridTileCoord, RandomSeed

    from .triangulation import Edge

logger = logging.getLogger(__name__)


class DungeonStage(Enum):
    """How far a ``Dungeon`` has progressed through the pipeline."""

    EMPTY = 0
    GENERATED = 1
    STABILIZED = 2
    GRAPHED = 3
    RASTERIZED = 4


class GenerationOrderError(RuntimeError):
    """Raised when a pipeline stage runs before the stage it depends on."""


class Dungeon:
    """A procedurally generated dungeon layout.

    Each dungeon owns its random stream, so two dungeons with the same seed
    produce the same layout no matter what else draws random numbers.
    """

    def __init__(
        self,
        room_count: int,
        *,
        seed: RandomSeed = None,
        config: DungeonConfig | None = None,
    ) -> None:
        if room_count < 0:
            raise ValueError(f"Room count must be non-negative, got {room_count}")

        self.room_count = room_count
        self.config = config if config is not None else DEFAULT_CONFIG
        self._rng = RNGProvider(seed).get("dungeon.rooms")

        self._stage = DungeonStage.EMPTY
        self._rooms: frozenset[Rect] = frozenset()
        self._corridors: tuple[Corridor, ...] = ()
        self._edges: tuple[Edge, ...] = ()
        self._bounds = Bounds()
        self._drift_bounds = Bounds()
        self._separation_iterations = 0
        self._tile_map: TileMap | None = None

    @classmethod
    def generate(
        cls,
        room_count: int,
        *,
        seed: RandomSeed = None,
        config: DungeonConfig | None = None,
    ) -> Dungeon:
        """Create a dungeon and run the whole pipeline on it."""
        dungeon = cls(room_count, seed=seed, config=config)
        dungeon.build()
        return dungeon

    def __repr__(self) -> str:
        return (
            f"Dungeon(room_count={self.room_count}, stage={self._stage.name}, "
            f"rooms={len(self._rooms)}, corridors={len(self._corridors)})"
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def stage(self) -> DungeonStage:
        return self._stage

    @property
    def rooms(self) -> frozenset[Rect]:
        return self._rooms

    @property
    def corridors(self) -> tuple[Corridor, ...]:
        return self._corridors

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    @property
    def drift_bounds(self) -> Bounds:
        """Bounds accumulated while the rooms drifted apart."""
        return self._drift_bounds

    @property
    def separation_iterations(self) -> int:
        return self._separation_iterations

    @property
    def tile_map(self) -> TileMap:
        if self._tile_map is None:
            raise GenerationOrderError("Dungeon has not been rasterized yet")
        return self._tile_map

    def bounds(self) -> Bounds:
        """Bounding box of the layout.

        Before corridors exist this is the running bounds from separation;
        afterwards it is recomputed from the surviving rooms and corridors.
        """
        return self._bounds

    def tile_at(self, x: GridTileCoord, y: GridTileCoord) -> TileCode:
        """Tile code at grid position ``(x, y)`` of the rasterized map."""
        return self.tile_map.tile_at(x, y)

    # =========================================================================
    # Pipeline stages
    # =========================================================================

    def _require(self, stage: DungeonStage, action: str) -> None:
        if self._stage is not stage:
            raise GenerationOrderError(
                f"Cannot {action}: dungeon is {self._stage.name}, "
                f"expected {stage.name}"
            )

    def generate_rooms(self) -> None:
        self._require(DungeonStage.EMPTY, "generate rooms")
        self._rooms = frozenset(generate_rooms(self.room_count, self._rng, self.config))
        self._stage = DungeonStage.GENERATED
        logger.debug(f"Generated {len(self._rooms)} rooms")

    def stabilize(self) -> None:
        self._require(DungeonStage.GENERATED, "stabilize")
        result = stabilize(self._rooms, self.config)
        self._rooms = result.rooms
        self._drift_bounds = result.bounds
        self._bounds = result.bounds
        self._separation_iterations = result.iterations
        self._stage = DungeonStage.STABILIZED

    def build_corridors(self) -> None:
        self._require(DungeonStage.STABILIZED, "build corridors")
        graph = build_corridors(self._rooms, self.config)
        self._rooms = graph.rooms
        self._corridors = graph.corridors
        self._edges = graph.edges
        # Pruning shrinks the layout and corridor caps can poke past the
        # drift bounds, so the final bounds come from what is actually drawn.
        self._bounds = bounds_of(
            [*self._rooms, *(corridor.footprint() for corridor in self._corridors)]
        )
        self._stage = DungeonStage.GRAPHED

    def rasterize(self) -> None:
        self._require(DungeonStage.GRAPHED, "rasterize")
        self._tile_map = rasterize_layout(
            self._rooms, self._corridors, self._bounds, self.config
        )
        self._stage = DungeonStage.RASTERIZED

    def build(self) -> Dungeon:
        """Run every stage that has not run yet."""
        if self._stage is DungeonStage.EMPTY:
            self.generate_rooms()
        if self._stage is DungeonStage.GENERATED:
            self.stabilize()
        if self._stage is DungeonStage.STABILIZED:
            self.build_corridors()
        if self._stage is DungeonStage.GRAPHED:
            self.rasterize()
        logger.info(
            f"Built dungeon: {len(self._rooms)} rooms, "
            f"{len(self._corridors)} corridors, "
            f"{self._bounds.width}x{self._bounds.height} tiles"
        )
        return self
