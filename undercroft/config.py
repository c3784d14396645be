"""
Configuration constants.

Centralizes the tunable numbers of the generation pipeline. The module-level
constants are the defaults; the pipeline itself never reads them directly but
receives a ``DungeonConfig`` built from them, so several differently tuned
dungeons can be generated in the same process.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from undercroft.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED: RandomSeed = "crypt1"

# Test environment detection
IS_TEST_ENVIRONMENT = "pytest" in sys.modules

# Room count used by the command line preview
DEFAULT_ROOM_COUNT = 103

# =============================================================================
# ROOM FIELD
# =============================================================================

# Room sides are rolled as ROOM_DICE x d(ROOM_DIE_FACES): 3d3 gives 3..9 with a
# peak at 6.
ROOM_DICE = 3
ROOM_DIE_FACES = 3

# Rooms start on a circle of this radius around the origin, then drift apart.
ROOM_RADIUS = 5

# A room is "large" (eligible to anchor corridors) when both sides exceed
# ROOM_DIE_FACES / LARGE_ROOM_DIVISOR * ROOM_DICE. With 3d3 that is 5.0.
LARGE_ROOM_DIVISOR = 1.8

# =============================================================================
# SEPARATION
# =============================================================================

# None means "loop until no room overlaps another". Set an integer to turn a
# pathological field into a SeparationStalledError instead of a hang.
MAX_SEPARATION_ITERATIONS: int | None = None

# Nudge rooms whose pushes cancel out exactly; otherwise they can sit on top
# of each other forever.
BREAK_SEPARATION_STALLS = True

# =============================================================================
# CORRIDORS & TILES
# =============================================================================

# Corridor thickness including both walls. Must be odd so the floor run is
# centred on the room centroids it connects.
CORRIDOR_WIDTH = 3

# Tile edge length in pixels, and tiles per row of the tileset image.
TILE_SIZE = 16
TILESET_WIDTH = 16


@dataclass(frozen=True)
class DungeonConfig:
    """Explicit configuration handed to every stage of the pipeline.

    Attributes:
        room_dice: Number of dice rolled per room side.
        room_die_faces: Faces on each room die.
        room_radius: Radius of the placement circle.
        large_room_divisor: Divisor in the large-room threshold formula.
        corridor_width: Corridor thickness in tiles, walls included.
        tile_size: Pixel size of one tile, for rendering collaborators.
        tileset_width: Tiles per row of the tileset image.
        max_separation_iterations: Optional hard cap on separation passes.
        break_separation_stalls: Whether cancelled-out pushes are nudged.
    """

    room_dice: int = ROOM_DICE
    room_die_faces: int = ROOM_DIE_FACES
    room_radius: int = ROOM_RADIUS
    large_room_divisor: float = LARGE_ROOM_DIVISOR
    corridor_width: int = CORRIDOR_WIDTH
    tile_size: int = TILE_SIZE
    tileset_width: int = TILESET_WIDTH
    max_separation_iterations: int | None = MAX_SEPARATION_ITERATIONS
    break_separation_stalls: bool = BREAK_SEPARATION_STALLS

    def __post_init__(self) -> None:
        if self.room_dice < 1:
            raise ValueError(f"room_dice must be at least 1, got {self.room_dice}")
        if self.room_die_faces < 1:
            raise ValueError(
                f"room_die_faces must be at least 1, got {self.room_die_faces}"
            )
        if self.room_radius < 0:
            raise ValueError(
                f"room_radius must be non-negative, got {self.room_radius}"
            )
        if self.large_room_divisor <= 0:
            raise ValueError(
                f"large_room_divisor must be positive, got {self.large_room_divisor}"
            )
        if self.corridor_width < 3 or self.corridor_width % 2 == 0:
            raise ValueError(
                f"corridor_width must be an odd number >= 3, "
                f"got {self.corridor_width}"
            )
        if self.tile_size < 1:
            raise ValueError(f"tile_size must be at least 1, got {self.tile_size}")
        if self.tileset_width < 1:
            raise ValueError(
                f"tileset_width must be at least 1, got {self.tileset_width}"
            )
        if (
            self.max_separation_iterations is not None
            and self.max_separation_iterations < 1
        ):
            raise ValueError(
                f"max_separation_iterations must be None or at least 1, "
                f"got {self.max_separation_iterations}"
            )

    @property
    def large_room_threshold(self) -> float:
        """Side length a room must exceed on both axes to count as large."""
        return self.room_die_faces / self.large_room_divisor * self.room_dice

    @property
    def corridor_half_width(self) -> int:
        """Tiles between a corridor's centre line and its wall."""
        return self.corridor_width // 2


DEFAULT_CONFIG = DungeonConfig()
