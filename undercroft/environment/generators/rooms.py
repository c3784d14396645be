"""Random room field: rooms scattered on a circle, sized by dice rolls."""

from __future__ import annotations

import logging
import math

from undercroft.config import DungeonConfig
from undercroft.util.coordinates import Rect
from undercroft.util.rng import RNG

logger = logging.getLogger(__name__)


def roll_room_dimension(rng: RNG, config: DungeonConfig) -> int:
    """Roll one room side: the sum of ``room_dice`` dice of ``room_die_faces``."""
    return sum(rng.randint(1, config.room_die_faces) for _ in range(config.room_dice))


def random_room(rng: RNG, config: DungeonConfig) -> Rect:
    """Create one room at a random angle on the placement circle.

    Coordinates are truncated toward zero, so rooms cluster tightly around
    the origin and almost all of them start out overlapping.
    """
    theta = rng.uniform(0.0, 2.0 * math.pi)
    x = int(config.room_radius * math.cos(theta))
    y = int(config.room_radius * math.sin(theta))
    width = roll_room_dimension(rng, config)
    height = roll_room_dimension(rng, config)
    return Rect(x, y, width, height)


def generate_rooms(n: int, rng: RNG, config: DungeonConfig) -> set[Rect]:
    """Generate up to ``n`` rooms.

    Rooms with identical position and size are the same room, so the result
    can be smaller than ``n``. That is expected, not an error.

    Raises:
        ValueError: If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"Room count must be non-negative, got {n}")

    rooms: set[Rect] = set()
    for _ in range(n):
        rooms.add(random_room(rng, config))

    if len(rooms) < n:
        logger.debug(f"Collapsed {n - len(rooms)} duplicate rooms out of {n}")
    return rooms


def is_large(room: Rect, config: DungeonConfig) -> bool:
    """Whether ``room`` is big enough to anchor the corridor graph."""
    threshold = config.large_room_threshold
    return room.width > threshold and room.height > threshold
