"""Separation solver: push overlapping rooms apart until none overlap.

Every pass looks at all intersecting pairs (O(n^2)), lets each member of a
pair push away from the other, and then moves every room by the *sign* of
the summed push on each axis. A room moves at most one tile per axis per
pass, no matter how many neighbours push it.

The loop runs until no pair intersects. There is no termination proof for
arbitrary fields; two explicit policies cover the known failure modes:

- A pass in which rooms still overlap but every push cancels out would
  repeat forever. With ``break_separation_stalls`` the colliding rooms are
  nudged apart instead; without it ``SeparationStalledError`` is raised.
- ``max_separation_iterations`` optionally bounds the number of passes.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

from undercroft.config import DungeonConfig
from undercroft.types import Bounds
from undercroft.util.coordinates import Rect, Vec, include_rect, sign

logger = logging.getLogger(__name__)


class SeparationStalledError(RuntimeError):
    """Raised when the separation loop cannot make progress.

    This happens either when every push cancels out while overlaps remain and
    stall breaking is disabled, or when the configured iteration cap is hit.
    """


class Direction(Enum):
    """Escape direction of a room. y grows downward."""

    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()


_HORIZONTAL = {Direction.LEFT, Direction.RIGHT}
_VERTICAL = {Direction.UP, Direction.DOWN}


@dataclass(frozen=True)
class SeparationResult:
    """Outcome of ``stabilize``.

    Attributes:
        rooms: The non-overlapping room set.
        bounds: Running bounds, widened from each room's position before its
            move in every pass. May lag the final positions by one pass.
        iterations: Number of passes that moved rooms.
    """

    rooms: frozenset[Rect]
    bounds: Bounds
    iterations: int


def collisions_exist(rooms: Iterable[Rect]) -> bool:
    """Check every pair of rooms for an intersection."""
    ordered = list(rooms)
    for i, room in enumerate(ordered):
        for other in ordered[i + 1 :]:
            if room.intersects(other):
                return True
    return False


def drift_vector(escapee: Rect, collider: Rect) -> Vec:
    """Push that moves ``escapee`` away from an intersecting ``collider``.

    The collider's centroid relative to the escapee's picks a quadrant. Within
    it, the escapee's distances to the collider's sides pick the primary
    direction, and the distances on the far side pick an opposite direction.
    When both lie on the same axis the rooms are pushed symmetrically, so the
    overlap on that axis is halved. Magnitudes round up.
    """
    left = escapee.left - collider.left
    right = collider.right - escapee.right
    up = escapee.top - collider.top
    down = collider.bottom - escapee.bottom

    ce = escapee.centroid()
    cc = collider.centroid()

    overlap = escapee.intersection(collider)
    if overlap is None:
        return Vec(0, 0)

    horizontal = float(overlap.width)
    vertical = float(overlap.height)

    if cc.x > ce.x:
        if cc.y > ce.y:
            direction = Direction.LEFT if left < up else Direction.UP
            opposite = Direction.RIGHT if right > down else Direction.DOWN
        else:
            direction = Direction.LEFT if left < down else Direction.DOWN
            opposite = Direction.RIGHT if right > down else Direction.UP
    else:
        if cc.y > ce.y:
            direction = Direction.RIGHT if right < up else Direction.UP
            opposite = Direction.LEFT if right > down else Direction.DOWN
        else:
            direction = Direction.RIGHT if right < down else Direction.DOWN
            opposite = Direction.LEFT if right > down else Direction.UP

    if {direction, opposite} == _VERTICAL:
        vertical /= 2
    if {direction, opposite} == _HORIZONTAL:
        horizontal /= 2

    h = math.ceil(horizontal)
    v = math.ceil(vertical)

    match direction:
        case Direction.LEFT:
            return Vec(-h, 0)
        case Direction.RIGHT:
            return Vec(h, 0)
        case Direction.UP:
            return Vec(0, -v)
        case Direction.DOWN:
            return Vec(0, v)


def _stall_step(room: Rect, colliders: list[Rect]) -> Vec:
    """Step for a colliding room whose pushes cancelled out exactly.

    Move away from the mean centroid of the colliders. If the centroids
    coincide, fall back to the rooms' total order so that two rooms sharing a
    centroid step in opposite x directions.
    """
    centre = room.centroid()
    away = Vec(0, 0)
    for other in colliders:
        away = away + (centre - other.centroid())
    step = away.sign()
    if step != Vec(0, 0):
        return step
    return Vec(sign(sum(1 if room > other else -1 for other in colliders)), 0)


def drift_iterate(
    rooms: Iterable[Rect],
    bounds: Bounds,
    *,
    break_stalls: bool = True,
) -> tuple[frozenset[Rect], Bounds, bool]:
    """Run one separation pass.

    Args:
        rooms: Current room set.
        bounds: Running bounds, widened from every room's pre-move position.
        break_stalls: Nudge rooms apart when every push cancels out.

    Returns:
        ``(rooms, bounds, collided)``. When nothing intersects the rooms and
        bounds come back unchanged and ``collided`` is False.

    Raises:
        SeparationStalledError: If rooms overlap, no push survives and
            ``break_stalls`` is False.
    """
    ordered = sorted(rooms)
    pushes: dict[Rect, Vec] = {room: Vec(0, 0) for room in ordered}
    colliders: dict[Rect, list[Rect]] = {}

    # Each ordered pair (r, s) pushes r by drift_vector(r, s) and s by its
    # negation, so both directions are accumulated from a single visit.
    for i, room in enumerate(ordered):
        for other in ordered[i + 1 :]:
            if not room.intersects(other):
                continue
            there = drift_vector(room, other)
            back = drift_vector(other, room)
            pushes[room] = pushes[room] + there + -back
            pushes[other] = pushes[other] + back + -there
            colliders.setdefault(room, []).append(other)
            colliders.setdefault(other, []).append(room)

    if not colliders:
        return frozenset(ordered), bounds, False

    velocity = {room: push.sign() for room, push in pushes.items()}

    if all(step == Vec(0, 0) for step in velocity.values()):
        if not break_stalls:
            raise SeparationStalledError(
                f"{len(colliders)} overlapping rooms cancel each other's pushes"
            )
        logger.debug(f"Breaking separation stall between {len(colliders)} rooms")
        for room, others in colliders.items():
            velocity[room] = _stall_step(room, others)

    moved: set[Rect] = set()
    for room in ordered:
        step = velocity[room]
        moved.add(room.translated(step.x, step.y))
        bounds = include_rect(bounds, room)

    if len(moved) < len(ordered):
        logger.debug(f"{len(ordered) - len(moved)} rooms merged while drifting")

    return frozenset(moved), bounds, True


def stabilize(
    rooms: Iterable[Rect],
    config: DungeonConfig,
    bounds: Bounds | None = None,
) -> SeparationResult:
    """Drift ``rooms`` apart until no two of them intersect.

    Args:
        rooms: The room field to separate.
        config: Supplies the stall and iteration-cap policies.
        bounds: Starting running bounds. Defaults to an empty box at the
            origin.

    Raises:
        SeparationStalledError: If the configured iteration cap is exceeded,
            or a stall occurs with stall breaking disabled.
    """
    current = frozenset(rooms)
    running = bounds if bounds is not None else Bounds()
    iterations = 0
    limit = config.max_separation_iterations

    while True:
        current, running, collided = drift_iterate(
            current, running, break_stalls=config.break_separation_stalls
        )
        if not collided:
            break
        iterations += 1
        if limit is not None and iterations >= limit and collisions_exist(current):
            raise SeparationStalledError(
                f"Rooms still overlap after {iterations} separation passes"
            )

    assert not collisions_exist(current), "Separation finished with overlaps"
    logger.debug(f"Separated {len(current)} rooms in {iterations} passes")
    return SeparationResult(rooms=current, bounds=running, iterations=iterations)
