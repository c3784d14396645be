from __future__ import annotations

import pytest

from undercroft.config import DungeonConfig
from undercroft.environment.generators.rooms import generate_rooms
from undercroft.environment.generators.separation import (
    SeparationStalledError,
    collisions_exist,
    drift_iterate,
    drift_vector,
    stabilize,
)
from undercroft.types import Bounds
from undercroft.util.coordinates import Rect, Vec
from undercroft.util.rng import RNGProvider


def test_collisions_exist():
    assert not collisions_exist([])
    assert not collisions_exist([Rect(0, 0, 3, 3), Rect(3, 0, 3, 3)])
    assert collisions_exist([Rect(0, 0, 3, 3), Rect(9, 9, 1, 1), Rect(2, 2, 3, 3)])


def test_drift_vector_without_overlap_is_zero():
    assert drift_vector(Rect(0, 0, 3, 3), Rect(3, 0, 3, 3)) == Vec(0, 0)


def test_drift_vector_pushes_apart_horizontally():
    left_room = Rect(0, 0, 4, 4)
    right_room = Rect(2, 0, 4, 4)
    # Left and right escapes on one axis split the overlap of 2.
    assert drift_vector(left_room, right_room) == Vec(-1, 0)
    # Right then up: the whole overlap, on the primary axis.
    assert drift_vector(right_room, left_room) == Vec(2, 0)


def test_drift_iterate_moves_each_room_one_tile():
    rooms, bounds, collided = drift_iterate(
        [Rect(0, 0, 4, 4), Rect(2, 0, 4, 4)], Bounds()
    )
    assert collided
    assert rooms == frozenset({Rect(-1, 0, 4, 4), Rect(3, 0, 4, 4)})
    # Bounds come from the positions before the move.
    assert bounds == Bounds(top=0, bottom=4, left=0, right=6)


def test_drift_iterate_is_a_no_op_without_collisions():
    rooms = [Rect(0, 0, 3, 3), Rect(5, 5, 3, 3)]
    result, bounds, collided = drift_iterate(rooms, Bounds(0, 1, 0, 1))
    assert not collided
    assert result == frozenset(rooms)
    assert bounds == Bounds(0, 1, 0, 1)


def test_stabilize_separates_a_pair():
    result = stabilize([Rect(0, 0, 4, 4), Rect(2, 0, 4, 4)], DungeonConfig())
    assert not collisions_exist(result.rooms)
    assert len(result.rooms) == 2
    assert result.iterations == 1


def test_stabilize_leaves_separated_rooms_alone():
    rooms = {Rect(0, 0, 3, 3), Rect(10, 10, 3, 3)}
    result = stabilize(rooms, DungeonConfig())
    assert result.rooms == rooms
    assert result.iterations == 0


def test_stabilize_empty_and_single():
    assert stabilize([], DungeonConfig()).rooms == frozenset()
    one = stabilize([Rect(1, 1, 3, 3)], DungeonConfig())
    assert one.rooms == frozenset({Rect(1, 1, 3, 3)})


# A room nested around another with the same centroid: every push cancels.
NESTED = [Rect(0, 0, 4, 4), Rect(1, 1, 2, 2)]


def test_cancelled_pushes_are_broken_by_default():
    result = stabilize(NESTED, DungeonConfig())
    assert not collisions_exist(result.rooms)
    assert len(result.rooms) == 2


def test_cancelled_pushes_raise_when_breaking_is_disabled():
    config = DungeonConfig(break_separation_stalls=False)
    with pytest.raises(SeparationStalledError):
        stabilize(NESTED, config)


def test_iteration_cap():
    config = DungeonConfig(max_separation_iterations=1)
    with pytest.raises(SeparationStalledError):
        stabilize(NESTED, config)


@pytest.mark.parametrize("seed", [1, 2, "crypt1"])
def test_generated_fields_end_without_overlaps(seed, config):
    rooms = generate_rooms(60, RNGProvider(seed).get("dungeon.rooms"), config)
    result = stabilize(rooms, config)

    assert not collisions_exist(result.rooms)
    assert 0 < len(result.rooms) <= len(rooms)
    for room in result.rooms:
        assert result.bounds.left <= room.left + 1
        assert result.bounds.top <= room.top + 1
        assert room.right - 1 <= result.bounds.right
        assert room.bottom - 1 <= result.bounds.bottom
