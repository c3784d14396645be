from __future__ import annotations

from undercroft.config import DEFAULT_CONFIG
from undercroft.environment.connectivity import floor_regions, is_connected
from undercroft.environment.generators.corridors import build_corridors
from undercroft.environment.map import rasterize
from undercroft.types import Bounds
from undercroft.util.coordinates import Rect, bounds_of


def test_rooms_joined_by_a_corridor_form_one_region(twin_rooms):
    graph = build_corridors(twin_rooms, DEFAULT_CONFIG)
    rects = [*graph.rooms, *(c.footprint() for c in graph.corridors)]
    tile_map = rasterize(graph.rooms, graph.corridors, bounds_of(rects))

    labels, count = floor_regions(tile_map)
    assert count == 1
    assert is_connected(tile_map)
    assert labels.shape == tile_map.tiles.shape
    assert labels[0, 0] == 0


def test_separate_rooms_form_separate_regions(twin_rooms):
    tile_map = rasterize(twin_rooms, [], bounds_of(twin_rooms))

    labels, count = floor_regions(tile_map)
    assert count == 2
    assert not is_connected(tile_map)
    gx, gy = tile_map.to_grid(0, 0)
    hx, hy = tile_map.to_grid(10, 0)
    assert labels[gx, gy] != labels[hx, hy]


def test_diagonal_neighbours_are_not_connected():
    # Two rooms meeting at a single corner share no wall opening.
    rooms = [Rect(0, 0, 3, 3), Rect(3, 3, 3, 3)]
    tile_map = rasterize(rooms, [], bounds_of(rooms))
    assert floor_regions(tile_map)[1] == 2


def test_empty_map_has_no_regions():
    tile_map = rasterize([], [], Bounds())
    labels, count = floor_regions(tile_map)
    assert count == 0
    assert labels.size == 0
    assert is_connected(tile_map)
