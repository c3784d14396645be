import numpy as np
import pytest

from undercroft.environment import tile_types
from undercroft.environment.tile_types import TILE_CODE_LIMIT, TileCode, atlas_rect


def test_codes_are_tileset_indices():
    assert TileCode.WALL_TOPLEFT == 0
    assert TileCode.WALL == 5
    assert TileCode.WALL_LEFT == 16
    assert TileCode.FLOOR == 17
    assert TileCode.CORNER_TOPLEFT == 20
    assert TileCode.WALL_BOTTOMLEFT == 32
    assert TileCode.BOWTIE_TL_BR == 36
    assert TILE_CODE_LIMIT == 37


def test_codes_are_unique():
    assert len({int(code) for code in TileCode}) == len(TileCode)


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (TileCode.WALL_TOPLEFT, (0, 0, 16, 16)),
        (TileCode.WALL, (80, 0, 16, 16)),
        (TileCode.FLOOR, (16, 16, 16, 16)),
        (TileCode.WALL_BOTTOMRIGHT, (32, 32, 16, 16)),
    ],
)
def test_atlas_rect(code, expected):
    assert atlas_rect(code, 16) == expected


def test_atlas_rect_with_custom_tileset():
    assert atlas_rect(TileCode.FLOOR, 8, tileset_width=4) == (8, 32, 8, 8)


def test_floor_and_wall_predicates():
    assert tile_types.is_floor(TileCode.FLOOR)
    assert not tile_types.is_wall(TileCode.FLOOR)
    for code in TileCode:
        if code is not TileCode.FLOOR:
            assert tile_types.is_wall(code)
            assert not tile_types.is_floor(code)


def test_every_code_has_a_glyph():
    table = tile_types.glyph_table()
    assert table.shape == (TILE_CODE_LIMIT,)
    for code in TileCode:
        assert table[code] != "?", f"No glyph for {code.name}"
    assert table[TileCode.FLOOR] == "."


def test_tile_code_works_as_numpy_index():
    tiles = np.zeros((3, 3), dtype=np.uint8)
    tiles[1, 1] = TileCode.FLOOR
    assert tiles[1, 1] == TileCode.FLOOR
