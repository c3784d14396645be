import numpy as np
import pytest

from undercroft.environment.rewrite_rules import WallRole, lookup_table, rewrite
from undercroft.environment.tile_types import TileCode

T = TileCode


@pytest.mark.parametrize("role", list(WallRole))
def test_rules_are_idempotent(role):
    for code in TileCode:
        once = rewrite(role, code)
        assert rewrite(role, once) == once, f"{role.name} over {code.name}"


@pytest.mark.parametrize("role", list(WallRole))
def test_floor_always_wins(role):
    assert rewrite(role, T.FLOOR) == T.FLOOR


@pytest.mark.parametrize("role", list(WallRole))
def test_lookup_table_agrees_with_rewrite(role):
    table = lookup_table(role)
    for code in TileCode:
        assert table[code] == rewrite(role, code)


def test_lookup_table_is_read_only():
    with pytest.raises(ValueError):
        lookup_table(WallRole.TOP)[0] = 0


@pytest.mark.parametrize(
    ("role", "fallback"),
    [
        (WallRole.TOP, T.WALL_TOP),
        (WallRole.BOTTOM, T.WALL_BOTTOM),
        (WallRole.LEFT, T.WALL_LEFT),
        (WallRole.RIGHT, T.WALL_RIGHT),
        (WallRole.TOP_LEFT, T.WALL_TOPLEFT),
        (WallRole.TOP_RIGHT, T.WALL_TOPRIGHT),
        (WallRole.BOTTOM_LEFT, T.WALL_BOTTOMLEFT),
        (WallRole.BOTTOM_RIGHT, T.WALL_BOTTOMRIGHT),
    ],
)
def test_plain_wall_takes_the_outline_piece(role, fallback):
    assert rewrite(role, T.WALL) == fallback


def test_top_edge_over_left_wall_makes_a_concave_corner():
    assert rewrite(WallRole.TOP, T.WALL_LEFT) == T.CORNER_TOPLEFT
    assert rewrite(WallRole.TOP, T.WALL_RIGHT) == T.CORNER_TOPRIGHT
    assert rewrite(WallRole.BOTTOM, T.WALL_LEFT) == T.CORNER_BOTTOMLEFT
    assert rewrite(WallRole.BOTTOM, T.WALL_RIGHT) == T.CORNER_BOTTOMRIGHT


def test_opposite_walls_merge_into_floor():
    assert rewrite(WallRole.TOP, T.WALL_BOTTOM) == T.FLOOR
    assert rewrite(WallRole.BOTTOM, T.WALL_TOP) == T.FLOOR
    assert rewrite(WallRole.LEFT, T.WALL_RIGHT) == T.FLOOR
    assert rewrite(WallRole.RIGHT, T.WALL_LEFT) == T.FLOOR


def test_diagonal_corners_make_bowties():
    assert rewrite(WallRole.TOP_LEFT, T.WALL_BOTTOMRIGHT) == T.BOWTIE_TR_BL
    assert rewrite(WallRole.TOP_LEFT, T.WALL_BOTTOMLEFT) == T.BOWTIE_TL_BR
    assert rewrite(WallRole.BOTTOM_LEFT, T.WALL_TOPRIGHT) == T.BOWTIE_TR_BL
    assert rewrite(WallRole.BOTTOM_RIGHT, T.WALL_TOPLEFT) == T.BOWTIE_TL_BR


def test_corner_keeps_straight_walls_it_lies_on():
    assert rewrite(WallRole.TOP_LEFT, T.WALL_TOP) == T.WALL_TOP
    assert rewrite(WallRole.TOP_LEFT, T.WALL_LEFT) == T.WALL_LEFT
    assert rewrite(WallRole.BOTTOM_RIGHT, T.WALL_TOPRIGHT) == T.WALL_RIGHT


def test_vectorised_rewrite_of_a_run():
    run = np.array([T.WALL, T.WALL_LEFT, T.FLOOR, T.WALL_BOTTOM], dtype=np.uint8)
    result = lookup_table(WallRole.TOP)[run]
    assert result.tolist() == [T.WALL_TOP, T.CORNER_TOPLEFT, T.FLOOR, T.FLOOR]
