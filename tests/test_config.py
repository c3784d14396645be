import pytest

from undercroft import config
from undercroft.config import DEFAULT_CONFIG, DungeonConfig


def test_defaults_mirror_module_constants():
    assert DEFAULT_CONFIG.room_dice == config.ROOM_DICE
    assert DEFAULT_CONFIG.room_die_faces == config.ROOM_DIE_FACES
    assert DEFAULT_CONFIG.room_radius == config.ROOM_RADIUS
    assert DEFAULT_CONFIG.corridor_width == config.CORRIDOR_WIDTH
    assert DEFAULT_CONFIG.max_separation_iterations is None
    assert DEFAULT_CONFIG.break_separation_stalls


def test_large_room_threshold():
    assert DEFAULT_CONFIG.large_room_threshold == pytest.approx(5.0)
    tuned = DungeonConfig(room_dice=2, room_die_faces=6, large_room_divisor=2.0)
    assert tuned.large_room_threshold == pytest.approx(6.0)


def test_corridor_half_width():
    assert DEFAULT_CONFIG.corridor_half_width == 1
    assert DungeonConfig(corridor_width=5).corridor_half_width == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"room_dice": 0},
        {"room_die_faces": 0},
        {"room_radius": -1},
        {"large_room_divisor": 0},
        {"corridor_width": 4},
        {"corridor_width": 1},
        {"tile_size": 0},
        {"tileset_width": 0},
        {"max_separation_iterations": 0},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        DungeonConfig(**overrides)


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.room_dice = 4  # type: ignore[misc]
