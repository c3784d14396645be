from __future__ import annotations

from collections.abc import Iterator

import pytest

from undercroft.config import DungeonConfig
from undercroft.util import rng
from undercroft.util.coordinates import Rect


@pytest.fixture(autouse=True)
def restore_global_rng() -> Iterator[None]:
    """Keep tests that touch the module-level RNG provider from leaking it."""
    saved_provider = rng._provider
    yield
    rng._provider = saved_provider


@pytest.fixture
def config() -> DungeonConfig:
    """Default tuning, with a pass cap so a misbehaving field fails fast."""
    return DungeonConfig(max_separation_iterations=10_000)


@pytest.fixture
def twin_rooms() -> tuple[Rect, Rect]:
    """Two large rooms side by side with centroids (0, 0) and (10, 0)."""
    return Rect(-3, -3, 7, 7), Rect(7, -3, 7, 7)
