from __future__ import annotations

from collections.abc import Iterator

import pytest

from mapgen import config


@pytest.fixture(autouse=True)
def clear_configured_seed() -> Iterator[None]:
    """Make sure a locally configured RANDOM_SEED never leaks into tests."""
    saved = config.RANDOM_SEED
    config.RANDOM_SEED = None
    yield
    config.RANDOM_SEED = saved
