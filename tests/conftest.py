from __future__ import annotations

from collections.abc import Iterator

import pytest

from cairn.util import rng


@pytest.fixture(autouse=True)
def seeded_rng() -> Iterator[None]:
    """Reseed every global stream so each test sees the same randomness."""
    rng.init(12345)
    yield
    rng.init(12345)
