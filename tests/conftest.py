from __future__ import annotations

from collections.abc import Iterator

import pytest

from cairn.util import rng


@pytest.fixture(autouse=True)
def deterministic_rng() -> Iterator[None]:
    """Reseed every RNG stream before each test."""
    rng.init("test-seed")
    yield
    rng.init("test-seed")
