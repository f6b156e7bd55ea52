"""Deterministic random number generation with isolated streams.

Every generation subsystem (room layouts, entity seeding, etc.) draws from
its own stream derived from a master seed. Streams are identified by
hierarchical domain names so that one subsystem consuming more or fewer
numbers never shifts the sequence seen by another.

Usage:
    # At server startup
    from cairn.util import rng
    rng.init(config.RANDOM_SEED)

    # In any module - cache the stream reference
    _rng = rng.get("map.rooms")

    def pick_width() -> int:
        return _rng.randint(5, 12)

Domain naming convention:
    - "map.rooms", "map.layout"
    - "world.entities"
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from cairn.types import RandomSeed


T = TypeVar("T")


class RNGStream:
    """Proxy that forwards to the current Random instance for a domain.

    Callers may hold on to a stream; after ``rng.reset()`` it transparently
    uses the freshly seeded generator.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng().random()

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng().randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)

    def shuffle(self, x: list) -> None:
        """Shuffle list x in place."""
        self._rng().shuffle(x)

    def getrandbits(self, k: int) -> int:
        return self._rng().getrandbits(k)


# Functions that accept randomness take either a plain Random or a stream.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out one lazily created Random per domain, seeded from the master."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): hash() is salted per interpreter run
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Drop every stream and reseed from ``master_seed``.

        Existing RNGStream proxies stay valid.
        """
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize (or reseed) the global provider."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get the stream for ``domain``, auto-initializing an unseeded provider."""
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
