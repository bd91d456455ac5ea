"""Seeded random streams, one per subsystem.

Every random decision in the spatial core (room sampling, de-overlap nudges,
corridor placement, Dijkstra-map tie-breaks, spawn placement) draws from a
named stream. Streams are derived from a single master seed, so:

1. A fixed master seed reproduces a whole dungeon and every AI step.
2. Extra draws in one subsystem never shift the sequence seen by another.

Usage:
    from cairn.util import rng
    rng.init(config.RANDOM_SEED)

    _rng = rng.get("map.dungeon")   # safe to cache at module level

Functions that take an explicit ``rng`` argument accept either a stream from
this module or a plain :class:`random.Random`, so tests can pass their own.

Domains in use:
    - "map.dungeon"   room sampling and corridor placement
    - "ai.dijkstra"   step_towards / step_away tie-breaking
    - "world.spawn"   random creature placement
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from cairn import config

if TYPE_CHECKING:
    from cairn.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """Cacheable handle to the current Random of one domain.

    The underlying Random is looked up on every call, so a handle taken before
    :func:`reset` keeps working afterwards and sees the new seed.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Return randomly selected element from range(start, stop, step)."""
        return self._rng().randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)

    def __repr__(self) -> str:
        return f"RNGStream(domain={self._domain!r})"


# Accepted wherever a function takes an explicit random source.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out one independent Random per domain, all derived from a seed."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Return the (cached) stream handle for ``domain``."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                # No seed: system entropy
                self._streams[domain] = Random()
            else:
                # crc32, not hash(): hash() of str is salted per process.
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Drop every stream and derive fresh ones from ``master_seed``.

        Handles returned by :meth:`get` stay valid.
        """
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Install the global provider, or reseed it if one already exists."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Return the global stream for ``domain``.

    Auto-initializes a provider seeded with :data:`cairn.config.RANDOM_SEED` on
    first use, so module-level ``_rng = rng.get(...)`` works at import time and
    a fresh process reproduces the same dungeon. Call :func:`init` to reseed.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(config.RANDOM_SEED)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reseed the global provider.

    Raises:
        RuntimeError: If :func:`init` (or :func:`get`) has never been called.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
