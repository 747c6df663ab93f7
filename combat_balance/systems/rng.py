"""Seeded sequential RNG (mulberry32) and per-fight seed derivation.

The Golden Rule: the full sequence of draws is a pure function of the
32-bit seed.  Changing the algorithm below changes every downstream
FightResult and must be treated as a breaking change.

mulberry32 step, all arithmetic mod 2**32:

    state += 0x6D2B79F5
    t  = (state ^ state >> 15) * (state | 1)
    t ^= t + (t ^ t >> 7) * (t | 61)
    out = (t ^ t >> 14) / 2**32
"""

from __future__ import annotations

import struct

import xxhash

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


class SeededRNG:
    """Sequential deterministic generator of floats in [0, 1).

    Not thread-safe: one instance must be consumed by one thread.  Use
    ``derive_fight_seed`` to give concurrent fights their own generators.
    """

    __slots__ = ("_seed", "_state", "_draws")

    def __init__(self, seed: int) -> None:
        self._seed = seed & _MASK32
        self._state = self._seed
        self._draws = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values produced so far."""
        return self._draws

    def next_float(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        s = (self._state + _INCREMENT) & _MASK32
        self._state = s
        t = ((s ^ (s >> 15)) * (s | 1)) & _MASK32
        t = (((t + ((t ^ (t >> 7)) * (t | 61))) & _MASK32) ^ t)
        self._draws += 1
        return (t ^ (t >> 14)) / _TWO_POW_32


def derive_fight_seed(master_seed: int, fight_index: int) -> int:
    """32-bit sub-seed for fight *fight_index* of a run seeded with *master_seed*.

    Both inputs are reduced mod 2**32 first, matching how ``SeededRNG``
    treats its seed.  Pure function of its arguments, so split-stream runs
    reproduce regardless of how fights are scheduled across workers.
    """
    payload = struct.pack("<II", master_seed & _MASK32, fight_index & _MASK32)
    return xxhash.xxh32(payload).intdigest()
