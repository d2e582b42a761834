"""Mersenne Twister (MT19937) pseudo-random number generator."""

from __future__ import annotations

import time
from collections.abc import Iterable

_N = 624
_M = 397
_MATRIX_A = 0x9908B0DF
_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_MASK32 = 0xFFFFFFFF
_DEFAULT_SEED = 5489
_ARRAY_SEED = 19650218


class Random:
    """MT19937 generator producing 32-bit integers and reals in [0, 1)."""

    def __init__(self, seed: int | None = None) -> None:
        self._mt = [0] * _N
        self._mti = _N + 1
        if seed is None:
            seed = time.time_ns() // 1000
        self._init_long(seed)

    @classmethod
    def from_key(cls, keys: Iterable[int]) -> "Random":
        """Create a generator initialised from a sequence of integer keys."""
        key = list(keys)
        if not key:
            raise ValueError("key sequence must not be empty")
        rng = cls(_ARRAY_SEED)
        mt = rng._mt
        i, j = 1, 0
        for _ in range(max(_N, len(key))):
            prev = mt[i - 1]
            mt[i] = ((mt[i] ^ ((prev ^ (prev >> 30)) * 1664525)) + key[j] + j) & _MASK32
            i += 1
            j += 1
            if i >= _N:
                mt[0] = mt[_N - 1]
                i = 1
            if j >= len(key):
                j = 0
        for _ in range(_N - 1):
            prev = mt[i - 1]
            mt[i] = ((mt[i] ^ ((prev ^ (prev >> 30)) * 1566083941)) - i) & _MASK32
            i += 1
            if i >= _N:
                mt[0] = mt[_N - 1]
                i = 1
        mt[0] = 0x80000000
        return rng

    def _init_long(self, seed: int) -> None:
        mt = self._mt
        mt[0] = seed & _MASK32
        for i in range(1, _N):
            prev = mt[i - 1]
            mt[i] = (1812433253 * (prev ^ (prev >> 30)) + i) & _MASK32
        self._mti = _N

    def _twist(self) -> None:
        if self._mti == _N + 1:
            self._init_long(_DEFAULT_SEED)
        mt = self._mt
        for kk in range(_N):
            y = (mt[kk] & _UPPER_MASK) | (mt[(kk + 1) % _N] & _LOWER_MASK)
            mag = _MATRIX_A if y & 1 else 0
            mt[kk] = mt[(kk + _M) % _N] ^ (y >> 1) ^ mag
        self._mti = 0

    def gen_int32(self) -> int:
        """Return a random integer in [0, 0xffffffff]."""
        if self._mti >= _N:
            self._twist()
        y = self._mt[self._mti]
        self._mti += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & _MASK32

    def gen_real2(self) -> float:
        """Return a random real in [0, 1)."""
        return self.gen_int32() * (1.0 / 4294967296.0)

    def gen_int(self, range_: int) -> int:
        """Return a random integer in [0, range_)."""
        return int(self.gen_real2() * range_)