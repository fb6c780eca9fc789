"""
Seeded random number generation.

A string seed is hashed with xmur3 into four 32-bit words which initialise
an sfc32 generator (period ~2^128). All state arithmetic wraps at 32 bits so
the same seed produces the same stream on every platform:

    xmur3("tree")  ->  a, b, c, d
    sfc32(a, b, c, d)  ->  uint32, uint32, ...
    random() = uint32 / 2^32  in [0, 1)

Every derived distribution (ranges, ints, choices, chances) consumes exactly
one raw draw, which keeps the draw order of the grammar and leaf builders
reproducible.
"""

from collections.abc import Iterator, Sequence
import math
from typing import TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (low word of the product)."""
    return (a * b) & MASK32


def _rotl(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & MASK32


def _utf16_units(text: str) -> list[int]:
    """Code units of ``text`` as UTF-16, matching per-character hashing of
    strings outside the basic multilingual plane."""
    raw = text.encode("utf-16-le")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def xmur3(seed: str) -> Iterator[int]:
    """
    Hash a string into an endless stream of 32-bit seed words.

    Each character is XORed and multiplied into a running 32-bit state;
    every word drawn afterwards applies a final avalanche mix.
    """
    units = _utf16_units(seed)
    h = (1779033703 ^ len(units)) & MASK32
    for unit in units:
        h = _imul(h ^ unit, 3432918353)
        h = _rotl(h, 13)

    while True:
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        yield h


def sfc32(a: int, b: int, c: int, d: int) -> Iterator[int]:
    """Simple Fast Counter generator yielding raw unsigned 32-bit words."""
    a &= MASK32
    b &= MASK32
    c &= MASK32
    d &= MASK32
    while True:
        t = (a + b) & MASK32
        a = b ^ (b >> 9)
        b = (c + (c << 3)) & MASK32
        c = _rotl(c, 21)
        d = (d + 1) & MASK32
        t = (t + d) & MASK32
        c = (c + t) & MASK32
        yield t


class SeededRandom:
    """
    Deterministic uniform stream built from a string seed.

    There is no module-level instance: callers construct one per stream and
    pass it explicitly to whatever consumes randomness.

    Example:
        >>> rng = SeededRandom("my-tree-123")
        >>> rng.random() == SeededRandom("my-tree-123").random()
        True
    """

    def __init__(self, seed: str) -> None:
        self.seed = seed
        words = xmur3(seed)
        self._stream = sfc32(next(words), next(words), next(words), next(words))

    def __repr__(self) -> str:
        return f"SeededRandom({self.seed!r})"

    def next_uint32(self) -> int:
        """Advance the generator and return the raw 32-bit word."""
        return next(self._stream)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_uint32() / TWO_POW_32

    def random_range(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + self.random() * (high - low)

    def random_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        return math.floor(low + self.random() * (high - low + 1))

    def random_choice(self, items: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence."""
        if not items:
            raise ValueError("random_choice needs a non-empty sequence")
        return items[math.floor(self.random() * len(items))]

    def random_chance(self, probability: float) -> bool:
        """True with the given probability; exact at 0 and 1."""
        return self.random() < probability
