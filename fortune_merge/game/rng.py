"""Seeded random number generation.

String seeds are hashed with xmur3 and fed to mulberry32, a 32-bit
counter-based generator. Both operate on unsigned 32-bit integers so the
output stream is identical on every platform.
"""

from __future__ import annotations

import math
import struct
from datetime import date

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply (low 32 bits of the product)."""
    return (a * b) & _MASK32


def _utf16_units(text: str) -> tuple[int, ...]:
    """Split a string into UTF-16 code units."""
    data = text.encode("utf-16-le")
    return struct.unpack(f"<{len(data) // 2}H", data)


def xmur3(text: str) -> int:
    """Hash a string to an unsigned 32-bit seed (first xmur3 output)."""
    units = _utf16_units(text)
    h = (1779033703 ^ len(units)) & _MASK32
    for unit in units:
        h = _imul(h ^ unit, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK32

    h = _imul(h ^ (h >> 16), 2246822507)
    h = _imul(h ^ (h >> 13), 3266489909)
    return (h ^ (h >> 16)) & _MASK32


def normalize_seed(seed: str | int | float) -> int:
    """Reduce a string or numeric seed to an unsigned 32-bit integer."""
    if isinstance(seed, str):
        return xmur3(seed)
    if isinstance(seed, float) and not math.isfinite(seed):
        return 0
    return int(seed) & _MASK32


class SeededRandom:
    """mulberry32 generator. Calling it returns a float in [0, 1)."""

    def __init__(self, seed: str | int | float):
        self.seed = seed
        self._state = normalize_seed(seed)

    def __call__(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        s = self._state
        t = _imul(s ^ (s >> 15), 1 | s)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def random(self) -> float:
        """Alias of calling the generator."""
        return self()

    def index(self, length: int) -> int:
        """Draw an index in [0, length)."""
        return int(self() * length)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r})"


def create_seeded_random(seed: str | int | float) -> SeededRandom:
    """Create a deterministic generator for the given seed."""
    return SeededRandom(seed)


def daily_seed(day: date | None = None, salt: str = "") -> str:
    """Format a per-day seed string, optionally suffixed with a salt.

    Args:
        day: Calendar day (defaults to today).
        salt: Extra identity, e.g. a player name.

    Returns:
        "YYYY-MM-DD" or "YYYY-MM-DD:salt".
    """
    day = day or date.today()
    base = f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
    return f"{base}:{salt}" if salt else base
