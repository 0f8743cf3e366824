"""
core.rng
Deterministic RNG helpers that do NOT rely on Python's built-in hash() or random.

Goal:
- Same (session_id + step) => same float stream across platforms & runs.
- Every draw is 32-bit masked integer math, so replays are bit-for-bit identical.
"""

from __future__ import annotations

from typing import Callable

Rng = Callable[[], float]

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def mulberry32(seed: int) -> Rng:
    """Return a generator function yielding floats in [0, 1).

    Two generators built from the same seed produce identical sequences.
    Rebuild from the seed to restart the stream.
    """
    state = int(seed) & _MASK32

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        t = _imul(state ^ (state >> 15), state | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0

    return next_float


def _to_int32(x: int) -> int:
    x &= _MASK32
    return x - 0x100000000 if x & 0x80000000 else x


def create_seed(session_id: str, step_index: int) -> int:
    """Return a non-negative seed for (session_id, step_index).

    Rolling `h * 31 + unit` over the UTF-16 code units of "<session>-<step>",
    wrapped to signed 32-bit at every step. Not cryptographic.
    """
    text = f"{session_id}-{int(step_index)}"
    raw = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return abs(h)


def rng_for_step(session_id: str, step_index: int) -> Rng:
    """Create the market RNG for one decision step of a session."""
    return mulberry32(create_seed(session_id, step_index))
