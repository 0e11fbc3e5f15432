"""Single-precision arithmetic for scores and hour totals.

Scores and hour sums are rounded to IEEE 754 binary32 after every
operation. Tie-breaking and zero-score detection depend on it: two scores
that differ only below single precision compare equal.
"""

from __future__ import annotations

import struct
from typing import Iterable

_FLOAT32 = struct.Struct("<f")

# Tolerance for remaining-volume comparisons, in hours.
EPSILON = 1e-6


def to_f32(value: float) -> float:
    """Round `value` to the nearest binary32 float."""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def f32_sum(values: Iterable[float]) -> float:
    """Left-to-right sum with every partial result rounded to binary32."""
    total = 0.0
    for value in values:
        total = to_f32(total + to_f32(value))
    return total
