"""Scale/offset transform between real-world and stored coordinates."""

from __future__ import annotations

import math

from laskit.errors import CoordinateOutOfRange

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


def scale(raw: int, scale_factor: float, offset: float) -> float:
    """Convert a stored integer coordinate to its real-world value."""
    return raw * scale_factor + offset


def descale(value: float, scale_factor: float, offset: float) -> int:
    """Convert a real-world coordinate to the stored signed 32-bit integer.

    Rounds half away from zero, matching the usual LAS writers.

    Raises:
        CoordinateOutOfRange: If the scaled value is not finite or does not
            fit in a signed 32-bit integer.
    """
    scaled = (value - offset) / scale_factor
    if not math.isfinite(scaled):
        raise CoordinateOutOfRange(value, scale_factor, offset)
    magnitude = abs(scaled)
    raw = int(math.floor(magnitude))
    # floor(x + 0.5) would round 0.49999999999999994 up to 1.
    if magnitude - raw >= 0.5:
        raw += 1
    if scaled < 0:
        raw = -raw
    if raw < I32_MIN or raw > I32_MAX:
        raise CoordinateOutOfRange(value, scale_factor, offset)
    return raw
