"""Snap noisy frame durations onto exact NTSC or integer frame rates.

Decimal timestamps and rates such as ``23.976024`` cannot represent
``24000/1001`` exactly, so a decoded duration is usually a hair off the value
the file was authored with. A duration ``d`` is snapped when ``1001e4 / d``
(drop-frame family) or ``1000e4 / d`` (integer family) is within a relative
error of ``1e-6`` of a whole number.
"""

from dataclasses import replace

from tcforge.models import RangeInterval

NTSC_NUMERATOR = 1001e4
INTEGER_NUMERATOR = 1000e4
SNAP_TOLERANCE = 1e-6


def _snap(duration: float, numerator: float) -> float | None:
    ratio = numerator / duration
    nearest = round(ratio)
    if nearest == 0 or abs(nearest - ratio) >= SNAP_TOLERANCE * ratio:
        return None
    return numerator / nearest


def normalize_interval(duration: float) -> float:
    """Return ``duration`` snapped to an exact rate, or unchanged."""
    for numerator in (NTSC_NUMERATOR, INTEGER_NUMERATOR):
        snapped = _snap(duration, numerator)
        if snapped is not None:
            return snapped
    return duration


def normalize_intervals(intervals: list[RangeInterval]) -> list[RangeInterval]:
    return [replace(i, interval=normalize_interval(i.interval)) for i in intervals]
