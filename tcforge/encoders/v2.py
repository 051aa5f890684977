"""Timecode v2 encoder."""

from typing import Iterable, Iterator

from tcforge.models import TICKS_PER_MS, RangeInterval

HEADER = "# timecode format v2"


def format_v2(intervals: Iterable[RangeInterval]) -> Iterator[str]:
    """Yield the header and one millisecond timestamp per frame."""
    yield HEADER
    time = 0.0
    for interval in intervals:
        for _ in range(interval.frame_count):
            yield f"{time / TICKS_PER_MS:.6f}"
            time += interval.interval
