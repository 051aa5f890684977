"""Timecode v1 encoder."""

from typing import Iterable, Iterator

from tcforge.models import TICKS_PER_SECOND, RangeInterval

HEADER = "# timecode format v1"


def format_v1(intervals: Iterable[RangeInterval], default_interval: float) -> Iterator[str]:
    """Yield v1 lines: the ``Assume`` rate, then every range that differs from it.

    Ranges running at ``default_interval`` are left out; a v1 decoder fills
    them back in from the ``Assume`` line.
    """
    yield HEADER
    yield f"Assume {TICKS_PER_SECOND / default_interval:.6f}"
    for interval in intervals:
        if interval.interval != default_interval:
            yield f"{interval.start_frame},{interval.end_frame},{interval.frame_rate:.6f}"
