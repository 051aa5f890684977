"""Timecode v2 decoder: one millisecond timestamp per frame.

Consecutive frames whose deltas agree within ``DIFF_TOLERANCE`` form a run,
and each run becomes one interval whose duration is the run's average frame
delta. Frames 0 and 1 may share a timestamp (some muxers write the first
frame twice); a duplicate anywhere else is an error.
"""

import logging
import math
from typing import Iterable

from tcforge.decoders.lines import content_lines
from tcforge.errors import TimecodeFormatError
from tcforge.models import TICKS_PER_MS, RangeInterval

logger = logging.getLogger(__name__)

DIFF_TOLERANCE = 1e-3


def _parse_timestamp(text: str, line_number: int) -> float:
    try:
        value = float(text)
    except ValueError:
        raise TimecodeFormatError(f"Illegal timestamp: {text}", line_number) from None
    if not math.isfinite(value):
        raise TimecodeFormatError(f"Illegal timestamp: {text}", line_number)
    return value


def _run_duration(first_time: float, last_time: float, steps: int) -> float:
    return TICKS_PER_MS * (last_time - first_time) / steps


def decode_v2(lines: Iterable[str], first_line: int = 1) -> tuple[list[RangeInterval], float]:
    """Parse v2 body lines into run-length compressed intervals.

    Returns the interval list and the duration of the final run, which serves
    as the timecode's default interval.
    """
    intervals: list[RangeInterval] = []
    last_time: float | None = None
    last_diff: float | None = None
    first_time = 0.0
    first_frame = 0
    frame = -1

    for number, line in content_lines(lines, first_line):
        current = _parse_timestamp(line, number)
        frame += 1

        if last_time is None:
            if current < 0:
                raise TimecodeFormatError(f"Negative timestamp: {line}", number)
            last_time = first_time = current
            continue

        if current == last_time:
            if frame != 1:
                raise TimecodeFormatError(
                    f"Frame {frame - 1} and {frame} are displayed at the same time", number
                )
            continue

        if current < last_time:
            raise TimecodeFormatError(
                f"Frame {frame} at {current} precedes frame {frame - 1} at {last_time}", number
            )

        diff = current - last_time
        if last_diff is None or abs(diff - last_diff) < DIFF_TOLERANCE:
            last_diff = diff
            last_time = current
            continue

        duration = _run_duration(first_time, last_time, frame - 1 - first_frame)
        intervals.append(RangeInterval(first_frame, frame - 2, duration))
        logger.debug("Run break at frame %d (%.6f ms -> %.6f ms)", frame - 1, last_diff, diff)
        first_frame = frame - 1
        first_time = last_time
        last_diff = diff
        last_time = current

    if frame < 1:
        raise TimecodeFormatError("At least two timestamps are needed to derive frame durations")

    final = RangeInterval(first_frame, frame, _run_duration(first_time, last_time, frame - first_frame))
    if final.interval <= 0:
        raise TimecodeFormatError(f"Frames {first_frame}-{frame} have zero duration")
    intervals.append(final)

    return intervals, final.interval
