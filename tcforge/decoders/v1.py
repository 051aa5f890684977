"""Timecode v1 decoder: a default rate plus sparse frame-range overrides."""

import logging
import re
from typing import Iterable

from tcforge.decoders.lines import content_lines
from tcforge.errors import TimecodeFormatError
from tcforge.models import TICKS_PER_SECOND, RangeInterval

logger = logging.getLogger(__name__)

ASSUME_RE = re.compile(r"^assume\s+(?P<rate>\d+(?:\.\d*)?|\.\d+)$", re.IGNORECASE)
RANGE_RE = re.compile(
    r"^(?P<start>\d+)\s*,\s*(?P<end>\d+)\s*,\s*(?P<rate>\d+(?:\.\d*)?|\.\d+)$"
)


def _rate_to_interval(text: str, line_number: int) -> float:
    rate = float(text)
    if rate <= 0:
        raise TimecodeFormatError(f"Frame rate must be positive: {text}", line_number)
    return TICKS_PER_SECOND / rate


def decode_v1(
    lines: Iterable[str], frames: int = 0, first_line: int = 1
) -> tuple[list[RangeInterval], float]:
    """Parse v1 body lines into contiguous intervals.

    Returns the interval list, gap-filled at the ``Assume`` rate, and that
    default interval. ``frames`` extends the list with one trailing
    default-rate interval when it exceeds the last overridden frame.
    """
    rows = content_lines(lines, first_line)

    default_interval = None
    for number, line in rows:
        match = ASSUME_RE.match(line)
        if match is None:
            raise TimecodeFormatError(f"Missing default rate before: {line}", number)
        default_interval = _rate_to_interval(match["rate"], number)
        break
    if default_interval is None:
        raise TimecodeFormatError("Missing default rate: no 'Assume' line found")

    overrides: list[RangeInterval] = []
    for number, line in rows:
        match = RANGE_RE.match(line)
        if match is None:
            raise TimecodeFormatError(f"Illegal line: {line}", number)
        start, end = int(match["start"]), int(match["end"])
        if start > end:
            raise TimecodeFormatError(
                f"The start frame {start} is greater than the end frame {end}", number
            )
        overrides.append(RangeInterval(start, end, _rate_to_interval(match["rate"], number)))

    overrides.sort(key=lambda i: i.start_frame)

    intervals: list[RangeInterval] = []
    last_start = last_end = -1
    for override in overrides:
        if override.start_frame <= last_end:
            raise TimecodeFormatError(
                f"Frame range {last_start}-{last_end} and "
                f"{override.start_frame}-{override.end_frame} overlapped"
            )
        if override.start_frame - last_end > 1:
            logger.debug("Filling frames %d-%d at the default rate", last_end + 1, override.start_frame - 1)
            intervals.append(RangeInterval(last_end + 1, override.start_frame - 1, default_interval))
        intervals.append(override)
        last_start, last_end = override.start_frame, override.end_frame

    total = last_end + 1
    if frames > total:
        intervals.append(RangeInterval(total, frames - 1, default_interval))

    return intervals, default_interval
