"""The timecode model and its v1/v2 read/write entry points."""

import io
import logging
import math
import re
import sys
from collections import Counter
from dataclasses import dataclass, replace
from itertools import chain
from pathlib import Path
from typing import Iterable, TextIO

from tcforge.decoders.v1 import decode_v1
from tcforge.decoders.v2 import decode_v2
from tcforge.encoders.v1 import format_v1
from tcforge.encoders.v2 import format_v2
from tcforge.errors import OutputExistsError, TimecodeFormatError, UnsupportedVersionError
from tcforge.models import TICKS_PER_SECOND, RangeInterval, TimecodeVersion
from tcforge.normalize import normalize_interval, normalize_intervals

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^#\s*time(?:code|stamp) format (v[12])\b", re.IGNORECASE)
VERSION_RE = re.compile(r"^v?([12])$", re.IGNORECASE)


def parse_version(value: str | TimecodeVersion) -> TimecodeVersion:
    """Accept ``v1``/``V2``/``1``... and return the matching version."""
    if isinstance(value, TimecodeVersion):
        return value
    match = VERSION_RE.match(str(value).strip())
    if match is None:
        raise UnsupportedVersionError(f"Unsupported timecode version: {value!r}")
    return TimecodeVersion(f"v{match[1]}")


def _check_fps(fps: float) -> None:
    if not math.isfinite(fps) or fps <= 0:
        raise ValueError(f"Frame rate must be a positive finite number: {fps}")


@dataclass(frozen=True)
class Timecode:
    """Frame timing as an ordered, gap-free sequence of RangeIntervals.

    Instances are immutable; ``with_total_frames`` and ``rebase`` return new
    objects.
    """

    version: TimecodeVersion
    intervals: tuple[RangeInterval, ...] = ()
    default_interval: float | None = None

    def __post_init__(self):
        object.__setattr__(self, "intervals", tuple(self.intervals))

    @property
    def total_frames(self) -> int:
        return self.intervals[-1].end_frame + 1 if self.intervals else 0

    @property
    def total_length(self) -> float:
        """Total playback length in ticks."""
        return sum(i.duration for i in self.intervals)

    @property
    def total_seconds(self) -> float:
        return self.total_length / TICKS_PER_SECOND

    @property
    def average_frame_rate(self) -> float:
        length = self.total_length
        return TICKS_PER_SECOND * self.total_frames / length if length else 0.0

    @property
    def mode_interval(self) -> float | None:
        """The most common interval duration; the first one seen wins a tie."""
        if not self.intervals:
            return None
        counts = Counter(i.interval for i in self.intervals)
        return counts.most_common(1)[0][0]

    @property
    def default_frame_rate(self) -> float:
        interval = self.default_interval or self.mode_interval
        return TICKS_PER_SECOND / interval if interval else 0.0

    def time_at_frame(self, frame: int) -> float:
        """Seconds elapsed before ``frame`` is shown.

        Frames past the end clamp to the total length.
        """
        if frame < 0:
            raise ValueError(f"Frame number must not be negative: {frame}")
        time = 0.0
        for interval in self.intervals:
            time += interval.duration
            if interval.end_frame < frame:
                continue
            remaining = interval.interval * (interval.end_frame - frame + 1)
            return round(time - remaining) / TICKS_PER_SECOND
        return round(time) / TICKS_PER_SECOND

    def frame_at_time(self, seconds: float) -> int:
        """Frame number on screen at ``seconds``, clamped to the last frame."""
        if seconds < 0:
            raise ValueError(f"Time must not be negative: {seconds}")
        if not self.intervals:
            raise ValueError("Timecode has no frames")
        tick = seconds * TICKS_PER_SECOND
        time = 0.0
        last_frame = self.intervals[-1].end_frame
        for interval in self.intervals:
            time += interval.duration
            if time < tick:
                continue
            delta_frame = round((time - tick) / interval.interval)
            return min(interval.end_frame - delta_frame + 1, last_frame)
        return last_frame

    def with_total_frames(self, frames: int) -> "Timecode":
        """Extend a v1 timecode to ``frames`` frames at the default rate.

        Only v1 files describe frames beyond their last override, so this is a
        no-op for v2 timecodes or when ``frames`` does not exceed the total.
        """
        total = self.total_frames
        if self.version is not TimecodeVersion.V1 or frames <= total:
            return self
        tail = RangeInterval(total, frames - 1, self.default_interval)
        return replace(self, intervals=self.intervals + (tail,))

    def rebase(self, fps: float) -> "Timecode":
        """Move every frame running at the default rate onto ``fps``.

        Interval boundaries are kept. For v1, intervals at the ``Assume`` rate
        (the implicit fill) take the new duration. v2 intervals are measured,
        not filled, so only ``default_interval`` changes.
        """
        _check_fps(fps)
        new = normalize_interval(TICKS_PER_SECOND / fps)
        if self.version is not TimecodeVersion.V1:
            return replace(self, default_interval=new)
        old = self.default_interval
        intervals = tuple(
            replace(i, interval=new) if i.interval == old else i for i in self.intervals
        )
        return replace(self, intervals=intervals, default_interval=new)


def decode(
    stream: Iterable[str],
    version: str | TimecodeVersion | None = None,
    frames: int = 0,
) -> Timecode:
    """Read a timecode from a line iterable such as an open text file.

    The ``# timecode format vN`` header picks the decoder. When ``version`` is
    given the header may be absent, but it must not disagree. ``frames`` pads a
    v1 timecode to that many frames and is ignored for v2.
    """
    requested = parse_version(version) if version is not None else None
    lines = iter(stream)
    first = next(lines, None)
    if first is None:
        raise TimecodeFormatError("Empty timecode file")

    match = HEADER_RE.match(first.strip())
    if match:
        detected = TimecodeVersion(match[1].lower())
        if requested is not None and requested is not detected:
            raise TimecodeFormatError(
                f"Header declares {detected.value} but {requested.value} was requested", 1
            )
        body, first_line = lines, 2
    elif requested is not None:
        detected = requested
        body, first_line = chain([first], lines), 1
    else:
        raise TimecodeFormatError(f"Illegal file header or timecode version: {first.strip()}", 1)

    if detected is TimecodeVersion.V1:
        intervals, default_interval = decode_v1(body, frames=frames, first_line=first_line)
    else:
        intervals, default_interval = decode_v2(body, first_line=first_line)

    timecode = Timecode(
        version=detected,
        intervals=normalize_intervals(intervals),
        default_interval=normalize_interval(default_interval),
    )
    logger.debug(
        "Decoded %s timecode: %d frames in %d intervals",
        detected.value, timecode.total_frames, len(timecode.intervals),
    )
    return timecode


def encode(
    timecode: Timecode,
    stream: TextIO,
    version: str | TimecodeVersion = TimecodeVersion.V2,
    fps: float | None = None,
) -> None:
    """Write ``timecode`` to ``stream`` in the requested format.

    For v1, ``fps`` sets the ``Assume`` rate; otherwise the most common
    interval duration is used.
    """
    version = parse_version(version)
    if version is TimecodeVersion.V1:
        if fps is not None:
            _check_fps(fps)
            default_interval = normalize_interval(TICKS_PER_SECOND / fps)
        else:
            default_interval = timecode.mode_interval or timecode.default_interval
        if default_interval is None:
            raise ValueError("Cannot choose a default rate for an empty timecode; pass fps")
        lines = format_v1(timecode.intervals, default_interval)
    else:
        lines = format_v2(timecode.intervals)

    for line in lines:
        stream.write(line + "\n")


def load(
    path: str | Path,
    version: str | TimecodeVersion | None = None,
    frames: int = 0,
) -> Timecode:
    """Decode a timecode file; ``"-"`` reads standard input."""
    if str(path) == "-":
        return decode(sys.stdin, version=version, frames=frames)
    with open(path, encoding="utf-8-sig") as f:
        return decode(f, version=version, frames=frames)


def save(
    timecode: Timecode,
    path: str | Path,
    version: str | TimecodeVersion = TimecodeVersion.V2,
    fps: float | None = None,
) -> None:
    """Encode to a new file, never overwriting; ``"-"`` writes standard output."""
    if str(path) == "-":
        encode(timecode, sys.stdout, version=version, fps=fps)
        return
    buffer = io.StringIO()
    encode(timecode, buffer, version=version, fps=fps)
    try:
        with open(path, "x", encoding="utf-8", newline="\n") as f:
            f.write(buffer.getvalue())
    except FileExistsError:
        raise OutputExistsError(f"Output file already exists: {path}") from None
