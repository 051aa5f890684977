"""Shared data types used across tcforge."""

from dataclasses import dataclass
from enum import Enum

TICKS_PER_SECOND = 10_000_000
TICKS_PER_MS = 10_000


class TimecodeVersion(Enum):
    """Timecode file format version."""

    V1 = "v1"
    V2 = "v2"

    def inverse(self) -> "TimecodeVersion":
        return TimecodeVersion.V2 if self is TimecodeVersion.V1 else TimecodeVersion.V1


@dataclass(frozen=True)
class RangeInterval:
    """A closed frame range whose frames all share one duration in ticks."""

    start_frame: int
    end_frame: int
    interval: float

    @property
    def frame_count(self) -> int:
        return self.end_frame - self.start_frame + 1

    @property
    def duration(self) -> float:
        """Total duration of the range in ticks."""
        return self.interval * self.frame_count

    @property
    def frame_rate(self) -> float:
        return TICKS_PER_SECOND / self.interval
