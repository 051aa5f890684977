"""Conversion pipeline: load, optionally rebase, and save a timecode file."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from tcforge.manifest import ConvertConfig, Manifest, default_output_path
from tcforge.models import TimecodeVersion
from tcforge.timecode import Timecode, load, parse_version, save

logger = logging.getLogger(__name__)


@dataclass
class IntervalRow:
    """One interval with the times its first and last frames are shown."""

    start_frame: int
    start_time: float
    end_frame: int
    end_time: float
    frame_rate: float


@dataclass
class TimecodeInfo:
    version: TimecodeVersion
    total_frames: int
    total_seconds: float
    average_frame_rate: float
    default_frame_rate: float
    intervals: list[IntervalRow] = field(default_factory=list)


@dataclass
class ConvertResult:
    output_path: Path
    source_version: TimecodeVersion
    output_version: TimecodeVersion
    total_frames: int = 0
    interval_count: int = 0


def describe(timecode: Timecode) -> TimecodeInfo:
    """Summarize a timecode for display."""
    rows = [
        IntervalRow(
            start_frame=i.start_frame,
            start_time=timecode.time_at_frame(i.start_frame),
            end_frame=i.end_frame,
            end_time=timecode.time_at_frame(i.end_frame),
            frame_rate=i.frame_rate,
        )
        for i in timecode.intervals
    ]
    return TimecodeInfo(
        version=timecode.version,
        total_frames=timecode.total_frames,
        total_seconds=timecode.total_seconds,
        average_frame_rate=timecode.average_frame_rate,
        default_frame_rate=timecode.default_frame_rate,
        intervals=rows,
    )


def prepare_output(timecode: Timecode, config: ConvertConfig) -> tuple[Timecode, TimecodeVersion]:
    """Pick the output version and apply fix mode to ``timecode``.

    Fix mode keeps the source version and rebases the default rate onto
    ``config.fps``. Otherwise the requested version, or the other one.
    """
    if not config.fix:
        version = parse_version(config.version) if config.version else timecode.version.inverse()
        return timecode, version

    if config.version and parse_version(config.version) is not timecode.version:
        logger.warning(
            "Fix mode writes %s; ignoring requested version %s",
            timecode.version.value, config.version,
        )
    if config.fps:
        logger.info("Rebasing default rate to %g fps", config.fps)
        timecode = timecode.rebase(config.fps)
    return timecode, timecode.version


def convert(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> ConvertResult:
    """Read, optionally rebase, and write a timecode file.

    Args:
        manifest: Conversion manifest.
        on_progress: Optional callback(stage_name, fraction_complete).
    """

    def _progress(stage: str, frac: float) -> None:
        logger.info(stage)
        if on_progress:
            on_progress(stage, frac)

    config = manifest.convert

    _progress("Reading timecode", 0.0)
    timecode = load(manifest.input).with_total_frames(config.frames)

    _progress("Choosing output format", 0.4)
    timecode, output_version = prepare_output(timecode, config)

    output = manifest.output or default_output_path(manifest.input, output_version.value)

    _progress(f"Writing {output_version.value} timecode", 0.6)
    save(timecode, output, version=output_version, fps=config.fps)

    _progress("Done", 1.0)
    return ConvertResult(
        output_path=Path(output),
        source_version=timecode.version,
        output_version=output_version,
        total_frames=timecode.total_frames,
        interval_count=len(timecode.intervals),
    )
