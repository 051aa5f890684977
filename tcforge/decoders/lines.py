"""Line iteration shared by the timecode decoders."""

from typing import Iterable, Iterator


def content_lines(lines: Iterable[str], first_line: int = 1) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for every non-blank, non-comment line."""
    for number, raw in enumerate(lines, first_line):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        yield number, line
