#!/usr/bin/env python3
"""Generate a synthetic variable-frame-rate v2 timecode file for manual testing.

Produces 360 frames in four sections:
  0-119    23.976 fps (film)
  120-239  29.97 fps (NTSC video)
  240-299  25 fps (PAL)
  300-359  23.976 fps (film)
"""

import sys
from pathlib import Path

SECTIONS = [
    (120, 24000 / 1001),
    (120, 30000 / 1001),
    (60, 25.0),
    (60, 24000 / 1001),
]


def generate_test_timecodes(output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)

    lines = ["# timecode format v2"]
    time_ms = 0.0
    for frames, fps in SECTIONS:
        for _ in range(frames):
            lines.append(f"{time_ms:.6f}")
            time_ms += 1000.0 / fps

    output.write_text("\n".join(lines) + "\n")
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/synthetic_v2.txt")
    generate_test_timecodes(out)
