"""Command-line entry point: info and convert subcommands over the engine."""

import argparse
import logging
import sys
from pathlib import Path

from tcforge.engine import TimecodeInfo, convert, describe
from tcforge.manifest import ConvertConfig, Manifest, load_manifest
from tcforge.timecode import load


def _format_time(seconds: float) -> str:
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:06.3f}"


def print_info(path: Path, info: TimecodeInfo) -> None:
    rule = f"+{'-' * 23}+{'-' * 23}+{'-' * 12}+"
    print(f" Timecode File: {path} ({info.version.value})")
    print(f" {'Total Length: ':<20}{_format_time(info.total_seconds):<15}{'Total Frames: ':<20}{info.total_frames}")
    print(
        f" {'Average Frame Rate: ':<20}{info.average_frame_rate:<15.3f}"
        f"{'Default Frame Rate: ':<20}{info.default_frame_rate:.3f}"
    )
    print(rule)
    print(f"| {'Start Frame / Time':>21} | {'End Frame / Time':>21} | {'Frame Rate':>10} |")
    print(rule)
    for row in info.intervals:
        print(
            f"| {row.start_frame:>6} / {_format_time(row.start_time):<12} "
            f"| {row.end_frame:>6} / {_format_time(row.end_time):<12} "
            f"| {row.frame_rate:>10.6f} |"
        )
    print(rule)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="tcforge",
        description="tcforge: inspect and convert v1/v2 video timecode files.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    info = sub.add_parser("info", help="Show information about a timecode file")
    info.add_argument("input", type=Path, help="Timecode file")
    info.add_argument("--frames", type=int, default=0, help="Total frames (pads v1 files)")

    conv = sub.add_parser("convert", help="Convert a timecode file")
    conv.add_argument("input", nargs="?", type=Path, help="Timecode file")
    conv.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    conv.add_argument("--output", "-o", type=Path, help="Output file path, or - for stdout")
    conv.add_argument("--to", dest="version", help="Output version (v1 or v2); defaults to the other one")
    conv.add_argument("--fps", type=float, help="Default frame rate for v1 output")
    conv.add_argument("--frames", type=int, default=0, help="Total frames (pads v1 files)")
    conv.add_argument("--fix", action="store_true", help="Rewrite in the source version, rebased onto --fps")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8322, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from tcforge.web import create_app
        app = create_app()
        print(f"tcforge web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        if args.command == "info":
            timecode = load(args.input).with_total_frames(args.frames)
            print_info(args.input, describe(timecode))
            return

        if args.manifest:
            m = load_manifest(args.manifest)
        elif args.input:
            m = Manifest(
                input=args.input,
                output=args.output,
                convert=ConvertConfig(
                    version=args.version,
                    fps=args.fps,
                    frames=args.frames,
                    fix=args.fix,
                ),
            )
        else:
            print("Error: provide either an INPUT argument or --manifest.", file=sys.stderr)
            sys.exit(1)

        result = convert(m)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if str(result.output_path) != "-":
        print(f"Done! Output: {result.output_path}")
        print(f"  {result.source_version.value} -> {result.output_version.value}")
        print(f"  Frames: {result.total_frames} in {result.interval_count} intervals")
