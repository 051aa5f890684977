"""Conversion settings and the JSON manifest that carries them."""

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ConvertConfig:
    """Configuration for a timecode conversion."""

    version: str | None = None
    fps: float | None = None
    frames: int = 0
    fix: bool = False


@dataclass
class Manifest:
    """Top-level conversion manifest."""

    input: Path
    output: Path | None = None
    convert: ConvertConfig = field(default_factory=ConvertConfig)


def default_output_path(input_path: Path, version: str) -> Path:
    """``clip.txt`` converted to v2 becomes ``clip.v2.txt`` beside it."""
    return input_path.with_name(f"{input_path.stem}.{version}{input_path.suffix}")


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if not isinstance(data, dict) or "input" not in data:
        raise ValueError("Manifest must contain an 'input' field")

    try:
        convert = ConvertConfig(**data.get("convert", {}))
    except TypeError as e:
        raise ValueError(f"Invalid 'convert' section: {e}") from None
    output = data.get("output")

    return Manifest(
        input=Path(data["input"]),
        output=Path(output) if output else None,
        convert=convert,
    )
