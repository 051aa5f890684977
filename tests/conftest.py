"""Shared test fixtures."""

from pathlib import Path

import pytest

from tcforge.models import RangeInterval

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def sample_v1_path() -> Path:
    return FIXTURES_DIR / "sample_v1.txt"


@pytest.fixture
def sample_v2_path() -> Path:
    return FIXTURES_DIR / "sample_v2.txt"


def _assert_contiguous(intervals: list[RangeInterval], total_frames: int) -> None:
    """Intervals must be sorted, non-overlapping and cover [0, total_frames - 1]."""
    expected_start = 0
    for interval in intervals:
        assert interval.start_frame == expected_start
        assert interval.end_frame >= interval.start_frame
        assert interval.interval > 0
        expected_start = interval.end_frame + 1
    assert expected_start == total_frames


@pytest.fixture
def assert_contiguous():
    return _assert_contiguous
