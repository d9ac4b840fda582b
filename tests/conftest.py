"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def fixture_images_dir() -> Path:
    return FIXTURES_DIR / "images"


@pytest.fixture
def fixture_timestamps_dir() -> Path:
    return FIXTURES_DIR / "timestamps"


def make_images(directory: Path, numbers, template: str = "IMG_{:04d}.jpg") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for n in numbers:
        (directory / template.format(n)).write_bytes(b"")
    return directory


def make_timestamp_file(directory: Path, name: str, timestamps: list[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("".join(f"{ts} {i}\n" for i, ts in enumerate(timestamps, 1)))
    return path


def write_manifest(path: Path, **data) -> Path:
    path.write_text(json.dumps(data))
    return path
