"""Shared data types used across riprocess."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class ImageFile:
    """A numbered camera image."""

    index: int
    path: Path


@dataclass(frozen=True)
class TimestampRecord:
    """One line of a timestamp file."""

    timestamp: datetime
    identifier: str
    source_path: Path
    line_number: int


@dataclass(frozen=True)
class OutputPair:
    """A timestamp matched to the image taken at that time."""

    timestamp: datetime
    image_path: Path
