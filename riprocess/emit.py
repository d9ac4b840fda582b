"""Image list writer: ``timestamp;path`` lines for RiPROCESS import."""

from datetime import datetime
from typing import Iterable, TextIO

from riprocess.errors import MalformedFilename
from riprocess.models import OutputPair

DELIMITER = ";"


def format_timestamp(timestamp: datetime) -> str:
    # Always six fractional digits; the UTC offset only when the source had one.
    return timestamp.isoformat(timespec="microseconds")


def format_pair(pair: OutputPair) -> str:
    path = str(pair.image_path)
    if DELIMITER in path or "\n" in path or "\r" in path:
        raise MalformedFilename(pair.image_path, f"path contains {DELIMITER!r} or a line break")
    return f"{format_timestamp(pair.timestamp)}{DELIMITER}{path}"


def format_pairs(pairs: Iterable[OutputPair]) -> str:
    """Render pairs one per line, with a final newline (empty input gives "").

    Raises MalformedFilename before anything is rendered if a path would
    break the line format.
    """
    lines = [format_pair(pair) for pair in pairs]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def write_pairs(pairs: Iterable[OutputPair], sink: TextIO) -> None:
    sink.write(format_pairs(pairs))
