"""Timestamp files.

Each file holds one event per line: an ISO-8601 timestamp and an identifier
separated by whitespace, e.g.::

    2017-06-21T20:29:39.899441 1
    2017-06-21T20:29:41.419326 2

Blank lines and lines starting with ``#`` are ignored.
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from riprocess.errors import FileAccessError, MalformedRecord, NoTimestampFilesFound
from riprocess.models import TimestampRecord
from riprocess.ranges import select_range

logger = logging.getLogger(__name__)


def list_timestamp_files(
    directory: Path,
    first_name: str | None = None,
    last_name: str | None = None,
    pattern: re.Pattern | None = None,
) -> list[Path]:
    """List timestamp files in ``directory``, sorted by file name.

    Hidden files are skipped, as are names not fully matching ``pattern`` when
    one is given. ``first_name``/``last_name`` narrow the listing to an
    inclusive range of existing file names.
    """
    directory = Path(directory)
    try:
        paths = [
            p for p in directory.iterdir()
            if p.is_file()
            and not p.name.startswith(".")
            and (pattern is None or pattern.fullmatch(p.name))
        ]
    except OSError as e:
        raise FileAccessError(directory, e) from e

    paths.sort(key=lambda p: p.name)
    selected = select_range(paths, lambda p: p.name, first_name, last_name, kind="timestamp file")
    if not selected:
        raise NoTimestampFilesFound(directory)

    logger.debug("%s: %d timestamp files, %d selected", directory, len(paths), len(selected))
    return selected


def parse_record_line(line: str, path: Path, line_number: int) -> TimestampRecord | None:
    """Parse one line of a timestamp file; returns None for blank/comment lines."""
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    fields = line.split()
    if len(fields) != 2:
        raise MalformedRecord(path, line_number, f"expected 2 fields, found {len(fields)}")

    raw_timestamp, identifier = fields
    try:
        timestamp = datetime.fromisoformat(raw_timestamp)
    except ValueError:
        raise MalformedRecord(path, line_number, f"invalid timestamp {raw_timestamp!r}") from None

    return TimestampRecord(
        timestamp=timestamp,
        identifier=identifier,
        source_path=path,
        line_number=line_number,
    )


def read_records(paths: list[Path]) -> list[TimestampRecord]:
    """Read every record from ``paths``, in file order then line order."""
    records: list[TimestampRecord] = []
    for path in paths:
        try:
            with open(path, encoding="utf-8") as f:
                for line_number, line in enumerate(f, 1):
                    record = parse_record_line(line, path, line_number)
                    if record is not None:
                        records.append(record)
        except OSError as e:
            raise FileAccessError(path, e) from e
        except UnicodeDecodeError:
            raise MalformedRecord(path, 0, "file is not valid UTF-8 text") from None
    return records
