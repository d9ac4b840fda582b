"""JSON manifest schema: the contract between CLI/API and engine."""

import json
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from riprocess.errors import FileAccessError, ManifestError
from riprocess.readers.images import IMAGE_FILE_PATTERN


@dataclass(frozen=True)
class RecordGroup:
    """One RiPROCESS camera record.

    Range bounds left as None fall back to the manifest-level bounds.
    """

    start_time: datetime
    first_image: int | None = None
    last_image: int | None = None
    first_timestamp_file: str | None = None
    last_timestamp_file: str | None = None

    @property
    def has_ranges(self) -> bool:
        return any(
            bound is not None
            for bound in (
                self.first_image,
                self.last_image,
                self.first_timestamp_file,
                self.last_timestamp_file,
            )
        )


@dataclass(frozen=True)
class Manifest:
    """Top-level image-list configuration."""

    image_dir: Path
    timestamp_dir: Path
    records: tuple[RecordGroup, ...]
    version: str = "1"
    first_image: int | None = None
    last_image: int | None = None
    first_timestamp_file: str | None = None
    last_timestamp_file: str | None = None
    image_pattern: re.Pattern = IMAGE_FILE_PATTERN
    timestamp_pattern: re.Pattern | None = None


def _parse_time(value, where: str) -> datetime:
    if not isinstance(value, str):
        raise ManifestError(f"{where}: start_time must be an ISO-8601 string, got {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ManifestError(f"{where}: invalid start_time {value!r}") from None


def _optional_int(data: dict, key: str, where: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ManifestError(f"{where}: {key} must be an integer, got {value!r}")
    return value


def _optional_str(data: dict, key: str, where: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ManifestError(f"{where}: {key} must be a string, got {value!r}")
    return value


def _pattern(value, key: str) -> re.Pattern | None:
    if value is None:
        return None
    try:
        return re.compile(value)
    except (re.error, TypeError) as e:
        raise ManifestError(f"{key} is not a valid regular expression: {e}") from None


def _records(data: dict) -> tuple[RecordGroup, ...]:
    if "records" in data:
        entries = data["records"]
        if not isinstance(entries, list) or not entries:
            raise ManifestError("'records' must be a non-empty list")
        groups = []
        for i, entry in enumerate(entries, 1):
            where = f"records[{i}]"
            if not isinstance(entry, dict) or "start_time" not in entry:
                raise ManifestError(f"{where}: each record must be an object with a 'start_time'")
            groups.append(
                RecordGroup(
                    start_time=_parse_time(entry["start_time"], where),
                    first_image=_optional_int(entry, "first_image", where),
                    last_image=_optional_int(entry, "last_image", where),
                    first_timestamp_file=_optional_str(entry, "first_timestamp_file", where),
                    last_timestamp_file=_optional_str(entry, "last_timestamp_file", where),
                )
            )
        return tuple(groups)

    start_times = data.get("start_times")
    if not isinstance(start_times, list) or not start_times:
        raise ManifestError("Manifest must contain a non-empty 'records' or 'start_times' list")
    return tuple(
        RecordGroup(start_time=_parse_time(value, f"start_times[{i}]"))
        for i, value in enumerate(start_times, 1)
    )


def parse_manifest(data: dict, base_dir: Path | None = None, expand_user: bool = True) -> Manifest:
    """Validate decoded manifest JSON.

    Relative directories are resolved against ``base_dir`` when given. A
    leading ``~`` is expanded only when ``expand_user`` is set.
    """
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object")
    if "image_dir" not in data or "timestamp_dir" not in data:
        raise ManifestError("Manifest must contain 'image_dir' and 'timestamp_dir' fields")

    def _dir(key: str) -> Path:
        value = data[key]
        if not isinstance(value, str):
            raise ManifestError(f"{key} must be a string, got {value!r}")
        path = Path(value)
        if expand_user:
            path = path.expanduser()
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return path

    image_pattern = _pattern(data.get("image_pattern"), "image_pattern")
    if image_pattern is not None and "image_number" not in image_pattern.groupindex:
        raise ManifestError("image_pattern must define an 'image_number' group")

    return Manifest(
        version=str(data.get("version", "1")),
        image_dir=_dir("image_dir"),
        timestamp_dir=_dir("timestamp_dir"),
        records=_records(data),
        first_image=_optional_int(data, "first_image", "manifest"),
        last_image=_optional_int(data, "last_image", "manifest"),
        first_timestamp_file=_optional_str(data, "first_timestamp_file", "manifest"),
        last_timestamp_file=_optional_str(data, "last_timestamp_file", "manifest"),
        image_pattern=image_pattern or IMAGE_FILE_PATTERN,
        timestamp_pattern=_pattern(data.get("timestamp_pattern"), "timestamp_pattern"),
    )


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, e) from e
    except UnicodeDecodeError:
        raise ManifestError(f"{path} is not valid UTF-8 text") from None
    data = json.loads(text)
    return parse_manifest(data, base_dir=path.parent)
