"""Exception types raised by the image-list pipeline."""

from pathlib import Path


class RiprocessError(Exception):
    """Base class for every failure the CLI reports as a user error."""


class FileAccessError(RiprocessError):
    """A directory or file could not be read."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot read {path}: {cause.strerror or cause}")


class ManifestError(RiprocessError, ValueError):
    """The configuration file is missing fields or has invalid values."""


class RangeNotFound(RiprocessError):
    """A start/end marker does not match any item in the listing."""

    def __init__(self, kind: str, marker):
        self.kind = kind
        self.marker = marker
        super().__init__(f"No {kind} matches range marker {marker!r}")


class MalformedFilename(RiprocessError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed image file name {path.name!r}: {reason}")


class NoImagesFound(RiprocessError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No numbered images found in {path}")


class NoTimestampFilesFound(RiprocessError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No timestamp files found in {path}")


class MalformedRecord(RiprocessError):
    """A line of a timestamp file could not be parsed."""

    def __init__(self, path: Path, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{path}:{line_number}: {reason}")


class CountMismatch(RiprocessError):
    """Image and timestamp counts differ.

    ``group`` is the 1-based record group index, or None when the counts are
    totals across all record groups.
    """

    def __init__(self, images: int, timestamps: int, group: int | None = None):
        self.images = images
        self.timestamps = timestamps
        self.group = group
        where = f"record group {group}" if group is not None else "all record groups"
        super().__init__(
            f"Image count ({images}) does not match timestamp count ({timestamps}) "
            f"for {where}"
        )


class RecordCountMismatch(RiprocessError):
    """The number of timestamp files differs from the number of records."""

    def __init__(self, timestamp_files: int, records: int):
        self.timestamp_files = timestamp_files
        self.records = records
        super().__init__(
            f"Timestamp file count ({timestamp_files}) does not match "
            f"record count ({records})"
        )
