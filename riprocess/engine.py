"""Orchestrator: pairs the images and timestamps defined by a Manifest."""

import logging
from dataclasses import dataclass, field
from typing import Callable

from riprocess.errors import CountMismatch, RecordCountMismatch
from riprocess.manifest import Manifest, RecordGroup
from riprocess.models import ImageFile, OutputPair, TimestampRecord
from riprocess.readers.images import list_images
from riprocess.readers.timestamps import list_timestamp_files, read_records

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    pairs: list[OutputPair] = field(default_factory=list)
    group_sizes: list[int] = field(default_factory=list)


def _bound(group_value, manifest_value):
    return group_value if group_value is not None else manifest_value


def _check_start_times(groups: tuple[RecordGroup, ...]) -> None:
    """Warn when record start times are not ascending; output order is never changed."""
    for i in range(1, len(groups)):
        prev, cur = groups[i - 1].start_time, groups[i].start_time
        if (prev.tzinfo is None) != (cur.tzinfo is None):
            continue
        if cur < prev:
            logger.warning(
                "Record group %d starts at %s, before group %d (%s); "
                "output keeps declaration order",
                i + 1, cur.isoformat(), i, prev.isoformat(),
            )


def _match_declared(
    manifest: Manifest,
    progress: Callable[[str, float], None],
) -> list[tuple[list[ImageFile], list[TimestampRecord]]]:
    """Each group selects its own images and timestamp files."""
    matched = []
    total = len(manifest.records)
    for i, group in enumerate(manifest.records, 1):
        progress(f"Reading record group {i}/{total}", (i - 1) / total)
        images = list_images(
            manifest.image_dir,
            _bound(group.first_image, manifest.first_image),
            _bound(group.last_image, manifest.last_image),
            pattern=manifest.image_pattern,
        )
        paths = list_timestamp_files(
            manifest.timestamp_dir,
            _bound(group.first_timestamp_file, manifest.first_timestamp_file),
            _bound(group.last_timestamp_file, manifest.last_timestamp_file),
            pattern=manifest.timestamp_pattern,
        )
        records = read_records(paths)
        if len(images) != len(records):
            raise CountMismatch(images=len(images), timestamps=len(records), group=i)
        logger.info("Record group %d: %d images from %d timestamp files", i, len(images), len(paths))
        matched.append((images, records))
    return matched


def _match_one_file_per_group(
    manifest: Manifest,
    progress: Callable[[str, float], None],
) -> list[tuple[list[ImageFile], list[TimestampRecord]]]:
    """Groups without ranges: timestamp file i belongs to group i.

    Images are handed out consecutively, each group taking as many as its
    timestamp file has records.
    """
    progress("Listing images", 0.0)
    images = list_images(
        manifest.image_dir,
        manifest.first_image,
        manifest.last_image,
        pattern=manifest.image_pattern,
    )
    paths = list_timestamp_files(
        manifest.timestamp_dir,
        manifest.first_timestamp_file,
        manifest.last_timestamp_file,
        pattern=manifest.timestamp_pattern,
    )
    if len(paths) != len(manifest.records):
        raise RecordCountMismatch(timestamp_files=len(paths), records=len(manifest.records))

    per_group = []
    for i, path in enumerate(paths, 1):
        progress(f"Reading {path.name}", i / (len(paths) + 1))
        per_group.append(read_records([path]))

    timestamp_count = sum(len(records) for records in per_group)
    if timestamp_count != len(images):
        raise CountMismatch(images=len(images), timestamps=timestamp_count)

    matched = []
    offset = 0
    for i, records in enumerate(per_group, 1):
        group_images = images[offset:offset + len(records)]
        offset += len(records)
        logger.info("Record group %d: %d images from %s", i, len(group_images), paths[i - 1].name)
        matched.append((group_images, records))
    return matched


def assemble(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> AssemblyResult:
    """Pair every configured image with its timestamp.

    Every record group is validated before any pair is produced, so a
    mismatch anywhere yields an exception and no output.

    Args:
        manifest: Validated image-list manifest.
        on_progress: Optional callback(stage_name, fraction_complete).
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    groups = manifest.records
    _check_start_times(groups)

    if len(groups) > 1 and not any(group.has_ranges for group in groups):
        matched = _match_one_file_per_group(manifest, _progress)
    else:
        matched = _match_declared(manifest, _progress)

    result = AssemblyResult()
    for images, records in matched:
        result.pairs.extend(
            OutputPair(timestamp=record.timestamp, image_path=image.path)
            for image, record in zip(images, records)
        )
        result.group_sizes.append(len(images))

    _progress("Done", 1.0)
    return result
