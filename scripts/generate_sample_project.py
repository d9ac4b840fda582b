#!/usr/bin/env python3
"""Generate a synthetic camera project for trying ``riprocess image-list``.

Produces, under the output directory:
  images/       DSC00001.JPG .. one empty file per event
  timestamps/   one .eif file per record, N events each, 1.5 s apart
  manifest.json a manifest using the start_times shorthand
"""

import json
import sys
from datetime import datetime, timedelta
from pathlib import Path


def generate_sample_project(output: Path, records: int = 2, events_per_record: int = 3) -> None:
    images = output / "images"
    timestamps = output / "timestamps"
    images.mkdir(parents=True, exist_ok=True)
    timestamps.mkdir(parents=True, exist_ok=True)

    start = datetime(2017, 6, 21, 20, 28, 38)
    image_number = 1
    start_times = []
    for r in range(records):
        record_start = start + timedelta(minutes=r)
        start_times.append(record_start.isoformat())
        lines = []
        for event in range(1, events_per_record + 1):
            t = record_start + timedelta(seconds=1.5 * event)
            lines.append(f"{t.isoformat(timespec='microseconds')} {event}")
            (images / f"DSC{image_number:05d}.JPG").write_bytes(b"")
            image_number += 1
        name = record_start.strftime("%y%m%d_%H%M%S") + ".eif"
        (timestamps / name).write_text("\n".join(lines) + "\n")

    manifest = {
        "version": "1",
        "image_dir": "images",
        "timestamp_dir": "timestamps",
        "timestamp_pattern": r"^\d{6}_\d{6}\.eif$",
        "start_times": start_times,
    }
    (output / "manifest.json").write_text(json.dumps(manifest, indent=2) + "\n")
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("sample_project")
    generate_sample_project(out)
