"""Tests for manifest loading and validation."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from conftest import FIXTURES_DIR, write_manifest
from riprocess.errors import FileAccessError, ManifestError
from riprocess.manifest import Manifest, RecordGroup, load_manifest, parse_manifest
from riprocess.readers.images import IMAGE_FILE_PATTERN

MINIMAL = {
    "image_dir": "/data/images",
    "timestamp_dir": "/data/timestamps",
    "records": [{"start_time": "2017-06-21T20:29:00"}],
}


class TestRecordGroup:
    def test_defaults(self):
        group = RecordGroup(start_time=datetime(2017, 6, 21))
        assert group.first_image is None
        assert group.last_timestamp_file is None
        assert group.has_ranges is False

    def test_has_ranges(self):
        assert RecordGroup(start_time=datetime(2017, 6, 21), last_image=4).has_ranges
        assert RecordGroup(start_time=datetime(2017, 6, 21), first_timestamp_file="a.txt").has_ranges

    def test_frozen(self):
        group = RecordGroup(start_time=datetime(2017, 6, 21))
        with pytest.raises(AttributeError):
            group.first_image = 3


class TestManifest:
    def test_minimal(self):
        m = Manifest(
            image_dir=Path("images"),
            timestamp_dir=Path("timestamps"),
            records=(RecordGroup(start_time=datetime(2017, 6, 21)),),
        )
        assert m.version == "1"
        assert m.first_image is None
        assert m.image_pattern is IMAGE_FILE_PATTERN
        assert m.timestamp_pattern is None


class TestParseManifest:
    def test_minimal(self):
        m = parse_manifest(MINIMAL)
        assert m.image_dir == Path("/data/images")
        assert m.records == (RecordGroup(start_time=datetime(2017, 6, 21, 20, 29)),)

    def test_relative_dirs_use_base_dir(self, tmp_path: Path):
        m = parse_manifest({**MINIMAL, "image_dir": "images"}, base_dir=tmp_path)
        assert m.image_dir == tmp_path / "images"
        assert m.timestamp_dir == Path("/data/timestamps")

    def test_home_dir_expanded_by_default(self):
        m = parse_manifest({**MINIMAL, "image_dir": "~/images"})
        assert m.image_dir == Path("~/images").expanduser()

    def test_home_dir_kept_without_expand_user(self, tmp_path: Path):
        m = parse_manifest({**MINIMAL, "image_dir": "~/images"}, base_dir=tmp_path, expand_user=False)
        assert m.image_dir == tmp_path / "~" / "images"

    def test_start_times_shorthand(self):
        data = {
            "image_dir": "/data/images",
            "timestamp_dir": "/data/timestamps",
            "start_times": ["2017-06-21T20:29:00", "2017-06-21T20:30:00"],
        }
        m = parse_manifest(data)
        assert len(m.records) == 2
        assert not any(group.has_ranges for group in m.records)

    def test_patterns(self):
        m = parse_manifest({
            **MINIMAL,
            "image_pattern": r"^DSC(?P<image_number>\d{5})\.JPG$",
            "timestamp_pattern": r"^\d{6}_\d{6}\.eif$",
        })
        assert m.image_pattern.match("DSC03522.JPG")
        assert m.timestamp_pattern.fullmatch("170621_202939.eif")

    def test_image_pattern_needs_group(self):
        with pytest.raises(ManifestError, match="image_number"):
            parse_manifest({**MINIMAL, "image_pattern": r"^DSC\d{5}\.JPG$"})

    def test_invalid_regex(self):
        with pytest.raises(ManifestError, match="regular expression"):
            parse_manifest({**MINIMAL, "timestamp_pattern": "("})

    def test_missing_dirs(self):
        with pytest.raises(ManifestError, match="must contain"):
            parse_manifest({"records": MINIMAL["records"]})

    def test_missing_records(self):
        with pytest.raises(ManifestError, match="records"):
            parse_manifest({"image_dir": "a", "timestamp_dir": "b"})

    def test_empty_records(self):
        with pytest.raises(ManifestError):
            parse_manifest({**MINIMAL, "records": []})

    def test_record_without_start_time(self):
        with pytest.raises(ManifestError, match="start_time"):
            parse_manifest({**MINIMAL, "records": [{"first_image": 1}]})

    def test_bad_start_time(self):
        with pytest.raises(ManifestError, match="invalid start_time"):
            parse_manifest({**MINIMAL, "records": [{"start_time": "noon"}]})

    @pytest.mark.parametrize("value", ["3522", 35.22, True])
    def test_image_bound_must_be_int(self, value):
        with pytest.raises(ManifestError, match="first_image"):
            parse_manifest({**MINIMAL, "first_image": value})

    def test_not_an_object(self):
        with pytest.raises(ManifestError):
            parse_manifest([MINIMAL])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_manifest({})


class TestLoadManifest:
    def test_load_sample(self, sample_manifest_path: Path):
        m = load_manifest(sample_manifest_path)
        assert m.version == "1"
        assert m.image_dir == FIXTURES_DIR / "images"
        assert m.first_image == 3522
        assert m.last_image == 3525
        assert len(m.records) == 2
        assert m.records[1].first_timestamp_file == "170621_203040.eif"

    def test_load_written(self, tmp_path: Path):
        path = write_manifest(tmp_path / "m.json", **MINIMAL)
        assert load_manifest(path).records[0].start_time == datetime(2017, 6, 21, 20, 29)

    def test_load_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            load_manifest(bad)

    def test_load_non_utf8(self, tmp_path: Path):
        bad = tmp_path / "latin1.json"
        bad.write_bytes(b'{"image_dir": "\xff"}')
        with pytest.raises(ManifestError, match="UTF-8"):
            load_manifest(bad)

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileAccessError):
            load_manifest(tmp_path / "missing.json")
