"""Tests for reading Flickr export directories."""

import json
from pathlib import Path

import pytest

from flickr_wxr.errors import InputNotFoundError, MalformedRecordError
from flickr_wxr.input.loader import (
    clean_text,
    list_photo_files,
    load_albums,
    load_photos,
    parse_photo,
)


def test_load_albums_reads_all_entries(sample_export: Path):
    """Every album in albums.json is loaded, referenced or not."""
    albums, skipped = load_albums(sample_export)

    assert skipped == 0
    assert [a.title for a in albums] == [
        "#aBitHiddenIsland",
        "#livingDanang 2016",
        "Central Highlands (Vietnam) 2015",
        "Sài Thành - Quận nhất",
    ]
    assert albums[3].photo_count == 40


def test_load_albums_missing_directory(tmp_path: Path):
    """A missing source directory is fatal."""
    with pytest.raises(InputNotFoundError):
        load_albums(tmp_path / "nope")


def test_load_albums_missing_file(tmp_path: Path):
    """albums.json is required."""
    with pytest.raises(InputNotFoundError):
        load_albums(tmp_path)


def test_load_albums_invalid_json(tmp_path: Path):
    """An undecodable albums.json is reported as malformed."""
    (tmp_path / "albums.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedRecordError):
        load_albums(tmp_path)


def test_load_albums_skips_bad_entries(tmp_path: Path):
    """Entries without an id are skipped and counted."""
    (tmp_path / "albums.json").write_text(
        json.dumps({"albums": [{"title": "no id"}, "junk", {"id": 5, "title": "ok"}]}),
        encoding="utf-8",
    )
    albums, skipped = load_albums(tmp_path)

    assert skipped == 2
    assert albums[0].id == "5"
    assert albums[0].photo_count is None


def test_list_photo_files_sorted(sample_export: Path):
    """Only photo_*.json files are listed, in name order."""
    files = list_photo_files(sample_export)

    assert len(files) == 8
    assert files == sorted(files)
    assert all(f.name.startswith("photo_") for f in files)


def test_load_photos_skips_malformed_files(sample_export: Path, make_photo):
    """Broken files are counted; the rest still load."""
    (sample_export / "photo_broken.json").write_text("{", encoding="utf-8")
    (sample_export / "photo_list.json").write_text("[1, 2]", encoding="utf-8")
    (sample_export / "photo_noid.json").write_text(
        json.dumps(make_photo(0, id="")), encoding="utf-8"
    )

    photos, malformed = load_photos(list_photo_files(sample_export))

    assert malformed == 3
    assert len(photos) == 8


def test_parse_photo_fields(make_photo):
    """Album references may be ids or objects; missing fields default."""
    record = make_photo(2)
    record.pop("exif")
    record["original"] = ""

    photo = parse_photo(record)

    assert photo.albums == ("72157650000000003",)
    assert photo.exif == {}
    assert photo.original is None
    assert photo.date_taken == "2015-06-03 05:46:43"


def test_parse_photo_rejects_non_list_albums(make_photo):
    """A scalar albums field is malformed."""
    with pytest.raises(MalformedRecordError):
        parse_photo(make_photo(0, albums="72157650000000001"), source="photo_x.json")


def test_parse_photo_stringifies_exif_values(make_photo):
    """Numeric EXIF values become text."""
    photo = parse_photo(make_photo(0, exif={"ISO Speed": 100, "Flash": None}))
    assert photo.exif == {"ISO Speed": "100", "Flash": ""}


def test_clean_text_strips_invisible_characters():
    """Zero-width, BOM and control characters go; tabs and newlines stay."""
    assert clean_text("Childhood\u200b Moment") == "Childhood Moment"
    assert clean_text("\ufeffHue\x00 it is.\x1f") == "Hue it is."
    assert clean_text("line one\nline\ttwo") == "line one\nline\ttwo"
    assert clean_text(None) == ""
    assert clean_text(42) == "42"


def test_clean_text_strips_lone_surrogates_and_xml_noncharacters():
    """Text that UTF-8 or XML 1.0 cannot carry is dropped on load."""
    assert clean_text("Hue\ud800 it is.") == "Hue it is."
    assert clean_text("a\ufffeb\uffffc") == "abc"
    assert clean_text("\U0001f4f7 camera") == "\U0001f4f7 camera"


def test_load_photos_strips_surrogate_escapes(tmp_path: Path, make_photo):
    """A JSON \\ud800 escape decodes to a lone surrogate that never reaches a Photo."""
    path = tmp_path / "photo_1.json"
    path.write_text(json.dumps(make_photo(0, name="Broken \ud800name")), encoding="utf-8")

    photos, malformed = load_photos([path])

    assert malformed == 0
    assert photos[0].name == "Broken name"
