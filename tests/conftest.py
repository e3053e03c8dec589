"""Shared fixtures: a small Flickr export modeled on a real one."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

ALBUMS = [
    {"id": "72157650000000001", "title": "#aBitHiddenIsland", "photo_count": "2"},
    {"id": "72157650000000002", "title": "#livingDanang 2016", "photo_count": "3"},
    {"id": "72157650000000003", "title": "Central Highlands (Vietnam) 2015", "photo_count": "3"},
    # Never referenced by a photo, so it must not become a tag.
    {"id": "72157650000000004", "title": "Sài Thành - Quận nhất", "photo_count": "40"},
]

_NAMES = [
    "Job is both fun and colorful!",
    "Xanh xanh, mát mát.",
    "Lặng lẽ hoàng hôn.",
    "Humble speakers",
    "Candlelit Paper Flowers or No Rubbish?",
    "Hue it is.",
    "Childhood\u200b Moment",
    "Hue - So art so deep!",
]

_MEMBERSHIP = [
    ["72157650000000002"],
    ["72157650000000003"],
    [{"id": "72157650000000003", "title": "Central Highlands (Vietnam) 2015"}],
    ["72157650000000001"],
    ["72157650000000002"],
    ["72157650000000001", "72157650000000002"],
    [],
    ["72157650000000003"],
]


def photo_record(index: int, **overrides: Any) -> dict[str, Any]:
    photo_id = f"1842953{index:04d}"
    record: dict[str, Any] = {
        "id": photo_id,
        "name": _NAMES[index % len(_NAMES)],
        "description": "A quiet afternoon." if index % 2 == 0 else "",
        "date_taken": f"2015-06-{index + 1:02d} 05:46:43",
        "date_imported": f"2015-07-{index + 1:02d} 10:00:00",
        "photopage": f"https://www.flickr.com/photos/someone/{photo_id}/",
        "original": f"https://live.staticflickr.com/5/{photo_id}_abc123_o.jpg",
        "exif": {"Make": "Canon", "Model": "Canon EOS 600D", "ISO Speed": "100"}
        if index % 3 != 2
        else {},
        "albums": _MEMBERSHIP[index % len(_MEMBERSHIP)],
    }
    record.update(overrides)
    return record


def write_export(root: Path, albums: list[dict[str, Any]], photos: list[dict[str, Any]]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "albums.json").write_text(json.dumps({"albums": albums}), encoding="utf-8")
    for record in photos:
        (root / f"photo_{record['id']}.json").write_text(
            json.dumps(record, ensure_ascii=False), encoding="utf-8"
        )
    return root


@pytest.fixture
def sample_export(tmp_path: Path) -> Path:
    """3 referenced albums, 1 unreferenced album, 8 photos with originals."""
    return write_export(tmp_path / "json", ALBUMS, [photo_record(i) for i in range(8)])


@pytest.fixture
def make_photo():
    return photo_record


@pytest.fixture
def make_export():
    return write_export
