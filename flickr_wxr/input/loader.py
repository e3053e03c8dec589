"""Loader for Flickr JSON data exports.

A Flickr export directory contains:
- albums.json: {"albums": [{"id": ..., "title": ..., "photo_count": ...}, ...]}
- photo_<id>.json: one record per photo, e.g.
    {
        "id": "18429538171",
        "name": "Hue it is.",
        "description": "",
        "date_taken": "2015-06-08 05:46:43",
        "date_imported": "2015-06-09 10:01:12",
        "photopage": "https://www.flickr.com/photos/someone/18429538171/",
        "original": "https://live.staticflickr.com/5/18429538171_abc_o.jpg",
        "exif": {"Make": "Canon", "Model": "Canon EOS 600D"},
        "albums": [{"id": "72157654280312269", "title": "..."}]
    }

Photo files are decoded independently: a file that cannot be decoded is
logged, counted and skipped. Control and zero-width characters are stripped
from every text field; XML 1.0 cannot carry most of them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
import unicodedata

from ..core.types import Album, Photo
from ..errors import InputNotFoundError, MalformedRecordError

logger = logging.getLogger(__name__)

ALBUMS_FILENAME = "albums.json"
PHOTO_GLOB = "photo_*.json"

_KEPT_CONTROLS = {"\t", "\n", "\r"}
_DROPPED_CATEGORIES = {"Cc", "Cf", "Cs"}
# Not representable in XML 1.0 documents.
_XML_NONCHARACTERS = {"\ufffe", "\uffff"}


def clean_text(value: Any) -> str:
    """Coerce a value to text and drop characters XML or UTF-8 cannot carry.

    Removes control (Cc) and format (Cf) characters, lone surrogates (Cs,
    which a JSON "\\ud800" escape decodes to) and U+FFFE/U+FFFF. Tab,
    newline and carriage return are kept.

    >>> clean_text("Childhood\\u200b Moment")
    'Childhood Moment'
    """
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    return "".join(
        ch
        for ch in text
        if ch in _KEPT_CONTROLS
        or (
            ch not in _XML_NONCHARACTERS
            and unicodedata.category(ch) not in _DROPPED_CATEGORIES
        )
    )


def require_directory(json_dir: Path) -> Path:
    if not json_dir.is_dir():
        raise InputNotFoundError(f"JSON directory does not exist: {json_dir}")
    return json_dir


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedRecordError(f"Invalid JSON in {path.name}: {exc}", source=path.name) from exc


def parse_album(item: Any) -> Album:
    """Parse one entry of albums.json.

    Raises:
        MalformedRecordError: If the entry is not an object or has no id
    """
    if not isinstance(item, dict) or not item.get("id"):
        raise MalformedRecordError(f"Invalid album entry: {item!r}")
    count = item.get("photo_count")
    try:
        photo_count = int(count) if count is not None else None
    except (TypeError, ValueError):
        photo_count = None
    return Album(
        id=str(item["id"]),
        title=clean_text(item.get("title")).strip(),
        photo_count=photo_count,
    )


def load_albums(json_dir: Path) -> tuple[list[Album], int]:
    """Load albums.json from an export directory.

    Returns:
        The parsed albums and the number of invalid entries skipped

    Raises:
        InputNotFoundError: If the directory or albums.json is missing
        MalformedRecordError: If albums.json is not valid JSON or lacks "albums"
    """
    require_directory(json_dir)
    path = json_dir / ALBUMS_FILENAME
    if not path.is_file():
        raise InputNotFoundError(f"{ALBUMS_FILENAME} not found in {json_dir}")

    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("albums"), list):
        raise MalformedRecordError(
            f"Invalid {ALBUMS_FILENAME} format: missing 'albums' list", source=path.name
        )

    albums: list[Album] = []
    skipped = 0
    for item in data["albums"]:
        try:
            albums.append(parse_album(item))
        except MalformedRecordError as exc:
            logger.warning(f"Skipping album: {exc}")
            skipped += 1
    return albums, skipped


def list_photo_files(json_dir: Path) -> list[Path]:
    """List photo_*.json files in name order."""
    require_directory(json_dir)
    return sorted(path for path in json_dir.glob(PHOTO_GLOB) if path.is_file())


def _album_ids(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    if not isinstance(raw, list):
        raise MalformedRecordError(f"'albums' must be a list, got {type(raw).__name__}")
    ids: list[str] = []
    for entry in raw:
        album_id = entry.get("id") if isinstance(entry, dict) else entry
        if album_id is None or album_id == "":
            continue
        album_id = str(album_id)
        if album_id not in ids:
            ids.append(album_id)
    return tuple(ids)


def _exif(raw: Any, photo_id: str) -> dict[str, str]:
    if not raw:
        return {}
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring non-mapping EXIF data on photo {photo_id}")
        return {}
    return {clean_text(key): clean_text(value) for key, value in raw.items()}


def _optional_text(value: Any) -> str | None:
    text = clean_text(value).strip()
    return text or None


def parse_photo(data: Any, source: str | None = None) -> Photo:
    """Parse one decoded photo record.

    Raises:
        MalformedRecordError: If the record is not an object or has no id
    """
    if not isinstance(data, dict):
        raise MalformedRecordError("Photo record is not a JSON object", source=source)
    if not data.get("id"):
        raise MalformedRecordError("Photo record has no id", source=source)
    photo_id = str(data["id"])
    try:
        albums = _album_ids(data.get("albums"))
    except MalformedRecordError as exc:
        raise MalformedRecordError(str(exc), source=source) from exc
    return Photo(
        id=photo_id,
        name=clean_text(data.get("name")),
        description=clean_text(data.get("description")),
        date_taken=clean_text(data.get("date_taken")).strip(),
        date_imported=_optional_text(data.get("date_imported")),
        original=_optional_text(data.get("original")),
        photopage=clean_text(data.get("photopage")).strip(),
        exif=_exif(data.get("exif"), photo_id),
        albums=albums,
    )


def load_photos(files: list[Path]) -> tuple[list[Photo], int]:
    """Decode photo files, skipping the ones that are malformed.

    Args:
        files: Photo JSON files, in the order photos should be emitted

    Returns:
        The parsed photos and the number of malformed files skipped
    """
    photos: list[Photo] = []
    malformed = 0
    for path in files:
        try:
            photos.append(parse_photo(_read_json(path), source=path.name))
        except MalformedRecordError as exc:
            logger.warning(f"Skipping {exc.source or path.name}: {exc}")
            malformed += 1
    return photos, malformed
