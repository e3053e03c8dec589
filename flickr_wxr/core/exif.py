"""EXIF metadata rendering for attachment descriptions."""

from __future__ import annotations

from typing import Any, Mapping

EXIF_HEADER = "flickr_exif_data:"
BULLET = "•"


def render_exif(exif: Mapping[str, Any] | None) -> str:
    """Render EXIF fields as a bulleted block.

    Entries keep the mapping's iteration order and are not filtered or
    renamed. An empty or missing mapping renders to an empty string, and
    callers must then omit the description.

    >>> print(render_exif({"Make": "Canon", "Model": "EOS 5D"}))
    flickr_exif_data:
    • Make: Canon
    • Model: EOS 5D
    """
    if not exif:
        return ""
    lines = [EXIF_HEADER]
    lines.extend(f"{BULLET} {key}: {value}" for key, value in exif.items())
    return "\n".join(lines)
