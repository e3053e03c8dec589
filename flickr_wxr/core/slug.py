"""URL slug generation for tags and post names."""

from __future__ import annotations

import re

_DISALLOWED_RE = re.compile(r"[^a-z0-9\s-]")
_SEPARATOR_RE = re.compile(r"[\s-]+")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")


def slugify(text: str) -> str:
    """Convert text to a WordPress-style slug.

    Lower-cases the text, drops every character that is not an ASCII letter,
    digit, whitespace or hyphen, then collapses whitespace/hyphen runs into a
    single hyphen. Non-ASCII letters are dropped rather than transliterated,
    so existing imports keep the same slugs.

    Args:
        text: The text to slugify

    Returns:
        A slug matching ``^[a-z0-9]+(-[a-z0-9]+)*$``, or an empty string

    Examples:
        >>> slugify("#livingDanang 2016")
        'livingdanang-2016'
        >>> slugify("Sài Thành - Quận nhất")
        'si-thnh-qun-nht'
    """
    slug = _DISALLOWED_RE.sub("", text.lower())
    slug = _SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")


def timestamp_slug(prefix: str, timestamp: str) -> str:
    """Build a slug from a prefix and a timestamp, hyphenating every non-alnum run.

    >>> timestamp_slug("photo-taken-at", "2015-06-08 05:46:43")
    'photo-taken-at-2015-06-08-05-46-43'
    """
    stamp = _NON_ALNUM_RE.sub("-", timestamp).strip("-").lower()
    return f"{prefix}-{stamp}" if stamp else prefix
