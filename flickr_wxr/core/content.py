"""
Post body, title and slug derivation for a single photo.

Post bodies are WordPress Gutenberg block markup: every element is wrapped
in its own ``<!-- wp:... -->`` / ``<!-- /wp:... -->`` comment pair so the
block editor can open imported posts without a recovery prompt.

Every helper takes an optional ``taken_at`` text. The document builder passes
the timestamp it actually dated the post from, so a photo whose date_taken is
unusable is titled and described with the date_imported it fell back to.
"""

from __future__ import annotations

from html import escape
import json

from .slug import slugify, timestamp_slug
from .types import Photo

FALLBACK_TITLE_PREFIX = "Photo taken at"
FALLBACK_SLUG_PREFIX = "photo-taken-at"


def display_date(photo: Photo, taken_at: str | None = None) -> str:
    """Return the timestamp text shown to readers.

    ``taken_at`` wins when given; otherwise date_taken, else date_imported.
    """
    if taken_at:
        return taken_at.strip()
    return (photo.date_taken or photo.date_imported or "").strip()


def derive_title(photo: Photo, taken_at: str | None = None) -> str:
    """Return the post title: the photo name verbatim, or a dated fallback.

    >>> derive_title(Photo(id="1", name="", date_taken="2015-06-08 05:46:43"))
    'Photo taken at 2015-06-08 05:46:43'
    """
    if photo.name and photo.name.strip():
        return photo.name
    return f"{FALLBACK_TITLE_PREFIX} {display_date(photo, taken_at)}".rstrip()


def derive_slug(photo: Photo, taken_at: str | None = None) -> str:
    """Return the post slug.

    Named photos use ``slugify(name)``. Unnamed photos, and names that slugify
    to nothing (e.g. purely non-Latin titles), use the dated fallback slug.
    """
    if photo.name and photo.name.strip():
        slug = slugify(photo.name)
        if slug:
            return slug
    return timestamp_slug(FALLBACK_SLUG_PREFIX, display_date(photo, taken_at))


def _block(name: str, inner: str, attrs: dict | None = None) -> str:
    opener = f"<!-- wp:{name} {json.dumps(attrs)} -->" if attrs else f"<!-- wp:{name} -->"
    return f"{opener}\n{inner}\n<!-- /wp:{name} -->"


def _paragraph(text: str) -> str:
    return _block("paragraph", f"<p>{text}</p>")


def image_block(url: str, alt: str = "") -> str:
    inner = (
        '<figure class="wp-block-image size-large">'
        f'<img src="{escape(url)}" alt="{escape(alt)}"/>'
        "</figure>"
    )
    return _block("image", inner, {"sizeSlug": "large"})


def assemble_content(photo: Photo, taken_at: str | None = None) -> str:
    """Assemble the Gutenberg body of a photo post.

    Blocks, in order:
        1. wp:image referencing the original asset URL
        2. wp:paragraph with the description, when present
        3. wp:paragraph "Taken on {date}"
        4. wp:paragraph "Originally from: {photopage}"

    Photos without a usable original URL (missing or blank) have nothing to
    reference, so the image block is left out and the body starts at the
    description. The description is Flickr HTML and is kept as-is; everything
    else is escaped.

    Args:
        photo: The photo record
        taken_at: Timestamp text the post is dated from

    Returns:
        Block markup, blocks separated by a blank line
    """
    blocks: list[str] = []
    url = photo.asset_url
    if url is not None:
        blocks.append(image_block(url, alt=derive_title(photo, taken_at)))
    if photo.description and photo.description.strip():
        blocks.append(_paragraph(photo.description.strip()))
    blocks.append(_paragraph(f"Taken on {escape(display_date(photo, taken_at))}"))
    blocks.append(_paragraph(f"Originally from: {escape(photo.photopage)}"))
    return "\n\n".join(blocks)
