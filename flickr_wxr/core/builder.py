"""
WXR document assembly.

Composes date normalization, relationship mapping, content assembly and EXIF
rendering into one WxrDocument. The function is pure apart from the ID
sequence it creates for itself; pass ``generated_at`` to make the channel
timestamp reproducible.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from email.utils import format_datetime
import logging
from typing import Sequence

from .. import __version__
from ..config import AppConfig
from ..errors import DateParseError
from .content import assemble_content, derive_slug, derive_title
from .dates import NormalizedDate, normalize_date, resolve_timezone
from .exif import render_exif
from .mapper import IdSequence, fixed_category, map_relationships
from .types import (
    Album,
    Attachment,
    Author,
    Channel,
    ConversionStats,
    Photo,
    Post,
    WxrDocument,
    WxrItem,
)

logger = logging.getLogger(__name__)

WXR_VERSION = "1.2"
GENERATOR = f"flickr-wxr/{__version__}"

NAMESPACES: dict[str, str] = {
    "excerpt": "http://wordpress.org/export/1.2/excerpt/",
    "content": "http://purl.org/rss/1.0/modules/content/",
    "wfw": "http://wellformedweb.org/CommentAPI/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "wp": "http://wordpress.org/export/1.2/",
}


def resolve_photo_date(photo: Photo, tz: tzinfo) -> NormalizedDate:
    """Normalize the photo's date_taken, falling back to date_imported.

    Raises:
        DateParseError: If neither timestamp parses
    """
    try:
        return normalize_date(photo.date_taken, tz)
    except DateParseError:
        if photo.date_imported:
            return normalize_date(photo.date_imported, tz)
        raise


def _dated_photos(
    photos: Sequence[Photo], tz: tzinfo, stats: ConversionStats
) -> list[tuple[Photo, NormalizedDate]]:
    dated: list[tuple[Photo, NormalizedDate]] = []
    for photo in photos:
        try:
            dated.append((photo, resolve_photo_date(photo, tz)))
        except DateParseError as exc:
            logger.warning(f"Skipping photo {photo.id}: {exc}")
            stats.invalid_dates += 1
    return dated


def build_document(
    albums: Sequence[Album],
    photos: Sequence[Photo],
    cfg: AppConfig,
    stats: ConversionStats | None = None,
    generated_at: datetime | None = None,
) -> WxrDocument:
    """Build the complete WXR document for one export.

    Photos whose timestamps cannot be parsed are skipped and counted; they
    consume no IDs. Every remaining photo yields a post, followed directly by
    its attachment when the photo has an original URL.

    Args:
        albums: All albums from the export
        photos: Photo records in input order
        cfg: Application configuration
        stats: Optional counters to update
        generated_at: Channel timestamp; defaults to the current UTC time

    Returns:
        The assembled WxrDocument
    """
    stats = stats if stats is not None else ConversionStats()
    tz = resolve_timezone(cfg.dates.timezone)
    category = fixed_category(cfg.category.name, cfg.category.slug)

    dated = _dated_photos(photos, tz, stats)
    kept = [photo for photo, _ in dated]
    relations = map_relationships(albums, kept, IdSequence(cfg.ids.start), category)

    items: list[WxrItem] = []
    for link in relations.links:
        photo, date = dated[link.photo_index]
        title = derive_title(photo, date.local)
        slug = derive_slug(photo, date.local)
        items.append(
            Post(
                id=link.post_id,
                title=title,
                slug=slug,
                post_date=date.local,
                post_date_gmt=date.gmt,
                pub_date=date.rfc2822,
                content=assemble_content(photo, date.local),
                categories=link.categories,
            )
        )
        if link.attachment_id is not None:
            items.append(
                Attachment(
                    id=link.attachment_id,
                    title=title,
                    slug=f"{slug}-image",
                    post_date=date.local,
                    post_date_gmt=date.gmt,
                    pub_date=date.rfc2822,
                    post_parent=link.post_id,
                    attachment_url=link.asset_url,
                    description=render_exif(photo.exif),
                )
            )

    stats.missing_assets += relations.missing_assets
    stats.unknown_albums += relations.unknown_albums
    stats.tags = len(relations.tags)
    stats.posts = len(relations.links)
    stats.attachments = sum(1 for link in relations.links if link.attachment_id is not None)

    moment = generated_at or datetime.now(timezone.utc)
    channel = Channel(
        title=cfg.site.title,
        link=cfg.site.link.rstrip("/"),
        description=cfg.site.description,
        language=cfg.site.language,
        pub_date=format_datetime(moment),
        generator=GENERATOR,
        wxr_version=WXR_VERSION,
    )
    author = Author(
        login=cfg.site.author_login,
        display_name=cfg.site.author_display_name,
        email=cfg.site.author_email,
    )
    return WxrDocument(
        channel=channel,
        author=author,
        namespaces=dict(NAMESPACES),
        tags=relations.tags,
        categories=[category],
        items=items,
    )
