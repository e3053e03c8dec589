"""
Relationship mapping between photos, albums and synthetic WordPress IDs.

Posts and attachments share one ID sequence: WXR places both in a
single flat ``item`` list and the importer resolves ``post_parent`` by ID.
Links are index based: a PhotoLink points at a photo by list position and at
its post by numeric ID, never by object reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

from ..errors import MissingAssetError
from .slug import slugify
from .types import Album, Category, Photo, Tag

logger = logging.getLogger(__name__)

TAG_DOMAIN = "post_tag"
CATEGORY_DOMAIN = "category"


class IdSequence:
    """Monotonically increasing ID allocator owned by a single conversion run."""

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError("ID sequence must start at 1 or higher")
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def peek(self) -> int:
        """The ID the next call to next() will return."""
        return self._next


@dataclass(frozen=True)
class PhotoLink:
    """Resolved relationships of one photo.

    Attributes:
        photo_index: Position of the photo in the mapped photo list
        post_id: ID of the photo's post
        attachment_id: ID of the attachment, or None when the photo has no asset
        asset_url: Stripped original URL the attachment points at, or None
        categories: Album tags followed by the fixed category
    """
    photo_index: int
    post_id: int
    attachment_id: int | None
    asset_url: str | None
    categories: tuple[Category, ...]


@dataclass
class RelationshipMap:
    tags: list[Tag] = field(default_factory=list)
    links: list[PhotoLink] = field(default_factory=list)
    missing_assets: int = 0
    unknown_albums: int = 0


def require_asset(photo: Photo) -> str:
    """Return the photo's original URL.

    Raises:
        MissingAssetError: If the photo has no non-blank original URL
    """
    url = photo.asset_url
    if url is None:
        raise MissingAssetError(photo.id)
    return url


def fixed_category(name: str, slug: str) -> Category:
    return Category(domain=CATEGORY_DOMAIN, nicename=slug, name=name)


def tag_category(tag: Tag) -> Category:
    return Category(domain=TAG_DOMAIN, nicename=tag.slug, name=tag.name)


def album_slug(album: Album) -> str:
    """Slug for an album tag; titles that slugify to nothing fall back to the album id."""
    return slugify(album.title) or slugify(f"album {album.id}")


def _unique_slug(slug: str, used: set[str]) -> str:
    candidate = slug
    suffix = 2
    while candidate in used:
        candidate = f"{slug}-{suffix}"
        suffix += 1
    return candidate


def build_tags(albums: Sequence[Album], photos: Sequence[Photo]) -> tuple[list[Tag], dict[str, Tag]]:
    """Create one tag per album referenced by at least one photo.

    Tags follow the album list order and are keyed by album id, so the tag
    count always equals the number of distinct referenced albums. When two
    titles produce the same slug the later album gets a numeric suffix
    (``hue``, ``hue-2``, ...); WordPress would otherwise merge the terms.

    Returns:
        The tag list and a mapping from album id to its tag
    """
    referenced = {album_id for photo in photos for album_id in photo.albums}
    tags: list[Tag] = []
    used_slugs: set[str] = set()
    by_album: dict[str, Tag] = {}
    for album in albums:
        if album.id not in referenced or album.id in by_album:
            continue
        slug = _unique_slug(album_slug(album), used_slugs)
        used_slugs.add(slug)
        tag = Tag(term_id=len(tags) + 1, name=album.title, slug=slug)
        tags.append(tag)
        by_album[album.id] = tag
    return tags, by_album


def map_relationships(
    albums: Sequence[Album],
    photos: Sequence[Photo],
    ids: IdSequence,
    category: Category,
) -> RelationshipMap:
    """Assign IDs and resolve tags/categories for every photo.

    Each photo gets a post ID; a photo with an original URL then gets the
    next ID for its attachment. Photos without an original URL keep their
    post but get no attachment.

    Args:
        albums: All albums from the export
        photos: Photos to convert, in output order
        ids: The run's ID sequence
        category: The fixed category attached to every post

    Returns:
        A RelationshipMap with tags, one PhotoLink per photo, and counters
    """
    tags, tags_by_album = build_tags(albums, photos)
    result = RelationshipMap(tags=tags)

    for index, photo in enumerate(photos):
        post_id = ids.next()
        try:
            asset_url: str | None = require_asset(photo)
        except MissingAssetError as exc:
            logger.warning(str(exc))
            asset_url = None
            attachment_id = None
            result.missing_assets += 1
        else:
            attachment_id = ids.next()

        categories: list[Category] = []
        for album_id in photo.albums:
            tag = tags_by_album.get(album_id)
            if tag is None:
                logger.warning(f"Photo {photo.id} references unknown album {album_id}")
                result.unknown_albums += 1
                continue
            term = tag_category(tag)
            if term not in categories:
                categories.append(term)
        categories.append(category)

        result.links.append(
            PhotoLink(
                photo_index=index,
                post_id=post_id,
                attachment_id=attachment_id,
                asset_url=asset_url,
                categories=tuple(categories),
            )
        )
    return result
