"""
Core data types for the Flickr to WXR converter.

Input records:
- Album: One entry of the export's albums.json
- Photo: One photo_*.json record

Derived WXR entities (built once per run, never mutated):
- Tag: An album referenced by at least one photo
- Category: A term attached to a post (album tag or the fixed category)
- WxrItem: Shared shape of the two item variants, Post and Attachment
- WxrDocument: The complete channel, ready for rendering
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class Album:
    """A Flickr album.

    Attributes:
        id: Source identifier
        title: Free-text album title (may contain '#', Unicode, punctuation)
        photo_count: Count reported by the export; informational only
    """
    id: str
    title: str
    photo_count: int | None = None


@dataclass(frozen=True)
class Photo:
    """A Flickr photo record.

    Attributes:
        id: Source identifier
        name: Photo title; blank triggers fallback titling
        description: Free-text (may contain HTML) description
        date_taken: Local timestamp, source of truth for chronology
        date_imported: Upload timestamp, used when date_taken is unusable
        original: URL of the full-resolution asset; required for an attachment
        photopage: Permalink back to Flickr
        exif: EXIF field name -> value, in export order
        albums: IDs of the albums the photo belongs to
    """
    id: str
    name: str = ""
    description: str = ""
    date_taken: str = ""
    date_imported: str | None = None
    original: str | None = None
    photopage: str = ""
    exif: dict[str, str] = field(default_factory=dict)
    albums: tuple[str, ...] = ()

    @property
    def asset_url(self) -> str | None:
        """The stripped original URL, or None when there is no usable asset."""
        url = (self.original or "").strip()
        return url or None


@dataclass(frozen=True)
class Tag:
    """A WordPress post tag derived from an album."""
    term_id: int
    name: str
    slug: str


@dataclass(frozen=True)
class Category:
    """A term reference attached to a post item.

    Attributes:
        domain: "category" or "post_tag"
        nicename: Term slug
        name: Term display name
    """
    domain: str
    nicename: str
    name: str


@dataclass(frozen=True)
class WxrItem:
    """Fields shared by every WXR item.

    Variants set ``post_type`` and ``status``; the renderer switches on
    ``post_type`` to emit the variant-specific elements.
    """
    post_type: ClassVar[str] = ""
    status: ClassVar[str] = ""

    id: int
    title: str
    slug: str
    post_date: str
    post_date_gmt: str
    pub_date: str


@dataclass(frozen=True)
class Post(WxrItem):
    """A private post holding one photo."""
    post_type: ClassVar[str] = "post"
    status: ClassVar[str] = "private"

    content: str = ""
    categories: tuple[Category, ...] = ()


@dataclass(frozen=True)
class Attachment(WxrItem):
    """The image attached to a post, linked by the parent's numeric ID."""
    post_type: ClassVar[str] = "attachment"
    status: ClassVar[str] = "inherit"

    post_parent: int = 0
    attachment_url: str = ""
    description: str = ""


@dataclass(frozen=True)
class Author:
    login: str
    display_name: str
    email: str | None = None


@dataclass(frozen=True)
class Channel:
    """Channel-level metadata of a WXR document."""
    title: str
    link: str
    description: str
    language: str
    pub_date: str
    generator: str
    wxr_version: str = "1.2"


@dataclass
class WxrDocument:
    """A complete WXR document.

    ``items`` holds posts and attachments in output order: each post is
    followed by its attachment, if any.
    """
    channel: Channel
    author: Author
    namespaces: dict[str, str]
    tags: list[Tag]
    categories: list[Category]
    items: list[WxrItem]

    @property
    def posts(self) -> list[Post]:
        return [item for item in self.items if isinstance(item, Post)]

    @property
    def attachments(self) -> list[Attachment]:
        return [item for item in self.items if isinstance(item, Attachment)]


@dataclass
class ConversionStats:
    """Counters collected over one conversion run.

    Attributes:
        photo_files: photo_*.json files found
        photos: Photo records that loaded successfully
        malformed: Records skipped because they could not be decoded
        invalid_dates: Photos skipped because no timestamp could be parsed
        missing_assets: Posts created without an attachment
        unknown_albums: Album references with no matching album entry
        posts: Post items emitted
        attachments: Attachment items emitted
        tags: Tag terms emitted
    """
    photo_files: int = 0
    photos: int = 0
    malformed: int = 0
    invalid_dates: int = 0
    missing_assets: int = 0
    unknown_albums: int = 0
    posts: int = 0
    attachments: int = 0
    tags: int = 0

    def as_dict(self) -> dict[str, Any]:
        return dict(self.__dict__)
