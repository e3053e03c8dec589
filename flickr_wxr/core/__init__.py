"""
Core conversion engine.

Pure functions and data types that turn Flickr album/photo records into a
WXR object graph, independent of how records are loaded or written.
"""

from .builder import build_document
from .content import assemble_content, derive_slug, derive_title
from .dates import NormalizedDate, normalize_date
from .exif import render_exif
from .mapper import IdSequence, map_relationships
from .slug import slugify
from .types import (
    Album,
    Attachment,
    Category,
    ConversionStats,
    Photo,
    Post,
    Tag,
    WxrDocument,
    WxrItem,
)

__all__ = [
    "Album",
    "Attachment",
    "Category",
    "ConversionStats",
    "IdSequence",
    "NormalizedDate",
    "Photo",
    "Post",
    "Tag",
    "WxrDocument",
    "WxrItem",
    "assemble_content",
    "build_document",
    "derive_slug",
    "derive_title",
    "map_relationships",
    "normalize_date",
    "render_exif",
    "slugify",
]
