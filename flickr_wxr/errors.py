"""Exception hierarchy for the converter.

Fatal errors abort a run and map to a non-zero exit code in the CLI.
Per-record errors are caught by the loader or the relationship mapper,
counted, and the record is skipped.
"""

from __future__ import annotations


class FlickrWxrError(Exception):
    """Base class for all converter errors."""


class InputNotFoundError(FlickrWxrError):
    """The source directory or a required export file does not exist."""


class MalformedRecordError(FlickrWxrError):
    """A photo or album record could not be decoded into a valid record.

    Attributes:
        source: File name (or record id) the error refers to
    """

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class DateParseError(FlickrWxrError, ValueError):
    """A timestamp string did not match any accepted format."""

    def __init__(self, value: object):
        super().__init__(f"Unparseable timestamp: {value!r}")
        self.value = value


class MissingAssetError(FlickrWxrError):
    """A photo has no ``original`` URL, so no attachment can be created.

    This is a degraded path rather than a failure: the photo still becomes
    a post.
    """

    def __init__(self, photo_id: str):
        super().__init__(f"Photo {photo_id} has no original asset URL")
        self.photo_id = photo_id


class NoUsableRecordsError(FlickrWxrError):
    """Loading finished without a single usable photo record."""


class OutputWriteError(FlickrWxrError):
    """The WXR document could not be written to its destination."""


class ConfigError(FlickrWxrError, ValueError):
    """A configuration value is invalid (e.g. an unknown timezone)."""
