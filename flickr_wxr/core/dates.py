"""Timestamp normalization into the three forms a WXR item carries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from email.utils import format_datetime

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import ConfigError, DateParseError

WXR_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Flickr exports use the first form; the others appear in hand-edited records.
_ACCEPTED_FORMATS = (
    WXR_DATE_FORMAT,
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


@dataclass(frozen=True)
class NormalizedDate:
    """One instant in the representations WordPress expects.

    Attributes:
        local: ``Y-m-d H:i:s`` in the export's timezone
        gmt: ``Y-m-d H:i:s`` in UTC
        rfc2822: RFC 2822 string in the export's timezone
    """
    local: str
    gmt: str
    rfc2822: str


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve an IANA timezone name, treating empty and "UTC" as UTC."""
    if not name or name.upper() in {"UTC", "GMT"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone: {name}") from exc


def parse_timestamp(value: str | None, tz: tzinfo = timezone.utc) -> datetime:
    """Parse an export timestamp into an aware datetime in ``tz``.

    Raises:
        DateParseError: If the value is empty or matches no accepted format
    """
    if not isinstance(value, str) or not value.strip():
        raise DateParseError(value)
    raw = value.strip()
    for fmt in _ACCEPTED_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=tz)
    raise DateParseError(value)


def normalize_date(value: str | None, tz: tzinfo = timezone.utc) -> NormalizedDate:
    """Normalize an export timestamp.

    >>> normalize_date("2015-06-08 05:46:43").rfc2822
    'Mon, 08 Jun 2015 05:46:43 +0000'
    """
    moment = parse_timestamp(value, tz)
    return NormalizedDate(
        local=moment.strftime(WXR_DATE_FORMAT),
        gmt=moment.astimezone(timezone.utc).strftime(WXR_DATE_FORMAT),
        rfc2822=format_datetime(moment),
    )
