"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Channel metadata written into the WXR header
- CategoryConfig: The fixed provenance category attached to every post
- DateConfig: Timezone the export's timestamps are expressed in
- IdConfig: Where the synthetic post/attachment ID sequence starts
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from .errors import ConfigError


@dataclass
class SiteConfig:
    """Channel-level metadata for the generated WXR document.

    Attributes:
        title: Channel title shown by the WordPress importer
        link: Site URL, also used as base_site_url/base_blog_url and for item guids
        description: Channel description
        language: Channel language code
        author_login: WordPress login the imported items are attributed to
        author_display_name: Display name for the author entry
        author_email: Optional email for the author entry
    """

    title: str = "Flickr Export"
    link: str = "http://localhost"
    description: str = "Photos imported from a Flickr data export"
    language: str = "en-US"
    author_login: str = "admin"
    author_display_name: str = "admin"
    author_email: str | None = None


@dataclass
class CategoryConfig:
    """The fixed category that marks every imported post.

    Attributes:
        name: Category display name
        slug: Category nicename
    """

    name: str = "From Flickr"
    slug: str = "from-flickr"


@dataclass
class DateConfig:
    """Date handling settings.

    Attributes:
        timezone: IANA timezone name the export's local timestamps are in
    """

    timezone: str = "UTC"


@dataclass
class IdConfig:
    """Synthetic ID settings.

    Attributes:
        start: First ID handed out to a post or attachment
    """

    start: int = 1


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to a file next to the output document
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "flickr-wxr.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    category: CategoryConfig = field(default_factory=CategoryConfig)
    dates: DateConfig = field(default_factory=DateConfig)
    ids: IdConfig = field(default_factory=IdConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    A fresh AppConfig is returned on every call so CLI overrides never leak
    between runs.

    Raises:
        ConfigError: If the file is not valid YAML, is not a mapping, or holds
            out-of-range values
    """
    if not path:
        return AppConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must hold a mapping, got {type(raw).__name__}")

    cfg = _merge_config(AppConfig(), raw)
    _validate(cfg)
    return cfg


def _validate(cfg: AppConfig) -> None:
    start = cfg.ids.start
    if isinstance(start, bool) or not isinstance(start, int) or start < 1:
        raise ConfigError(f"ids.start must be an integer of at least 1, got {start!r}")
    if cfg.logging.format not in {"jsonl", "plain"}:
        raise ConfigError(f"logging.format must be 'jsonl' or 'plain', got {cfg.logging.format!r}")


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "site": {
            "title": cfg.site.title,
            "link": cfg.site.link,
            "description": cfg.site.description,
            "language": cfg.site.language,
            "author_login": cfg.site.author_login,
            "author_display_name": cfg.site.author_display_name,
            "author_email": cfg.site.author_email,
        },
        "category": {
            "name": cfg.category.name,
            "slug": cfg.category.slug,
        },
        "dates": {
            "timezone": cfg.dates.timezone,
        },
        "ids": {
            "start": cfg.ids.start,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        site=SiteConfig(**data["site"]),
        category=CategoryConfig(**data["category"]),
        dates=DateConfig(**data["dates"]),
        ids=IdConfig(**data["ids"]),
        logging=LoggingConfig(**data["logging"]),
    )
