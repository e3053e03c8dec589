"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from flickr_wxr.config import AppConfig, load_config
from flickr_wxr.errors import ConfigError


def test_load_config_defaults():
    """No path yields the built-in defaults."""
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.category.name == "From Flickr"
    assert cfg.category.slug == "from-flickr"
    assert cfg.dates.timezone == "UTC"
    assert cfg.ids.start == 1
    assert cfg.logging.file is False


def test_load_config_returns_fresh_instances():
    """Mutating one loaded config never affects the next."""
    first = load_config(None)
    first.dates.timezone = "Asia/Ho_Chi_Minh"

    assert load_config(None).dates.timezone == "UTC"


def test_load_config_merges_yaml(tmp_path: Path):
    """YAML values override defaults section by section; unknown keys are ignored."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "site:\n"
        "  title: My Photos\n"
        "  link: https://photos.example.com\n"
        "  unknown_field: 1\n"
        "dates:\n"
        "  timezone: Asia/Ho_Chi_Minh\n"
        "ids:\n"
        "  start: 100\n"
        "extra_section:\n"
        "  foo: bar\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.site.title == "My Photos"
    assert cfg.site.link == "https://photos.example.com"
    assert cfg.site.language == "en-US"
    assert cfg.dates.timezone == "Asia/Ho_Chi_Minh"
    assert cfg.ids.start == 100
    assert cfg.category.slug == "from-flickr"


def test_load_config_empty_file(tmp_path: Path):
    """An empty YAML file behaves like no file."""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


@pytest.mark.parametrize(
    "text",
    [
        "site: [unclosed\n",
        "- just\n- a list\n",
        "ids:\n  start: 0\n",
        "ids:\n  start: first\n",
        "logging:\n  format: xml\n",
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, text: str):
    """Broken or out-of-range config files raise ConfigError."""
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(path))
