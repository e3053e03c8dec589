"""
Flickr to WXR - convert a Flickr data export into a WordPress import file.

This package reads the JSON files of a Flickr data export (albums.json and
photo_*.json) and produces a WordPress eXtended RSS document: photos become
private posts with an attached image, albums become tags, and every post is
filed under a fixed "From Flickr" category.

Main entry point is the CLI via the `flickr-wxr` command.

Example:
    $ flickr-wxr --json-dir ./flickr-data/json --output flickr.xml
"""

__all__ = ["__version__", "build_document", "render_wxr", "run_conversion", "slugify"]
__version__ = "0.1.0"

from .core.builder import build_document
from .core.slug import slugify
from .output.wxr import render_wxr
from .runner import run_conversion
