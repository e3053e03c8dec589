"""
Input parsing utilities.

This package reads Flickr JSON data exports into Album and Photo records.
"""

from .loader import clean_text, list_photo_files, load_albums, load_photos, parse_photo

__all__ = ["clean_text", "list_photo_files", "load_albums", "load_photos", "parse_photo"]
