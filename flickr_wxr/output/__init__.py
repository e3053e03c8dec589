"""WXR output rendering."""

from .wxr import render_wxr, write_wxr

__all__ = ["render_wxr", "write_wxr"]
