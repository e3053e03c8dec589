"""
WXR rendering and writing.

The document is rendered through a Jinja2 template with XML autoescaping;
posts and attachments share one item macro that switches on ``post_type``.
Writing goes through a temporary file in the destination directory so the
output path only ever holds a complete document.
"""

from __future__ import annotations

import os
from pathlib import Path
import tempfile

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.types import WxrDocument
from ..errors import OutputWriteError

TEMPLATE_NAME = "wxr.xml"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_wxr(document: WxrDocument) -> str:
    """Render a WxrDocument to WXR XML text.

    Args:
        document: The assembled document

    Returns:
        The XML document as a string, starting with the XML declaration
    """
    template = _environment().get_template(TEMPLATE_NAME)
    xml = template.render(
        namespaces=document.namespaces,
        channel=document.channel,
        author=document.author,
        tags=document.tags,
        categories=document.categories,
        items=document.items,
    )
    return xml.lstrip()


def write_wxr(document: WxrDocument, output_path: Path) -> Path:
    """Render and atomically write a document to ``output_path``.

    Rendering happens before anything touches the disk; the rendered text is
    written to a sibling temporary file that then replaces the destination.

    Raises:
        OutputWriteError: If the file cannot be written or the text cannot be
            encoded as UTF-8; no partial file is left either way
    """
    xml = render_wxr(document)
    tmp_name: str | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(xml)
        os.replace(tmp_name, output_path)
    except (OSError, UnicodeError) as exc:
        raise OutputWriteError(f"Could not write {output_path}: {exc}") from exc
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    return output_path
