"""
Command-line interface for the Flickr to WXR converter.

Uses Typer to expose the source directory and output path, plus overrides
for the most common configuration settings.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .errors import FlickrWxrError
from .runner import run_conversion

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def convert(
    json_dir: Path = typer.Option(
        ..., "--json-dir", "-i", help="Directory with albums.json and photo_*.json."
    ),
    output: Path = typer.Option(
        Path("flickr-export.xml"), "--output", "-o", help="Path of the WXR file to write."
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML config file."
    ),
    timezone: str | None = typer.Option(
        None, "--timezone", help="IANA timezone the export's timestamps are in."
    ),
    site_url: str | None = typer.Option(None, "--site-url", help="Base URL of the target site."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Write a log file next to the output."
    ),
):
    """Convert a Flickr data export into a WordPress WXR import file.

    Every photo becomes a private post with its image attached, every album
    used by at least one photo becomes a tag, and all posts are filed under
    the "From Flickr" category.

    Args:
        json_dir: Directory holding the export's JSON files
        output: Destination WXR file
        config: Optional path to YAML config file
        timezone: Override dates.timezone
        site_url: Override site.link
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
    """
    try:
        cfg = load_config(str(config) if config else None)

        if timezone:
            cfg.dates.timezone = timezone
        if site_url:
            cfg.site.link = site_url
        if log_level:
            cfg.logging.level = log_level
        if log_file is not None:
            cfg.logging.file = log_file

        result = run_conversion(json_dir, output, cfg, show_progress=progress, console=console)
    except FlickrWxrError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    console.print(f"WXR file generated: {result.output_path}")


if __name__ == "__main__":
    app()
