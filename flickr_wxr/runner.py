"""
Conversion run orchestration.

This module coordinates one conversion:
1. Load albums.json
2. Load photo_*.json records (malformed files are skipped and counted)
3. Build the WXR document
4. Render and atomically write it

Structural problems (missing directory, missing albums.json, zero usable
photos, write failures) raise FlickrWxrError subclasses; per-record problems
only show up in the returned stats.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
import logging
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from .config import AppConfig
from .core.builder import build_document
from .core.types import ConversionStats
from .errors import FlickrWxrError, NoUsableRecordsError
from .input.loader import list_photo_files, load_albums, load_photos
from .output.wxr import write_wxr
from .utils.logging import close_logging, log_event, log_summary, setup_logging


@dataclass
class ConversionResult:
    """Outcome of a successful run.

    Attributes:
        output_path: Where the WXR document was written
        stats: Counters collected during the run
    """
    output_path: Path
    stats: ConversionStats


def run_conversion(
    json_dir: Path,
    output_path: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> ConversionResult:
    """Convert a Flickr JSON export directory into a WXR file.

    Args:
        json_dir: Directory holding albums.json and photo_*.json
        output_path: Destination of the WXR document
        cfg: Application configuration
        show_progress: Whether to show a progress bar
        console: Rich console for progress and the summary table

    Returns:
        ConversionResult with the output path and run statistics

    Raises:
        InputNotFoundError: If json_dir or albums.json is missing
        MalformedRecordError: If albums.json cannot be decoded
        NoUsableRecordsError: If no photo record survives loading and dating
        OutputWriteError: If the document cannot be written
    """
    console = console or Console()
    logger = setup_logging(cfg.logging, output_path)
    stats = ConversionStats()
    try:
        log_event(
            logger,
            "conversion_start",
            f"Converting {json_dir} to {output_path}",
            input=str(json_dir),
            output=str(output_path),
        )

        progress = (
            Progress(
                SpinnerColumn(),
                TextColumn("{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
            )
            if show_progress
            else None
        )
        with progress if progress is not None else nullcontext():
            stage_task = progress.add_task("Stages", total=4) if progress is not None else None

            def _advance() -> None:
                if progress is not None and stage_task is not None:
                    progress.advance(stage_task, 1)

            albums, skipped_albums = load_albums(json_dir)
            stats.malformed += skipped_albums
            log_event(
                logger,
                "albums_loaded",
                f"Loaded {len(albums)} albums",
                albums=len(albums),
                skipped=skipped_albums,
            )
            _advance()

            files = list_photo_files(json_dir)
            stats.photo_files = len(files)
            photos, malformed = load_photos(files)
            stats.photos = len(photos)
            stats.malformed += malformed
            log_event(
                logger,
                "photos_loaded",
                f"Loaded {len(photos)} photos from {len(files)} files",
                files=len(files),
                photos=len(photos),
                malformed=malformed,
            )
            _advance()

            if not photos:
                raise NoUsableRecordsError(
                    f"No valid photo records found in {json_dir} ({len(files)} photo files)"
                )

            document = build_document(albums, photos, cfg, stats=stats)
            if not document.posts:
                raise NoUsableRecordsError(
                    f"None of the {len(photos)} photo records has a usable date"
                )
            log_event(
                logger,
                "document_built",
                f"Built {len(document.items)} items",
                posts=len(document.posts),
                attachments=len(document.attachments),
                tags=len(document.tags),
            )
            _advance()

            write_wxr(document, output_path)
            log_event(logger, "document_written", f"Wrote {output_path}", path=str(output_path))
            _advance()

        log_summary(logger, stats)
        _render_stats(stats, console)
        return ConversionResult(output_path=output_path, stats=stats)
    except FlickrWxrError as exc:
        log_event(
            logger,
            "conversion_failed",
            str(exc),
            level=logging.ERROR,
            error=type(exc).__name__,
        )
        raise
    finally:
        close_logging(logger)


def _render_stats(stats: ConversionStats, console: Console) -> None:
    """Display the run statistics as a table."""
    table = Table(title="Conversion summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Photo files", str(stats.photo_files))
    table.add_row("Posts", str(stats.posts))
    table.add_row("Attachments", str(stats.attachments))
    table.add_row("Album tags", str(stats.tags))
    table.add_row("Malformed records skipped", str(stats.malformed))
    table.add_row("Photos skipped (invalid date)", str(stats.invalid_dates))
    table.add_row("Posts without attachment", str(stats.missing_assets))
    table.add_row("Unknown album references", str(stats.unknown_albums))
    console.print(table)
