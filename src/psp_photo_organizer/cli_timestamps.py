"""CLI entry point for in-place timestamping (psp-timestamps command).

Unlike psp-organize, this rewrites the modification times of the files in
DIRECTORY itself.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click
from loguru import logger

from .cli import _start_time_option, build_config
from .models import JPEG_EXTENSIONS
from .ordering import list_images
from .stages.timestamp import apply_timestamps, assign_timestamps

log = logger.bind(stage="timestamp-cli")


@click.command()
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-s",
    "--start",
    "--start-time",
    "start_time",
    callback=_start_time_option,
    default=None,
    metavar="'YYYY-MM-DD HH:MM'",
    help="Start time (default: yesterday midnight).",
)
@click.option(
    "--dry-run", is_flag=True, help="Show the timestamps without setting them."
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to .env file.",
)
def main(
    directory: Path,
    verbose: bool,
    start_time: datetime | None,
    dry_run: bool,
    config_file: str | None,
) -> None:
    """Set 1-minute increment modification times on the JPEGs in DIRECTORY."""
    config = build_config(
        config_file,
        verbose=verbose or None,
        start_time=start_time,
        dry_run=dry_run or None,
    )
    config.setup_logging()

    directory = directory.resolve()
    start = config.resolved_start_time()
    click.echo(f"Directory: {directory}")
    click.echo(f"Start time: {start:%Y-%m-%d %H:%M}")

    files = list_images(directory, JPEG_EXTENSIONS)
    if not files:
        click.echo(f"No .jpg files found in {directory}")
        return

    click.echo(f"Found {len(files)} .jpg files")
    assignments = assign_timestamps(files, start)
    stamped = apply_timestamps(assignments, dry_run=config.dry_run)

    prefix = "[DRY-RUN] Would set" if config.dry_run else "Successfully set"
    click.echo(f"{prefix} timestamps for {stamped} of {len(files)} files")
    click.echo(f"  Start: {assignments[0][1]}")
    click.echo(f"  End:   {assignments[-1][1]}")
