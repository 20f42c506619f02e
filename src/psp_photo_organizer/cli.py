"""CLI entry point for the photo organizer (psp-organize command)."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click
from loguru import logger
from pydantic import ValidationError

from .config import OrganizerConfig, parse_start_time
from .errors import ConfigError, OrganizerError
from .runner import OrganizerRunner

log = logger.bind(stage="cli")


def _start_time_option(ctx, param, value: str | None) -> datetime | None:
    """Click callback turning ``YYYY-MM-DD HH:MM`` into a datetime."""
    if value is None:
        return None
    try:
        return parse_start_time(value)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)


def build_config(config_file: str | None, **kwargs) -> OrganizerConfig:
    """Build the frozen config from CLI kwargs, env vars and an optional .env."""
    # Unset options fall through to env / .env values
    overrides = {k: v for k, v in kwargs.items() if v is not None}
    try:
        if config_file:
            return OrganizerConfig(_env_file=config_file, **overrides)
        return OrganizerConfig(**overrides)
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}")


@click.command()
@click.argument(
    "source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.argument(
    "target_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--comic-mode",
    is_flag=True,
    help="Sequential numbering (001.jpg, 002.jpg, ...) for page-order reading.",
)
@click.option(
    "-b",
    "--batch",
    is_flag=True,
    help="Process each subdirectory as a separate album.",
)
@click.option(
    "-p",
    "--preserve-dates",
    is_flag=True,
    help="Preserve original file dates on the copies.",
)
@click.option(
    "-t",
    "--timestamps",
    "set_timestamps",
    is_flag=True,
    help="Set 1-minute increment timestamps on the copies.",
)
@click.option(
    "-s",
    "--start-time",
    callback=_start_time_option,
    default=None,
    metavar="'YYYY-MM-DD HH:MM'",
    help="Start time for timestamps (default: yesterday midnight).",
)
@click.option(
    "-q",
    "--quality",
    type=click.IntRange(1, 100),
    default=None,
    help="JPEG quality for conversion (default: 80).",
)
@click.option(
    "--no-convert",
    is_flag=True,
    help="Skip image conversion; only existing JPEGs are organized.",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would happen without doing it."
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to .env file.",
)
def main(
    source_dir: Path,
    target_dir: Path | None,
    verbose: bool,
    comic_mode: bool,
    batch: bool,
    preserve_dates: bool,
    set_timestamps: bool,
    start_time: datetime | None,
    quality: int | None,
    no_convert: bool,
    dry_run: bool,
    config_file: str | None,
) -> None:
    """Convert, rename and timestamp images for viewing on a PSP."""
    config = build_config(
        config_file,
        verbose=verbose or None,
        comic_mode=comic_mode or None,
        batch=batch or None,
        preserve_dates=preserve_dates or None,
        set_timestamps=set_timestamps or None,
        start_time=start_time,
        quality=quality,
        convert_images=False if no_convert else None,
        dry_run=dry_run or None,
    )
    config.setup_logging()

    source = source_dir.resolve()
    target = target_dir.resolve() if target_dir else None

    log.info(
        f"Starting organizer: source={source} target={target or config.target_dirname} "
        f"mode={config.naming_mode} batch={config.batch} dry_run={config.dry_run}"
    )
    if config.dry_run:
        click.echo("[DRY-RUN] No changes will be made")

    runner = OrganizerRunner(config=config)
    try:
        runner.run(source, target)
    except OrganizerError as exc:
        raise click.ClickException(str(exc))
