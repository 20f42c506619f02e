"""Timestamp stage -- one-minute mtime increments for minute-granular sorting."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..models import TimestampCursor

if TYPE_CHECKING:
    from ..config import OrganizerConfig
    from ..models import DirectoryResult

log = logger.bind(stage="timestamp")


def assign_timestamps(
    files: list[Path], start: datetime
) -> list[tuple[Path, TimestampCursor]]:
    """Pair file i with start + i minutes."""
    assignments: list[tuple[Path, TimestampCursor]] = []
    cursor = TimestampCursor.from_datetime(start)
    for index, f in enumerate(files):
        if index:
            cursor = cursor.advance()
        assignments.append((f, cursor))
    return assignments


def apply_timestamps(
    assignments: list[tuple[Path, TimestampCursor]],
    dry_run: bool = False,
) -> int:
    """Write atime/mtime for each assignment. Returns the success count.

    Epoch times are offset from the first cursor in whole minutes, so a DST
    jump in local time never makes two files share or swap a timestamp.
    A file that can't be stamped is skipped with a warning.
    """
    if not assignments:
        return 0
    base = assignments[0][1].to_datetime().timestamp()

    stamped = 0
    for index, (path, cursor) in enumerate(assignments):
        if dry_run:
            log.info(f"[DRY-RUN] Would set {path.name} -> {cursor}")
            stamped += 1
            continue
        ts = base + 60 * index
        try:
            os.utime(path, (ts, ts))
        except OSError as exc:
            log.warning(f"Failed to set timestamp for {path}: {exc}")
            continue
        log.debug(f"{path.name} -> {cursor}")
        stamped += 1
    return stamped


def run(
    files: list[Path],
    source_dir: Path,
    target_dir: Path,
    config: OrganizerConfig,
    result: DirectoryResult,
    dry_run: bool = False,
    **kwargs,
) -> list[Path]:
    """Stamp the organized copies in order, starting at kwargs["start_time"]."""
    start: datetime = kwargs.get("start_time") or config.resolved_start_time()

    assignments = assign_timestamps(files, start)
    result.timestamped = apply_timestamps(assignments, dry_run=dry_run)

    if assignments:
        click.echo(
            f"  TIMESTAMP: {result.timestamped} files, "
            f"{assignments[0][1]} -> {assignments[-1][1]}"
        )
    return files
