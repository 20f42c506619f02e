"""Scan stage -- lists qualifying source images in natural order."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from ..ordering import list_images, qualifying_extensions

if TYPE_CHECKING:
    from ..config import OrganizerConfig
    from ..models import DirectoryResult

log = logger.bind(stage="scan")


def run(
    files: list[Path],
    source_dir: Path,
    target_dir: Path,
    config: OrganizerConfig,
    result: DirectoryResult,
    dry_run: bool = False,
    **kwargs,
) -> list[Path]:
    """Return the ordered source files for this directory."""
    found = list_images(source_dir, qualifying_extensions(config.convert_images))
    result.found = len(found)
    if found:
        log.info(f"Found {len(found)} image files in {source_dir.name}")
    return found
