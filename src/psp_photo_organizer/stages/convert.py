"""Convert stage -- JPEG conversion and recompression through the converter."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..models import JPEG_EXTENSIONS, Unavailable
from ..naming import staged_name

if TYPE_CHECKING:
    from ..config import OrganizerConfig
    from ..imaging import MagickConverter
    from ..models import DirectoryResult

log = logger.bind(stage="convert")


def run(
    files: list[Path],
    source_dir: Path,
    target_dir: Path,
    config: OrganizerConfig,
    result: DirectoryResult,
    dry_run: bool = False,
    **kwargs,
) -> list[Path]:
    """Convert files into the work dir, keeping their order.

    1. Ask the converter for JPEG bytes at config.quality
    2. Write them to work_dir under an index-prefixed name
    3. Copy source timestamps onto the staged file with preserve_dates
    4. On Unavailable: JPEGs pass through untouched, other formats are dropped
    """
    converter: MagickConverter = kwargs["converter"]
    work_dir: Path = kwargs["work_dir"]

    if dry_run:
        for f in files:
            log.info(f"[DRY-RUN] Would convert: {f.name} (quality {config.quality})")
        return list(files)

    staged: list[Path] = []
    for index, src in enumerate(files):
        is_jpeg = src.suffix.lower() in JPEG_EXTENSIONS

        data = converter.convert(src, config.quality)
        if isinstance(data, Unavailable):
            if is_jpeg:
                log.warning(f"Copying {src.name} without recompression: {data.reason}")
                staged.append(src)
            else:
                log.warning(f"Skipping conversion for {src.name}: {data.reason}")
                result.failed += 1
            continue

        dest = work_dir / staged_name(index, src)
        try:
            dest.write_bytes(data)
            if config.preserve_dates:
                shutil.copystat(src, dest)
        except OSError as exc:
            log.warning(f"Failed to stage converted {src.name}: {exc}")
            if is_jpeg:
                staged.append(src)
            else:
                result.failed += 1
            continue

        log.debug(f"Converted: {src.name} -> {dest.name}")
        staged.append(dest)
        result.converted += 1

    click.echo(
        f"  CONVERT: {result.converted} of {len(files)} files "
        f"(quality {config.quality})"
    )
    return staged
