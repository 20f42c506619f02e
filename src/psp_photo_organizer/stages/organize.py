"""Organize stage -- copies files into the target under sequential names."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..errors import ConfigError
from ..naming import output_name

if TYPE_CHECKING:
    from ..config import OrganizerConfig
    from ..models import DirectoryResult

log = logger.bind(stage="organize")


def run(
    files: list[Path],
    source_dir: Path,
    target_dir: Path,
    config: OrganizerConfig,
    result: DirectoryResult,
    dry_run: bool = False,
    **kwargs,
) -> list[Path]:
    """Copy each file to target_dir as NNN.jpg / IMG_NNN.jpg.

    The counter starts at 1 and only advances on a successful copy. Sources
    are never modified.
    """
    mode = config.naming_mode

    if not dry_run:
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"Cannot create target directory {target_dir}: {exc}")

    copy = shutil.copy2 if config.preserve_dates else shutil.copy
    sources = {f.resolve() for f in files}

    outputs: list[Path] = []
    counter = 1
    for src in files:
        name = output_name(counter, mode)
        dest = target_dir / name
        if dest.resolve() in sources:
            raise ConfigError(f"Refusing to overwrite source file {dest}")

        if dry_run:
            log.info(f"[DRY-RUN] Would copy: {src.name} -> {name}")
        else:
            try:
                copy(src, dest)
            except OSError as exc:
                log.warning(f"Failed to copy {src.name}: {exc}")
                result.failed += 1
                continue
            log.debug(f"Copying: {src.name} -> {name}")

        outputs.append(dest)
        counter += 1

    result.organized = len(outputs)
    result.outputs = outputs

    prefix = "  ORGANIZE (dry-run)" if dry_run else "  ORGANIZE"
    click.echo(f"{prefix}: {len(outputs)} files -> {target_dir}")
    return outputs
