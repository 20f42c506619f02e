"""Organizer runner -- orchestrates stage execution per directory."""

from __future__ import annotations

import tempfile
from pathlib import Path

import click
from loguru import logger

from .config import OrganizerConfig
from .errors import ConfigError
from .imaging import MagickConverter
from .models import STAGE_ORDER, BatchResult, DirectoryResult, Stage
from .ordering import find_subdirectories, has_images, qualifying_extensions
from .stages import get_stage_runner

log = logger.bind(stage="runner")


def _check_target(source: Path, target: Path) -> None:
    """Refuse a target that is the source itself; copies would overwrite inputs."""
    if target.resolve() == source.resolve():
        raise ConfigError(
            f"Target directory {target} is the source directory; choose another"
        )


class OrganizerRunner:
    """Runs the scan -> convert -> organize -> timestamp pipeline."""

    def __init__(
        self,
        config: OrganizerConfig,
        converter=None,
    ) -> None:
        self.config = config
        self.converter = converter or MagickConverter(config.magick_bin)
        # Resolved once so every directory in a batch starts at the same minute
        self.start_time = config.resolved_start_time()

    def stages(self) -> list[Stage]:
        """Stages enabled by the current configuration, in pipeline order."""
        stages = list(STAGE_ORDER)
        if not self.config.convert_images:
            stages.remove(Stage.CONVERT)
        if not self.config.set_timestamps:
            stages.remove(Stage.TIMESTAMP)
        return stages

    def run(
        self, source: Path, target: Path | None = None
    ) -> DirectoryResult | BatchResult:
        """Run the pipeline for a source directory.

        Batch mode treats every immediate subdirectory as its own unit with
        its own counter and timestamp cursor.
        """
        target = target or source / self.config.target_dirname
        _check_target(source, target)

        if (
            self.config.convert_images
            and not self.config.dry_run
            and not getattr(self.converter, "available", True)
        ):
            log.warning("ImageMagick not found, continuing with file operations only")

        if self.config.batch:
            return self._run_batch(source, target)
        return self._run_single(source, target)

    def _run_batch(self, source: Path, target: Path) -> BatchResult:
        extensions = qualifying_extensions(self.config.convert_images)
        subdirs = find_subdirectories(source, exclude=target)
        click.echo(f"Batch: {len(subdirs)} subdirectories in {source}")
        batch = BatchResult()
        if not subdirs:
            click.echo(f"No subdirectories found in {source}")
            return batch

        for subdir in subdirs:
            try:
                found = has_images(subdir, extensions)
            except OSError as exc:
                log.warning(f"Cannot read {subdir.name}, skipping: {exc}")
                batch.skipped.append(subdir.name)
                continue
            if not found:
                log.info(f"No image files in {subdir.name}, skipping")
                batch.skipped.append(subdir.name)
                continue
            batch.processed.append(self._run_single(subdir, target / subdir.name))

        click.echo(
            f"\nBatch complete: {len(batch.processed)} directories processed, "
            f"{len(batch.skipped)} skipped"
        )
        for name in batch.skipped:
            click.echo(f"  SKIP {name} -- no readable image files")
        return batch

    def _run_single(self, source_dir: Path, target_dir: Path) -> DirectoryResult:
        """Run every enabled stage over one directory."""
        _check_target(source_dir, target_dir)
        result = DirectoryResult(source=source_dir, target=target_dir)
        stages = self.stages()

        click.echo(f"\nOrganizing: {source_dir.name} ({self.config.naming_mode} mode)")
        log.debug(f"Stages: {' -> '.join(s.value for s in stages)}")

        files: list[Path] = []
        with tempfile.TemporaryDirectory(prefix="psp-convert-") as work:
            for stage in stages:
                stage_runner = get_stage_runner(stage)
                files = stage_runner(
                    files=files,
                    source_dir=source_dir,
                    target_dir=target_dir,
                    config=self.config,
                    result=result,
                    dry_run=self.config.dry_run,
                    converter=self.converter,
                    work_dir=Path(work),
                    start_time=self.start_time,
                )
                if stage == Stage.SCAN and not files:
                    click.echo(f"No supported image files found in {source_dir}")
                    return result

        if result.failed:
            click.echo(
                f"Organized {result.organized} files to {target_dir} "
                f"({result.failed} failed, see warnings)"
            )
        else:
            click.echo(f"Successfully organized {result.organized} files to {target_dir}")
        return result
