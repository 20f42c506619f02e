"""Directory scanning in natural filename order.

One ordering policy is used everywhere: natural filename order (digit runs
compared numerically, text case-insensitively, ties broken by the raw name).
It depends only on the names in a directory, so a fixed directory always
yields the same sequence.
"""

from __future__ import annotations

import re
from pathlib import Path

from loguru import logger

from .models import IMAGE_EXTENSIONS, JPEG_EXTENSIONS

log = logger.bind(stage="scan")


def natural_sort_key(p: Path) -> tuple[list, str]:
    """Extract numeric/text parts for natural sorting of filenames."""
    parts = [
        (0, int(c), "") if c.isdigit() else (1, 0, c.lower())
        for c in re.split(r"(\d+)", p.name)
        if c
    ]
    return parts, p.name


def qualifying_extensions(convert_images: bool) -> frozenset[str]:
    """Extensions picked up by a scan.

    Without conversion only JPEGs can reach the output.
    """
    return IMAGE_EXTENSIONS if convert_images else JPEG_EXTENSIONS


def list_images(
    directory: Path,
    extensions: frozenset[str] = IMAGE_EXTENSIONS,
) -> list[Path]:
    """List image files directly inside ``directory`` in natural order.

    Non-recursive. Hidden files and anything that isn't a regular file are
    ignored.
    """
    files = [
        f
        for f in directory.iterdir()
        if not f.name.startswith(".")
        and f.is_file()
        and f.suffix.lower() in extensions
    ]
    files.sort(key=natural_sort_key)
    log.debug(f"Found {len(files)} image files in {directory}")
    return files


def has_images(
    directory: Path,
    extensions: frozenset[str] = IMAGE_EXTENSIONS,
) -> bool:
    return any(
        f.is_file() and not f.name.startswith(".") and f.suffix.lower() in extensions
        for f in directory.iterdir()
    )


def find_subdirectories(root: Path, exclude: Path | None = None) -> list[Path]:
    """Immediate, non-hidden subdirectories of ``root`` in natural order.

    ``exclude`` (typically the target directory nested inside the source)
    is left out so a batch run never feeds on its own output.
    """
    excluded = exclude.resolve() if exclude is not None else None
    subdirs = [
        d
        for d in root.iterdir()
        if d.is_dir()
        and not d.name.startswith(".")
        and (excluded is None or d.resolve() != excluded)
    ]
    subdirs.sort(key=natural_sort_key)
    return subdirs
