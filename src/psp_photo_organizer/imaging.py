"""ImageMagick subprocess wrapper for JPEG conversion and recompression.

The organizer only talks to converters through ``convert(path, quality)``,
which returns JPEG bytes or an ``Unavailable`` marker. Nothing here raises
for a missing binary or a failed conversion.
"""

from __future__ import annotations

import functools
import shutil
import subprocess
from pathlib import Path

from loguru import logger

from .errors import ExternalToolError
from .models import Unavailable

log = logger.bind(stage="imaging")


@functools.cache
def find_magick(binary: str = "magick") -> str | None:
    """Resolve the ImageMagick binary on PATH (cached per name)."""
    path = shutil.which(binary)
    if path:
        log.debug(f"Using ImageMagick at {path}")
    else:
        log.debug(f"ImageMagick binary '{binary}' not found on PATH")
    return path


def _run_magick(args: list[str]) -> subprocess.CompletedProcess:
    """Run ImageMagick, raising ExternalToolError on a non-zero exit."""
    result = subprocess.run(args, capture_output=True)
    if result.returncode != 0:
        stderr = result.stderr.decode(errors="replace").strip()
        raise ExternalToolError(
            tool=Path(args[0]).name,
            exit_code=result.returncode,
            stderr=stderr[-500:],
        )
    return result


class MagickConverter:
    """Converts any raster ImageMagick reads into a stripped 4:2:0 JPEG."""

    def __init__(self, binary: str = "magick") -> None:
        self.binary = binary

    @property
    def available(self) -> bool:
        return find_magick(self.binary) is not None

    def convert(self, path: Path, quality: int) -> bytes | Unavailable:
        executable = find_magick(self.binary)
        if executable is None:
            return Unavailable(f"ImageMagick ({self.binary}) not found")

        cmd = [
            executable,
            # First frame only; animated GIFs would otherwise emit one JPEG per frame
            f"{path}[0]",
            "-strip",
            "-quality",
            str(quality),
            "-sampling-factor",
            "4:2:0",
            "jpg:-",
        ]
        try:
            result = _run_magick(cmd)
        except ExternalToolError as exc:
            return Unavailable(str(exc))
        except OSError as exc:
            return Unavailable(f"Could not run {self.binary}: {exc}")

        if not result.stdout:
            return Unavailable(f"{self.binary} produced no output for {path.name}")
        return result.stdout
