"""Output filename construction."""

from pathlib import Path

from .models import NamingMode


def output_name(counter: int, mode: NamingMode) -> str:
    """Build the output filename for a 1-based counter.

    Comic mode yields ``001.jpg``, photo mode ``IMG_001.jpg``. Counters past
    999 simply widen (``1000.jpg``).
    """
    if counter < 1:
        raise ValueError(f"Counter must start at 1, got {counter}")
    padded = f"{counter:03d}"
    if mode == NamingMode.COMIC:
        return f"{padded}.jpg"
    return f"IMG_{padded}.jpg"


def staged_name(index: int, source: Path) -> str:
    """Work-dir name for a converted file.

    Index-prefixed so ``page.png`` and ``page.jpg`` never overwrite each other.
    """
    return f"{index:04d}_{source.stem}.jpg"
