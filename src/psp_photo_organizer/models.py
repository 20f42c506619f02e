"""Core enums, constants, and value types for the photo organizer.

Enums:
    NamingMode  -- Output naming policy (comic -> 001.jpg, photo -> IMG_001.jpg).
    Stage       -- Individual pipeline stage (scan through timestamp).

Types:
    TimestampCursor -- Minute-granular (year, month, day, hour, minute) cursor
                       with full carry chain.
    Unavailable     -- Converter result when the external tool can't deliver.
    DirectoryResult -- Per-directory outcome counters.
    BatchResult     -- Batch outcome (processed and skipped directories).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from pathlib import Path


class NamingMode(StrEnum):
    COMIC = "comic"
    PHOTO = "photo"


class Stage(StrEnum):
    SCAN = "scan"
    CONVERT = "convert"
    ORGANIZE = "organize"
    TIMESTAMP = "timestamp"


STAGE_ORDER: list[Stage] = [
    Stage.SCAN,
    Stage.CONVERT,
    Stage.ORGANIZE,
    Stage.TIMESTAMP,
]

JPEG_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg"})

# Raster formats handed to the external converter
CONVERTIBLE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".png",
        ".webp",
        ".gif",
        ".bmp",
    }
)

IMAGE_EXTENSIONS: frozenset[str] = JPEG_EXTENSIONS | CONVERTIBLE_EXTENSIONS

START_TIME_FORMAT = "%Y-%m-%d %H:%M"
DEFAULT_TARGET_DIRNAME = "PSP_Organized"


@dataclass(frozen=True, order=True)
class TimestampCursor:
    """Minute-granular position in time.

    Advancing carries minute -> hour -> day -> month -> year, honoring month
    lengths and leap years. Seconds are always zero.
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int

    @classmethod
    def from_datetime(cls, value: datetime) -> TimestampCursor:
        return cls(value.year, value.month, value.day, value.hour, value.minute)

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute)

    def advance(self, minutes: int = 1) -> TimestampCursor:
        """Return a new cursor moved forward by ``minutes``."""
        if minutes < 0:
            raise ValueError("Timestamp cursor only moves forward")
        return TimestampCursor.from_datetime(
            self.to_datetime() + timedelta(minutes=minutes)
        )

    def __str__(self) -> str:
        return self.to_datetime().strftime(START_TIME_FORMAT)


@dataclass(frozen=True)
class Unavailable:
    """The converter could not produce JPEG bytes (missing tool or failure)."""

    reason: str


@dataclass
class DirectoryResult:
    """Outcome of running the pipeline over one directory."""

    source: Path
    target: Path
    found: int = 0
    converted: int = 0
    organized: int = 0
    failed: int = 0
    timestamped: int = 0
    outputs: list[Path] = field(default_factory=list)


@dataclass
class BatchResult:
    """Outcome of a batch run across immediate subdirectories."""

    processed: list[DirectoryResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def organized(self) -> int:
        return sum(r.organized for r in self.processed)

    @property
    def failed(self) -> int:
        return sum(r.failed for r in self.processed)
