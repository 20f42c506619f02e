"""Organizer configuration via pydantic-settings (.env + PSP_* env vars)."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import DEFAULT_TARGET_DIRNAME, START_TIME_FORMAT, NamingMode


def parse_start_time(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD HH:MM`` start time.

    Raises ConfigError on malformed input.
    """
    try:
        return datetime.strptime(value.strip(), START_TIME_FORMAT)
    except ValueError:
        raise ConfigError(
            f"Invalid start time {value!r}. Use YYYY-MM-DD HH:MM"
        ) from None


def default_start_time(now: datetime | None = None) -> datetime:
    """Midnight of the previous day."""
    now = now or datetime.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=1)


class OrganizerConfig(BaseSettings):
    """All organizer configuration with layered resolution:
    .env file < environment variables < constructor kwargs.

    Frozen: built once by the CLI and handed to every stage.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PSP_",
        extra="ignore",
        frozen=True,
    )

    # -- Naming / layout --
    comic_mode: bool = False
    batch: bool = False
    target_dirname: str = DEFAULT_TARGET_DIRNAME

    # -- Copy behavior --
    preserve_dates: bool = False

    # -- Timestamps --
    set_timestamps: bool = False
    start_time: datetime | None = None

    # -- Conversion --
    convert_images: bool = True
    quality: int = Field(default=80, ge=1, le=100)
    magick_bin: str = "magick"

    # -- Behavior --
    dry_run: bool = False
    verbose: bool = False
    log_level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("start_time", mode="before")
    @classmethod
    def _parse_start_time(cls, value):
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return parse_start_time(value)
            except ConfigError as exc:
                raise ValueError(str(exc)) from None
        return value

    @property
    def naming_mode(self) -> NamingMode:
        return NamingMode.COMIC if self.comic_mode else NamingMode.PHOTO

    @property
    def effective_log_level(self) -> str:
        """DEBUG when verbose is set from any source, otherwise log_level."""
        return "DEBUG" if self.verbose else self.log_level.upper()

    def resolved_start_time(self, now: datetime | None = None) -> datetime:
        """Configured start time, or previous-day midnight when unset."""
        if self.start_time is not None:
            return self.start_time.replace(second=0, microsecond=0)
        return default_start_time(now)

    def setup_logging(self) -> None:
        """Configure loguru for the organizer."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<10} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level=self.effective_log_level,
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "organizer.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
