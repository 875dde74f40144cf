"""Logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Console log level name.
        verbose: Force DEBUG on the console regardless of ``level``.
        log_file: Optional file receiving very verbose (DEBUG) logs.
        max_bytes: Size at which the log file is rotated.
        backup_count: Number of rotated files to keep.
    """

    level: str = Field(default="INFO", description="Console log level")
    verbose: bool = Field(default=False, description="Enable debug logging")
    log_file: Path | None = Field(default=None, description="Verbose log file")
    max_bytes: int = Field(default=5 * 1024 * 1024, gt=0, description="Log rotation size")
    backup_count: int = Field(default=3, ge=0, description="Rotated log files to keep")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        """Normalize and check the level name."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def effective_level(self) -> int:
        """Numeric console level after applying ``verbose``."""
        return logging.DEBUG if self.verbose else logging.getLevelName(self.level)
