"""Root settings for skillz.

Values are read, highest precedence first, from explicit keyword arguments,
``SKILLZ_``-prefixed environment variables, and a ``.env`` file in the
working directory. Nested fields use ``__`` as delimiter, e.g.
``SKILLZ_SERVER__PORT=9000``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from skillz.config.logging_config import LoggingConfig
from skillz.config.server import ServerConfig


class SkillzSettings(BaseSettings):
    """Root configuration.

    Attributes:
        skills_root: Directory scanned for skills (``~`` is expanded).
        server: MCP server transport settings.
        logging: Logging settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILLZ_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    skills_root: Path = Field(
        default=Path("~/.skillz"),
        description="Directory containing skill folders and archives",
    )
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("skills_root")
    @classmethod
    def _expand_root(cls, value: Path) -> Path:
        """Expand ``~`` in skills_root to the home directory."""
        return value.expanduser()


def load_settings(env_file: str | Path | None = None, **overrides: Any) -> SkillzSettings:
    """Load settings, optionally from an explicit env file.

    Variables from ``env_file`` are added to the process environment without
    replacing variables that are already set.

    Args:
        env_file: Extra ``.env``-style file to read before the environment.
        **overrides: Field values taking precedence over every other source.
            Nested models may be given as partial dicts.

    Returns:
        The resolved settings.

    Raises:
        FileNotFoundError: If ``env_file`` is given but does not exist.
        pydantic.ValidationError: If a value fails validation.
    """
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise FileNotFoundError(f"env_file not found: {env_path}")
        load_dotenv(env_path, override=False)
    return SkillzSettings(**overrides)
