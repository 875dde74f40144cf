"""Logging setup for the skillz process.

Console output always goes to stderr: with the stdio transport, stdout
carries the MCP protocol stream.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from skillz.config.logging_config import LoggingConfig

LOGGER_NAME = "skillz"

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure and return the root ``skillz`` logger.

    Installs a rich console handler on stderr and, when ``config.log_file``
    is set, a rotating DEBUG file handler. Calling it again reconfigures the
    handlers it installed earlier instead of stacking new ones.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.

    Returns:
        The configured ``skillz`` logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)

    for handler in [h for h in logger.handlers if getattr(h, "_skillz_handler", False)]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=config.verbose,
    )
    console_handler.setLevel(config.effective_level)
    console_handler._skillz_handler = True  # type: ignore[attr-defined]
    logger.addHandler(console_handler)

    logger_level = config.effective_level
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        file_handler._skillz_handler = True  # type: ignore[attr-defined]
        logger.addHandler(file_handler)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    if config.log_file is not None:
        logger.debug("Verbose file logging enabled at %s", config.log_file)
    return logger
