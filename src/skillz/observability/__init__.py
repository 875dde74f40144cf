"""Logging and observability."""

from skillz.observability.logging import LOGGER_NAME, setup_logging

__all__ = [
    "LOGGER_NAME",
    "setup_logging",
]
