"""Configuration system for skillz.

Main exports:
- SkillzSettings: Root configuration class
- ServerConfig: MCP server transport settings
- LoggingConfig: Logging configuration
- Transport: Supported MCP transports
- load_settings: Build settings, optionally reading an extra env file
"""

from skillz.config.logging_config import LoggingConfig
from skillz.config.server import ServerConfig, Transport
from skillz.config.settings import SkillzSettings, load_settings

__all__ = [
    "LoggingConfig",
    "ServerConfig",
    "SkillzSettings",
    "Transport",
    "load_settings",
]
