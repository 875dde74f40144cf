"""
Skillz - serve Claude-style skills to any MCP client.

Quick Start:
    >>> from skillz import SkillRegistry, build_server
    >>> registry = SkillRegistry()
    >>> await registry.load("~/.skillz")
    >>> server = await build_server(registry)
    >>> server.run()

From the command line:
    $ skillz ~/.skillz --list-skills
    $ skillz ~/.skillz --transport http --port 8000

See Also:
    - examples/ directory for runnable scripts
"""

__version__ = "0.1.0"

from skillz.config import SkillzSettings
from skillz.server import build_server, list_skills
from skillz.skills import (
    ResourceResolver,
    Skill,
    SkillError,
    SkillMetadata,
    SkillRegistry,
    parse_skill_md,
)

__all__ = [
    "ResourceResolver",
    "Skill",
    "SkillError",
    "SkillMetadata",
    "SkillRegistry",
    "SkillzSettings",
    "__version__",
    "build_server",
    "list_skills",
    "parse_skill_md",
]
