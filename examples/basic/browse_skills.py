#!/usr/bin/env python3
"""Skill registry example.

This example demonstrates:
- Loading skills from a directory
- Listing discovered skills
- Reading a skill's instructions and resources

Usage:
    python examples/basic/browse_skills.py [SKILLS_ROOT]
"""

import asyncio
import sys
from pathlib import Path

from skillz import ResourceResolver, SkillRegistry, list_skills
from skillz.observability import setup_logging

DEFAULT_ROOT = Path(__file__).resolve().parent.parent / "skills"


async def main(root: Path):
    setup_logging()

    registry = SkillRegistry()
    await registry.load(root)
    print(list_skills(registry))

    resolver = ResourceResolver(registry)
    for skill in registry.list():
        print(f"\n=== {skill.metadata.name} ===")
        print(await resolver.read_instructions(skill))

        for descriptor in await resolver.describe_resources(skill):
            payload = await resolver.fetch(descriptor.uri)
            print(f"--- {descriptor.uri} ({payload.encoding}) ---")
            print(payload.content[:200])


if __name__ == "__main__":
    asyncio.run(main(Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_ROOT))
