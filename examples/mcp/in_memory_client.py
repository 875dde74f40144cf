#!/usr/bin/env python3
"""In-memory MCP client example.

This example demonstrates:
- Building the skillz MCP server for a skills directory
- Connecting a fastmcp client without any transport
- Invoking a skill tool and reading one of its resources

Usage:
    python examples/mcp/in_memory_client.py
"""

import asyncio
import json
from pathlib import Path

from fastmcp import Client

from skillz import SkillRegistry, build_server

SKILLS_ROOT = Path(__file__).resolve().parent.parent / "skills"


async def main():
    registry = SkillRegistry()
    await registry.load(SKILLS_ROOT)
    server = await build_server(registry)

    async with Client(server) as client:
        tools = await client.list_tools()
        print("Tools:", ", ".join(tool.name for tool in tools))

        result = await client.call_tool("hello-world", {"task": "Greet Ada"})
        response = json.loads(result.content[0].text)
        print("\nInstructions:\n" + response["instructions"])

        for resource in response["resources"]:
            contents = await client.read_resource(resource["uri"])
            print(f"--- {resource['name']} ---")
            print(contents[0].text)


if __name__ == "__main__":
    asyncio.run(main())
