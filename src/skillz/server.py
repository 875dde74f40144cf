"""MCP server exposing registered skills as tools and resources.

Each skill becomes one tool named by its slug. Calling it returns the skill's
instructions, metadata and resource URIs as a JSON document. Every resource
file is also published as a native MCP resource, and ``fetch_resource`` serves
the same content to clients that cannot read MCP resources.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from skillz import __version__
from skillz.skills import (
    ArchiveError,
    ResourceDescriptor,
    ResourceResolver,
    Skill,
    SkillRegistry,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "Skillz MCP Server"

FETCH_RESOURCE_DESCRIPTION = (
    "[FALLBACK ONLY] Fetch a skill resource by URI. IMPORTANT: Only use this if your "
    "client does NOT support native MCP resource fetching. If your client supports MCP "
    "resources, use the native resource fetching mechanism instead. This tool only "
    "supports URIs in the format: resource://skillz/{skill-slug}/{path}. Resource URIs "
    "are provided in skill tool responses under the 'resources' field."
)

SKILL_USAGE = """HOW TO USE THIS SKILL:

1. READ the instructions carefully - they contain specialized guidance for completing the task.

2. UNDERSTAND the context:
   - The 'task' field contains the specific request
   - The 'metadata.allowed_tools' list specifies which tools to use when applying this skill (if specified, respect these constraints)
   - The 'resources' array lists additional files

3. APPLY the skill instructions to complete the task:
   - Instructions are authored by skill creators and may contain domain-specific expertise or specialized techniques

4. ACCESS resources when needed:
   - If instructions reference additional files or you need them, retrieve from the MCP server
   - PREFERRED: Use native MCP resource fetching if your client supports it (use URIs from 'resources' field)
   - FALLBACK: If your client lacks MCP resource support, call the fetch_resource tool with the URI. Example:
     fetch_resource(resource_uri="resource://skillz/...")

5. RESPECT constraints:
   - If 'metadata.allowed_tools' is specified and non-empty, prefer using only those tools when executing the skill instructions

Remember: Skills are specialized instruction sets created by experts. They provide domain knowledge you can apply to user tasks."""


def format_tool_description(skill: Skill) -> str:
    """Return the tool description advertised for ``skill``."""
    return (
        f"[SKILL] {skill.metadata.description} - Invoke this to receive specialized "
        "instructions and resources for this task."
    )


def _server_instructions(registry: SkillRegistry) -> str:
    skills = registry.list()
    names = ", ".join(skill.metadata.name for skill in skills) or "No skills"
    return (
        f"{SERVER_NAME} exposes {len(skills)} skill(s): {names}.\n"
        "Invoke a skill tool with the task you want to accomplish to receive its "
        "instructions and the URIs of its resources. Read resources natively, or "
        "with the fetch_resource tool when native resources are unavailable."
    )


def list_skills(registry: SkillRegistry) -> str:
    """Render the registry as a plain-text listing.

    Args:
        registry: A loaded registry.

    Returns:
        One ``- <name> (slug: <slug>) -> <location>`` line per skill, or
        ``"No valid skills discovered."``.
    """
    skills = registry.list()
    if not skills:
        return "No valid skills discovered."
    return "\n".join(
        f"- {skill.metadata.name} (slug: {skill.slug}) -> {skill.location}" for skill in skills
    )


def _skill_response(
    skill: Skill,
    task: str,
    resources: list[ResourceDescriptor],
    instructions: str,
) -> dict[str, Any]:
    metadata = skill.metadata
    return {
        "skill": skill.slug,
        "task": task,
        "metadata": {
            "name": metadata.name,
            "description": metadata.description,
            "license": metadata.license,
            "allowed_tools": metadata.allowed_tools,
            "extra": metadata.extra,
        },
        "resources": [descriptor.to_payload() for descriptor in resources],
        "instructions": instructions,
        "usage": SKILL_USAGE,
    }


def _register_skill_tool(
    mcp: FastMCP,
    skill: Skill,
    resolver: ResourceResolver,
    resources: list[ResourceDescriptor],
) -> None:
    """Register the tool that hands out one skill's instructions."""

    async def invoke_skill(
        task: Annotated[
            str, Field(description="The specific task you want to accomplish using this skill")
        ],
    ) -> str:
        logger.info("Skill '%s' invoked", skill.slug)
        instructions = await resolver.read_instructions(skill)
        response = _skill_response(skill, task, resources, instructions)
        return json.dumps(response, indent=2, default=str)

    mcp.tool(invoke_skill, name=skill.slug, description=format_tool_description(skill))


def _register_resource(
    mcp: FastMCP,
    resolver: ResourceResolver,
    descriptor: ResourceDescriptor,
) -> None:
    """Publish one skill file as a native MCP resource."""

    async def read_resource() -> str | bytes:
        payload = await resolver.fetch(descriptor.uri)
        if payload.encoding == "base64":
            return base64.b64decode(payload.content)
        return payload.content

    mcp.resource(
        descriptor.uri,
        name=descriptor.name,
        mime_type=descriptor.mime_type,
    )(read_resource)


async def build_server(
    registry: SkillRegistry,
    *,
    resolver: ResourceResolver | None = None,
    version: str = __version__,
) -> FastMCP:
    """Build the MCP server for a loaded registry.

    A skill whose archive can no longer be read is logged and left out.

    Args:
        registry: Registry whose skills are exposed.
        resolver: Resolver serving resources. Defaults to one bound to
            ``registry``.
        version: Server version reported to clients.

    Returns:
        A configured ``FastMCP`` server, ready to ``run()``.
    """
    resolver = resolver or ResourceResolver(registry)
    mcp = FastMCP(SERVER_NAME, instructions=_server_instructions(registry), version=version)

    async def fetch_resource(
        resource_uri: Annotated[
            str,
            Field(
                description=(
                    "The resource URI to fetch (e.g., resource://skillz/skill-name/file.txt)"
                )
            ),
        ],
    ) -> str:
        payload = await resolver.fetch(resource_uri)
        return json.dumps(payload.to_payload(), indent=2)

    mcp.tool(fetch_resource, name="fetch_resource", description=FETCH_RESOURCE_DESCRIPTION)

    tool_count = resource_count = 0
    for skill in registry.list():
        try:
            resources = await resolver.describe_resources(skill)
        except ArchiveError as exc:
            logger.error("Skipping skill '%s': %s", skill.slug, exc)
            continue
        _register_skill_tool(mcp, skill, resolver, resources)
        for descriptor in resources:
            _register_resource(mcp, resolver, descriptor)
        tool_count += 1
        resource_count += len(resources)

    logger.info("Registered %d skill tools and %d resources", tool_count, resource_count)
    return mcp
