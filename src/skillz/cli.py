"""Command line entry point: ``skillz [SKILLS_ROOT] [OPTIONS]``."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import typer
from fastmcp import FastMCP
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skillz import __version__
from skillz.config import SkillzSettings, Transport, load_settings
from skillz.observability import setup_logging
from skillz.server import build_server
from skillz.skills import RegistryError, SkillError, SkillRegistry

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="skillz",
    help="MCP server that exposes Claude-style skills to any MCP client",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"skillz {__version__}")
        raise typer.Exit()


def _settings_overrides(
    skills_root: Path | None,
    transport: Transport | None,
    host: str | None,
    port: int | None,
    path: str | None,
    verbose: bool,
    log_file: Path | None,
) -> dict[str, Any]:
    """Collect the options given on the command line as settings overrides."""
    overrides: dict[str, Any] = {}
    if skills_root is not None:
        overrides["skills_root"] = skills_root

    server = {
        key: value
        for key, value in (("transport", transport), ("host", host), ("port", port), ("path", path))
        if value is not None
    }
    if server:
        overrides["server"] = server

    logging_overrides: dict[str, Any] = {}
    if verbose:
        logging_overrides["verbose"] = True
    if log_file is not None:
        logging_overrides["log_file"] = log_file
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def _print_skill_table(registry: SkillRegistry) -> None:
    skills = registry.list()
    if not skills:
        console.print("[yellow]No valid skills discovered.[/yellow]")
        return

    table = Table(
        title="Discovered Skills",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Name", style="bold")
    table.add_column("Slug")
    table.add_column("Kind", justify="center")
    table.add_column("Location")

    for skill in skills:
        table.add_row(
            skill.metadata.name,
            skill.slug,
            "archive" if skill.is_archive else "directory",
            str(skill.location),
        )

    console.print(table)
    console.print(f"\n[dim]{len(skills)} skill(s) found.[/dim]")


def _run_server(server: FastMCP, settings: SkillzSettings) -> None:
    config = settings.server
    if config.transport is Transport.STDIO:
        server.run(transport="stdio")
    elif config.transport is Transport.HTTP:
        server.run(transport="http", host=config.host, port=config.port, path=config.path)
    else:
        server.run(transport="sse", host=config.host, port=config.port)


@app.command()
def main(
    skills_root: Path | None = typer.Argument(
        None,
        help="Directory containing skill folders and archives [default: ~/.skillz]",
        show_default=False,
    ),
    transport: Transport | None = typer.Option(
        None, "--transport", help="Transport to use when running the server [default: stdio]"
    ),
    host: str | None = typer.Option(None, "--host", help="Host for HTTP/SSE transports"),
    port: int | None = typer.Option(None, "--port", help="Port for HTTP/SSE transports"),
    path: str | None = typer.Option(None, "--path", help="Path for HTTP transport"),
    list_skills: bool = typer.Option(
        False,
        "--list-skills",
        help="List discovered skills and exit without starting the server",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write very verbose logs to this file"
    ),
    env_file: Path | None = typer.Option(
        None, "--env-file", help="Read SKILLZ_* settings from this env file"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Serve the skills found under SKILLS_ROOT over MCP."""
    overrides = _settings_overrides(skills_root, transport, host, port, path, verbose, log_file)
    try:
        settings = load_settings(env_file, **overrides)
    except (FileNotFoundError, ValidationError) as exc:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(2) from exc

    logger = setup_logging(settings.logging)

    registry = SkillRegistry()
    try:
        asyncio.run(registry.load(settings.skills_root))
    except RegistryError as exc:
        err_console.print(f"[red]Error:[/red] {escape(exc.message)}")
        raise typer.Exit(1) from exc

    if list_skills:
        _print_skill_table(registry)
        return

    try:
        server = asyncio.run(build_server(registry))
    except SkillError as exc:
        err_console.print(f"[red]Failed to build server:[/red] {escape(exc.message)}")
        raise typer.Exit(1) from exc

    logger.info(
        "Starting %s transport with %d skills from %s",
        settings.server.transport.value,
        len(registry),
        settings.skills_root,
    )
    _run_server(server, settings)
