"""Shared helpers for the install commands.

Holds the flag set every install command accepts and the wrapper that turns
orchestrator failures into exit code 1.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from claude_toolkit.errors import ToolkitError
from claude_toolkit.models import InstallOptions
from claude_toolkit.paths import InstallPaths, resolve_install_paths
from claude_toolkit.tui import tui_header
from claude_toolkit.utils import log_debug, log_error

F = TypeVar("F", bound=Callable[..., Any])

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


def install_flags(func: F) -> F:
    """Attach the shared install flags to a Click command."""
    decorators = [
        click.option("--force", is_flag=True, help="Force update all settings without prompting"),
        click.option("--dry-run", is_flag=True, help="Show what would be changed without applying"),
        click.option("--skip-mcp", is_flag=True, help="Skip MCP server configuration entirely"),
        click.option(
            "--mcp-only",
            is_flag=True,
            help="Configure only MCP servers (skip settings and templates)",
        ),
        click.option(
            "--force-mcp",
            is_flag=True,
            help="Reconfigure MCP servers even if already installed",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def run_installer(
    title: str,
    install: Callable[[InstallPaths, InstallOptions], None],
    flags: dict[str, bool],
    project_dir: Path | None = None,
) -> None:
    """Resolve paths, run *install* and exit 1 on any failure.

    Args:
        title: Banner shown before the install starts.
        install: Orchestrator taking (paths, options).
        flags: Parsed install flags, keyed like InstallOptions fields.
        project_dir: Explicit project root, discovered when None.
    """
    options = InstallOptions(**flags)
    tui_header(title)
    try:
        paths = resolve_install_paths(project_dir)
        log_debug(f"Install paths: {paths}")
        install(paths, options)
    except ToolkitError as exc:
        log_error(f"Installation failed: {exc}")
        sys.exit(1)
    except click.exceptions.Abort:
        raise
    except Exception as exc:
        log_error(f"Installation failed: {type(exc).__name__}: {exc}")
        sys.exit(1)
