"""Project-install command: install the toolkit into a project's .claude directory."""

from __future__ import annotations

from pathlib import Path

import click

from claude_toolkit.commands._helpers import CONTEXT_SETTINGS, install_flags, run_installer
from claude_toolkit.installer import install_project


@click.command("project-install", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root (default: $INIT_CWD or the current directory)",
)
@install_flags
def project_install(project_dir: Path | None, **flags: bool) -> None:
    """Install settings, agents, commands and .mcp.json into the project."""
    run_installer(
        "Hexium Claude toolkit: project install",
        install_project,
        flags,
        project_dir=project_dir,
    )
