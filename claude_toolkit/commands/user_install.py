"""User-install command: install the toolkit into ~/.claude and register MCP servers."""

from __future__ import annotations

import click

from claude_toolkit.commands._helpers import CONTEXT_SETTINGS, install_flags, run_installer
from claude_toolkit.installer import install_user


@click.command("user-install", context_settings=CONTEXT_SETTINGS)
@install_flags
def user_install(**flags: bool) -> None:
    """Install settings, agents, commands and MCP servers for the current user."""
    run_installer("Hexium Claude toolkit: user install", install_user, flags)
