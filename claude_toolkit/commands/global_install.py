"""Global-install command."""

from __future__ import annotations

import click

from claude_toolkit.commands._helpers import CONTEXT_SETTINGS, install_flags, run_installer
from claude_toolkit.installer import install_global


@click.command("global-install", context_settings=CONTEXT_SETTINGS)
@install_flags
def global_install(**flags: bool) -> None:
    """Install settings, agents, commands and the MCP manifest machine-wide in ~/.claude."""
    run_installer("Hexium Claude toolkit: global install", install_global, flags)
