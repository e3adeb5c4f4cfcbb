"""Help command: show detailed usage information."""

from __future__ import annotations

import click


HELP_TEXT = """\
Hexium Claude toolkit - install Claude settings, agents, commands and MCP servers

Usage: claude-toolkit <command> [options]

Commands:
  project-install [options]      Install into the project's .claude directory
  user-install [options]         Install into ~/.claude and register MCP servers
  global-install [options]       Install into ~/.claude with the MCP manifest
  setup                          Alias for 'project-install'
  validate [--templates-dir DIR] Check the toolkit templates
  help                           Show this help

Install options:
  --force          Force update all settings without prompting
  --dry-run        Show what would be changed without applying
  --skip-mcp       Skip MCP server configuration entirely
  --mcp-only       Configure only MCP servers (skip settings and templates)
  --force-mcp      Reconfigure MCP servers even if already installed
  --project-dir    Project root for project-install (default: $INIT_CWD or cwd)
  --help, -h       Show help for a command

Environment:
  INIT_CWD             Project root set by npm/npx style launchers
  CLAUDE_CONFIG_DIR    User Claude directory (default: ~/.claude)
  HXM_TEMPLATES_DIR    Template directory (default: bundled templates)
  HXM_NONINTERACTIVE   Set to 1 to accept every prompt default
  HXM_DEBUG            Set to 1 for debug output

Examples:
  claude-toolkit user-install
  claude-toolkit user-install --force
  claude-toolkit user-install --dry-run
  claude-toolkit user-install --skip-mcp
  claude-toolkit user-install --mcp-only
  claude-toolkit project-install --dry-run
  claude-toolkit global-install --force"""


@click.command("help")
def help_cmd() -> None:
    """Show detailed usage information."""
    click.echo(HELP_TEXT)
