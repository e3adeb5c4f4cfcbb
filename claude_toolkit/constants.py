"""Configuration defaults for claude-toolkit.

Names of the files and folders the installer reads and writes, plus
environment-aware getters for the well-known source and target locations.
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_int(key: str, default: int) -> int:
    """Read an integer from an environment variable, returning default on parse failure."""
    try:
        return int(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


# ============================================================================
# Template & Destination Layout
# ============================================================================

CLAUDE_DIR_NAME: str = ".claude"
"""Directory holding Claude configuration, in a project root or the home directory."""

SETTINGS_FILE: str = "settings.json"
"""Settings document name, both in the templates and in a .claude directory."""

MCP_FILE: str = ".mcp.json"
"""MCP server manifest name."""

GITIGNORE_FILE: str = ".gitignore"

NAMESPACE: str = "hxm"
"""Namespace folder isolating toolkit files from user-authored ones."""

TEMPLATE_SUBDIRS: tuple[str, ...] = ("agents", "commands")
"""Template subdirectories copied into <target>/<subdir>/hxm/."""

REQUIRED_TEMPLATE_FILES: tuple[str, ...] = (SETTINGS_FILE, MCP_FILE)
"""Template files that must exist and parse as JSON."""

PROJECT_GITIGNORE_ENTRIES: tuple[str, ...] = (
    "# Ignore Hexium toolkit settings to prevent noise in PRs",
    f"{CLAUDE_DIR_NAME}/{SETTINGS_FILE}",
    f"{CLAUDE_DIR_NAME}/*/{NAMESPACE}/*",
    MCP_FILE,
)
"""Entries appended to the project root .gitignore."""

PROJECT_ENV_DIR_NAMES: tuple[str, ...] = ("node_modules", ".venv", "venv")
"""Environment folders whose parent is taken as the project root."""


# ============================================================================
# MCP Constants
# ============================================================================

CLAUDE_CLI: str = "claude"
"""External assistant CLI used for MCP server registration."""

MCP_SCOPES: tuple[str, ...] = ("user", "project")

MCP_REQUIRED_ENV: dict[str, list[str]] = {
    "clickup": ["CLICKUP_API_KEY", "CLICKUP_TEAM_ID"],
}
"""Environment variables a server needs before it is useful (presence only)."""

TIMEOUT_CLAUDE_CLI: int = _env_int("HXM_TIMEOUT_CLAUDE_CLI", 60)
"""Seconds to wait for a single `claude mcp ...` invocation."""


# ============================================================================
# Directory Getters
# ============================================================================


def get_templates_dir() -> Path:
    """Get the directory holding the toolkit templates.

    Respects HXM_TEMPLATES_DIR environment variable override.
    Defaults to the templates bundled with the package.

    Returns:
        Path to templates directory
    """
    override = os.environ.get("HXM_TEMPLATES_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parent / "templates"


def get_user_claude_dir() -> Path:
    """Get the user's Claude configuration directory.

    Respects CLAUDE_CONFIG_DIR environment variable override.
    Defaults to ~/.claude if not set.

    Returns:
        Path to the user Claude directory
    """
    override = os.environ.get("CLAUDE_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / CLAUDE_DIR_NAME
