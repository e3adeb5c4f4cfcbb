"""Exception hierarchy for claude-toolkit.

Provides a structured exception tree so callers can catch broad
categories (``ToolkitError``) or specific failure modes.

This module is a base-layer module: it must NOT import from any
other ``claude_toolkit`` submodule.
"""

from __future__ import annotations


class ToolkitError(Exception):
    """Base exception for all claude-toolkit errors."""


class TemplateError(ToolkitError):
    """Toolkit template input is missing or malformed (fatal for an install)."""


class SettingsError(ToolkitError):
    """An existing settings document on disk cannot be parsed."""


class McpError(ToolkitError):
    """Failures registering or removing MCP servers through the claude CLI."""
