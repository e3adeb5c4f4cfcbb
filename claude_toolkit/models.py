from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class InstallOptions(BaseModel):
    """Flags shared by every install command.

    Built from the CLI flags; all default to off.
    """

    model_config = ConfigDict(frozen=True)

    force: bool = False
    """Overwrite settings wholesale and skip every prompt."""

    dry_run: bool = False
    """Report what would change without writing anything."""

    skip_mcp: bool = False
    """Skip MCP server configuration entirely."""

    mcp_only: bool = False
    """Configure only MCP servers (skip settings and templates)."""

    force_mcp: bool = False
    """Reconfigure MCP servers even if already registered."""


class McpServerConfig(BaseModel):
    """One entry of the ``mcpServers`` mapping in a template ``.mcp.json``.

    Unknown keys are kept so that a manifest written for a newer claude CLI
    still loads.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["stdio", "sse", "http"] = "stdio"
    """Transport used by the server."""

    command: str = ""
    """Executable launched for stdio servers."""

    args: list[str] = Field(default_factory=list)
    """Arguments passed to ``command``."""

    env: dict[str, str] = Field(default_factory=dict)
    """Environment variables passed with ``--env KEY=VALUE``."""

    url: str = ""
    """Endpoint for sse/http servers."""

    requires_env: list[str] = Field(default_factory=list, exclude=True)
    """Environment variables that must be set for the server to work.

    Filled in by the loader, never read from the manifest.
    """
