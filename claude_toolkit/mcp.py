"""MCP server registration through the claude CLI.

Reads the server manifest shipped in the templates (``.mcp.json``), finds out
which servers are already registered, and registers the rest with
``claude mcp add``. Every external command runs to completion before the
next one starts, and a failure for one server never stops the others.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable

from pydantic import ValidationError

from claude_toolkit.config import load_json_object
from claude_toolkit.constants import (
    CLAUDE_CLI,
    MCP_FILE,
    MCP_REQUIRED_ENV,
    MCP_SCOPES,
    TIMEOUT_CLAUDE_CLI,
)
from claude_toolkit.errors import McpError
from claude_toolkit.models import InstallOptions, McpServerConfig
from claude_toolkit.tui import Choice, Selector, tui_checkbox
from claude_toolkit.utils import (
    log_debug,
    log_error,
    log_info,
    log_step,
    log_success,
    log_warn,
)


CommandRunner = Callable[[list[str]], bool]
"""Runs ``claude <args>`` and reports whether it succeeded."""


# ============================================================================
# External Command
# ============================================================================


def run_claude(args: list[str]) -> bool:
    """Run the claude CLI with *args*; output is captured and discarded.

    Returns:
        True if the command exited with status 0.
    """
    cmd = [CLAUDE_CLI, *args]
    log_debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
            timeout=TIMEOUT_CLAUDE_CLI,
        )
    except FileNotFoundError:
        log_debug(f"{CLAUDE_CLI} not found on PATH")
        return False
    except subprocess.TimeoutExpired:
        log_debug(f"Timed out after {TIMEOUT_CLAUDE_CLI}s: {' '.join(cmd)}")
        return False
    if result.returncode != 0:
        log_debug(f"Exit {result.returncode}: {result.stderr.strip()}")
    return result.returncode == 0


# ============================================================================
# Manifest
# ============================================================================


def load_mcp_servers(templates_dir: Path) -> dict[str, McpServerConfig]:
    """Load the ``mcpServers`` mapping from the template manifest.

    A missing or malformed manifest is reported and yields no servers.
    """
    manifest = templates_dir / MCP_FILE
    try:
        raw = load_json_object(manifest).get("mcpServers") or {}
        if not isinstance(raw, dict):
            raise ValueError("mcpServers must be an object")
        servers = {name: McpServerConfig.model_validate(cfg) for name, cfg in raw.items()}
    except (OSError, ValueError, ValidationError) as exc:
        log_error(f"Error loading MCP configuration from templates: {exc}")
        return {}

    for name, required in MCP_REQUIRED_ENV.items():
        if name in servers:
            servers[name].requires_env = list(required)
    return servers


def missing_env_vars(names: Iterable[str]) -> list[str]:
    """Return the variables from *names* that are unset or empty."""
    return [name for name in names if not os.environ.get(name)]


# ============================================================================
# Registration
# ============================================================================


def get_existing_servers(names: Iterable[str], runner: CommandRunner = run_claude) -> set[str]:
    """Return the servers ``claude mcp get`` knows about, at any scope."""
    return {name for name in names if runner(["mcp", "get", name])}


def build_add_args(name: str, config: McpServerConfig, scope: str = "user") -> list[str]:
    """Build the ``claude mcp add`` arguments for one server.

    Project scope is the claude CLI default, so only user scope passes
    ``--scope``. ``$VAR`` references in env values are expanded from the
    current environment, as a shell would have done.
    """
    if scope not in MCP_SCOPES:
        raise McpError(f"Unknown MCP scope: {scope}")

    args = ["mcp", "add"]
    if scope == "user":
        args.extend(["--scope", "user"])

    if config.type == "stdio":
        args.append(name)
        for key, value in config.env.items():
            args.extend(["--env", f"{key}={os.path.expandvars(value)}"])
        args.extend(["--", config.command, *config.args])
    elif config.type == "sse":
        args.extend(["--transport", "sse", name, config.url])
    else:
        args.extend([name, config.url])
    return args


def remove_server(name: str, runner: CommandRunner = run_claude) -> bool:
    """Remove *name* from every scope; True if any removal succeeded."""
    removed = [runner(["mcp", "remove", name, "--scope", scope]) for scope in MCP_SCOPES]
    if not any(removed):
        log_warn(f"Could not remove {name} from either scope")
        return False
    return True


def install_server(
    name: str,
    config: McpServerConfig,
    *,
    scope: str = "user",
    replace: bool = False,
    runner: CommandRunner = run_claude,
) -> bool:
    """Register one server, removing a previous registration first if *replace*.

    Failures are reported, never raised.

    Returns:
        True if ``claude mcp add`` succeeded.
    """
    log_info(f"Installing MCP server: {name}...")
    try:
        if replace:
            log_step(f"Removing existing {name} server...")
            remove_server(name, runner)

        if not runner(build_add_args(name, config, scope)):
            raise McpError(f"claude mcp add exited with an error for {name}")
    except McpError as exc:
        log_error(f"Failed to install {name}: {exc}")
        return False

    log_success(f"{name} installed successfully")
    return True


def configure_mcp_servers(
    templates_dir: Path,
    options: InstallOptions,
    scope: str = "user",
    *,
    runner: CommandRunner = run_claude,
    selector: Selector = tui_checkbox,
) -> list[str]:
    """Register the template MCP servers that are not registered yet.

    With ``force_mcp`` every template server is (re)installed, removing the
    existing registration first. Selection is interactive unless ``force``,
    ``mcp_only`` or ``force_mcp`` is set, in which case every candidate is
    taken. In dry-run mode nothing is added or removed.

    Returns:
        Names of the servers that were installed.
    """
    if options.skip_mcp:
        log_info("Skipping MCP configuration (--skip-mcp)")
        return []

    log_info("Checking MCP server configuration...")
    servers = load_mcp_servers(templates_dir)
    if not servers:
        log_warn("No MCP servers found in templates")
        return []

    existing = get_existing_servers(servers, runner)
    candidates = list(servers) if options.force_mcp else [n for n in servers if n not in existing]

    if existing:
        log_info(
            f"Found {len(existing)} existing MCP server(s): "
            f"{', '.join(n for n in servers if n in existing)}"
        )

    if not candidates:
        log_success("All Hexium MCP servers are already configured!")
        return []

    log_info(f"Available Hexium MCP servers to install: {', '.join(candidates)}")

    needs_env: dict[str, list[str]] = {}
    for name in candidates:
        missing = missing_env_vars(servers[name].requires_env)
        if missing:
            needs_env[name] = missing

    selected = candidates
    if not (options.force or options.mcp_only or options.force_mcp):
        for name, missing in needs_env.items():
            log_warn(f"{name} requires environment variables: {', '.join(missing)}")
        if needs_env:
            log_info("You can set these in your shell profile (~/.zshrc, ~/.bashrc)")
        choices = [
            Choice(
                label=f"{name} (needs env setup)" if name in needs_env else name,
                value=name,
                checked=True,
            )
            for name in candidates
        ]
        selected = selector("Select MCP servers to install:", choices)

    if not selected:
        log_info("No MCP servers selected for installation")
        return []

    if options.dry_run:
        for name in selected:
            add_args = build_add_args(name, servers[name], scope)
            log_step(f"--dry-run: Would run: {CLAUDE_CLI} {' '.join(add_args)}")
        return []

    installed = [
        name
        for name in selected
        if install_server(
            name,
            servers[name],
            scope=scope,
            replace=options.force_mcp and name in existing,
            runner=runner,
        )
    ]

    for name in selected:
        if name in needs_env:
            log_info(f"\nDon't forget to set the {name} environment variables:")
            for var in needs_env[name]:
                log_step(f'export {var}="..."')
    return installed
