"""Install orchestration for the user, project and global scopes.

Each ``install_*`` function sequences the provisioning primitives, the
settings reconciler and the MCP registrar for one target and applies the
CLI flag policy. All locations come in through ``InstallPaths``; the
external command runner and the checkbox prompt are injectable.

Template problems raise ``TemplateError``; everything else degrades
per step (see settings_merge and mcp).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from claude_toolkit.config import load_json_object
from claude_toolkit.constants import (
    GITIGNORE_FILE,
    MCP_FILE,
    NAMESPACE,
    PROJECT_GITIGNORE_ENTRIES,
    SETTINGS_FILE,
    TEMPLATE_SUBDIRS,
)
from claude_toolkit.errors import TemplateError
from claude_toolkit.file_utils import (
    append_missing_lines,
    copy_file,
    copy_namespace_files,
    ensure_dir,
    missing_lines,
    read_text_exact,
    report_line_update,
)
from claude_toolkit.mcp import CommandRunner, configure_mcp_servers, run_claude
from claude_toolkit.models import InstallOptions
from claude_toolkit.paths import InstallPaths
from claude_toolkit.settings_merge import MergeOutcome, merge_settings
from claude_toolkit.tui import Selector, tui_checkbox
from claude_toolkit.utils import log_info, log_section, log_step, log_success


# ============================================================================
# Helpers
# ============================================================================


def load_template_settings(templates_dir: Path) -> dict[str, Any]:
    """Load the toolkit settings template.

    Raises:
        TemplateError: If the template is missing or not a JSON object.
    """
    path = templates_dir / SETTINGS_FILE
    try:
        return load_json_object(path)
    except (OSError, ValueError) as exc:
        raise TemplateError(f"Error reading toolkit settings template {path}: {exc}") from exc


def _prepare_dir(path: Path, display: str, dry_run: bool) -> None:
    if dry_run:
        if not path.is_dir():
            log_step(f"--dry-run: Would create {display}")
        return
    if ensure_dir(path):
        log_step(f"{display} directory created")


def _install_settings(
    templates_dir: Path,
    claude_dir: Path,
    options: InstallOptions,
    selector: Selector,
) -> MergeOutcome:
    template = load_template_settings(templates_dir)
    log_section(f"Settings ({claude_dir / SETTINGS_FILE})")
    return merge_settings(
        claude_dir / SETTINGS_FILE,
        template,
        force=options.force,
        dry_run=options.dry_run,
        selector=selector,
    )


def _install_namespaces(
    templates_dir: Path, claude_dir: Path, display: str, dry_run: bool
) -> None:
    log_section(f"Templates ({display}/*/{NAMESPACE}/)")
    if not dry_run:
        copy_namespace_files(templates_dir, claude_dir, TEMPLATE_SUBDIRS, display)
        return

    for subdir in TEMPLATE_SUBDIRS:
        src = templates_dir / subdir
        if not src.is_dir():
            continue
        for entry in sorted(src.iterdir()):
            if entry.is_file():
                log_step(
                    f"--dry-run: Would copy {subdir}/{entry.name} "
                    f"to {display}/{subdir}/{NAMESPACE}/"
                )


def _copy_template_file(
    templates_dir: Path, name: str, dest: Path, label: str, dry_run: bool
) -> None:
    if dry_run:
        action = "update" if dest.exists() else "create"
        log_step(f"--dry-run: Would {action} {label}")
        return
    copy_file(templates_dir / name, dest, label)


def _update_gitignore(project_root: Path, dry_run: bool) -> None:
    path = project_root / GITIGNORE_FILE
    label = f"{GITIGNORE_FILE} (at project root)"
    if dry_run:
        content = read_text_exact(path) if path.exists() else ""
        to_add = missing_lines(content, PROJECT_GITIGNORE_ENTRIES)
        if not to_add:
            log_step(f"Already up to date: {label}")
        for entry in to_add:
            log_step(f"--dry-run: Would add '{entry}' to {label}")
        return
    report_line_update(append_missing_lines(path, PROJECT_GITIGNORE_ENTRIES), label)


# ============================================================================
# Orchestrators
# ============================================================================


def install_user(
    paths: InstallPaths,
    options: InstallOptions,
    *,
    runner: CommandRunner = run_claude,
    selector: Selector = tui_checkbox,
) -> None:
    """Install settings, templates and MCP servers into the user's ~/.claude."""
    log_info("Installing Claude Code toolkit for user...")

    if options.mcp_only:
        log_info("MCP-only mode: configuring MCP servers only")
        configure_mcp_servers(paths.templates_dir, options, "user", runner=runner, selector=selector)
        return

    _prepare_dir(paths.user_claude_dir, "~/.claude", options.dry_run)
    _install_settings(paths.templates_dir, paths.user_claude_dir, options, selector)
    _install_namespaces(paths.templates_dir, paths.user_claude_dir, "~/.claude", options.dry_run)

    log_section("MCP servers")
    configure_mcp_servers(paths.templates_dir, options, "user", runner=runner, selector=selector)

    log_success("User installation completed!")
    log_info(f"User Hexium templates installed in ~/.claude/*/{NAMESPACE}/")


def install_project(
    paths: InstallPaths,
    options: InstallOptions,
    *,
    selector: Selector = tui_checkbox,
) -> None:
    """Install settings and templates into the project's .claude directory.

    MCP servers are provisioned for the project by copying ``.mcp.json`` to
    the project root, where the claude CLI picks them up at project scope.
    """
    log_info("Installing Claude Code toolkit for project...")

    if options.mcp_only:
        log_info("MCP-only mode: copying MCP configuration only")
        _copy_template_file(
            paths.templates_dir,
            MCP_FILE,
            paths.project_root / MCP_FILE,
            f"{MCP_FILE} (at project root)",
            options.dry_run,
        )
        return

    _prepare_dir(paths.project_claude_dir, ".claude", options.dry_run)
    _install_settings(paths.templates_dir, paths.project_claude_dir, options, selector)
    _install_namespaces(paths.templates_dir, paths.project_claude_dir, ".claude", options.dry_run)

    log_section("Project files")
    if options.skip_mcp:
        log_info("Skipping MCP configuration (--skip-mcp)")
    else:
        _copy_template_file(
            paths.templates_dir,
            MCP_FILE,
            paths.project_root / MCP_FILE,
            f"{MCP_FILE} (at project root)",
            options.dry_run,
        )
    _update_gitignore(paths.project_root, options.dry_run)

    log_success("Project installation completed!")
    log_info(f"Hexium templates are available in .claude/*/{NAMESPACE}/")


def install_global(
    paths: InstallPaths,
    options: InstallOptions,
    *,
    selector: Selector = tui_checkbox,
) -> None:
    """Install settings, templates and the MCP manifest into ~/.claude."""
    log_info("Installing Claude Code toolkit globally...")

    mcp_dest = paths.user_claude_dir / MCP_FILE
    mcp_label = f"{MCP_FILE} (in ~/.claude/)"

    if options.mcp_only:
        log_info("MCP-only mode: copying MCP configuration only")
        _prepare_dir(paths.user_claude_dir, "~/.claude", options.dry_run)
        _copy_template_file(paths.templates_dir, MCP_FILE, mcp_dest, mcp_label, options.dry_run)
        return

    _prepare_dir(paths.user_claude_dir, "~/.claude", options.dry_run)
    _install_settings(paths.templates_dir, paths.user_claude_dir, options, selector)
    _install_namespaces(paths.templates_dir, paths.user_claude_dir, "~/.claude", options.dry_run)

    log_section("MCP servers")
    if options.skip_mcp:
        log_info("Skipping MCP configuration (--skip-mcp)")
    else:
        _copy_template_file(paths.templates_dir, MCP_FILE, mcp_dest, mcp_label, options.dry_run)

    log_success("Global installation completed!")
    log_info("Global Hexium templates installed in ~/.claude/")
