"""Path resolution utilities for claude-toolkit.

Resolves the locations an install touches (template source, user Claude
directory, project root, project Claude directory) once, up front, so the
provisioning and merge code only ever receives explicit paths.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import NamedTuple

from claude_toolkit.constants import (
    CLAUDE_DIR_NAME,
    PROJECT_ENV_DIR_NAMES,
    get_templates_dir,
    get_user_claude_dir,
)
from claude_toolkit.utils import log_debug


_PACKAGE_DIR = Path(__file__).resolve().parent


# ============================================================================
# InstallPaths Data Structure
# ============================================================================


class InstallPaths(NamedTuple):
    """Container for every location an install reads or writes.

    Attributes:
        templates_dir: Source directory of the toolkit templates
        user_claude_dir: The user's Claude directory (~/.claude)
        project_root: Root of the project being provisioned
        project_claude_dir: The project's .claude directory
    """

    templates_dir: Path
    user_claude_dir: Path
    project_root: Path
    project_claude_dir: Path


# ============================================================================
# Path Resolution Functions
# ============================================================================


def find_project_root(start: Path | None = None) -> Path:
    """Locate the root of the project the toolkit is being installed into.

    INIT_CWD (set by npm/npx style launchers to the invoking directory) wins.
    Otherwise the ancestors of *start* (default: this package's directory)
    are searched for an environment folder such as ``node_modules`` or
    ``.venv``; its parent is the project root. Falls back to the current
    working directory.

    Args:
        start: Directory to begin the ancestor search from.

    Returns:
        Path to the project root
    """
    init_cwd = os.environ.get("INIT_CWD")
    if init_cwd:
        return Path(init_cwd)

    current = start if start is not None else _PACKAGE_DIR
    for candidate in (current, *current.parents):
        if candidate.name in PROJECT_ENV_DIR_NAMES:
            log_debug(f"Project root found above {candidate}")
            return candidate.parent

    return Path.cwd()


def resolve_install_paths(project_root: Path | None = None) -> InstallPaths:
    """Derive all install locations.

    Args:
        project_root: Explicit project root; discovered when omitted.

    Returns:
        InstallPaths with every location resolved
    """
    root = project_root if project_root is not None else find_project_root()
    return InstallPaths(
        templates_dir=get_templates_dir(),
        user_claude_dir=get_user_claude_dir(),
        project_root=root,
        project_claude_dir=root / CLAUDE_DIR_NAME,
    )
