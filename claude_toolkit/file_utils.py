"""Idempotent file provisioning primitives.

Every function here can be run any number of times against the same target:
directories are only created when missing, copies overwrite unconditionally,
and text files only gain lines they do not already contain.
"""

from __future__ import annotations

import enum
import shutil
from pathlib import Path
from typing import Iterable

from claude_toolkit.constants import NAMESPACE
from claude_toolkit.utils import log_step, log_warn


class LineUpdate(enum.Enum):
    """What append_missing_lines did to the target file."""

    CREATED = "created"
    APPENDED = "appended"
    UNCHANGED = "unchanged"


def ensure_dir(path: str | Path) -> bool:
    """Ensure a directory exists, creating it and missing ancestors if necessary.

    Args:
        path: Directory path (string or Path)

    Returns:
        True if the directory was created, False if it already existed
    """
    p = Path(path)
    if p.is_dir():
        return False
    p.mkdir(parents=True, exist_ok=True)
    return True


def copy_file(src: str | Path, dest: str | Path, label: str) -> bool:
    """Copy a single file byte-for-byte, overwriting the destination.

    Args:
        src: Source file.
        dest: Destination file.
        label: Name shown in the Created/Updated report.

    Returns:
        True if the file was copied, False if the source does not exist
    """
    src_path = Path(src)
    dest_path = Path(dest)
    if not src_path.is_file():
        log_warn(f"Source file not found: {label}")
        return False

    action = "Updated" if dest_path.exists() else "Created"
    shutil.copyfile(src_path, dest_path)
    log_step(f"{action}: {label}")
    return True


def copy_directory_files(src_dir: str | Path, dest_dir: str | Path) -> list[str]:
    """Copy every regular file directly inside *src_dir* into *dest_dir*.

    Sub-directories of *src_dir* are ignored. Existing destination files are
    overwritten.

    Returns:
        Names of the copied files, sorted; empty when *src_dir* is absent
    """
    src = Path(src_dir)
    dest = Path(dest_dir)
    if not src.is_dir():
        return []

    if ensure_dir(dest):
        log_step(f"{dest.name} directory created")

    copied: list[str] = []
    for entry in sorted(src.iterdir()):
        if not entry.is_file():
            continue
        shutil.copyfile(entry, dest / entry.name)
        log_step(f"Updated: {entry.name}")
        copied.append(entry.name)
    return copied


def copy_namespace_files(
    templates_dir: Path,
    target_dir: Path,
    subdirs: Iterable[str],
    display_root: str,
) -> dict[str, list[str]]:
    """Copy template subdirectories into namespaced folders of *target_dir*.

    For each subdir, ``<templates_dir>/<subdir>/*`` lands in
    ``<target_dir>/<subdir>/hxm/``.

    Args:
        templates_dir: Template source directory.
        target_dir: Destination .claude directory.
        subdirs: Template subdirectories to process.
        display_root: How *target_dir* is shown in messages (``~/.claude``).

    Returns:
        Mapping of subdir to the file names copied into its namespace
    """
    copied: dict[str, list[str]] = {}
    for subdir in subdirs:
        dest_base = target_dir / subdir
        dest_namespace = dest_base / NAMESPACE

        if ensure_dir(dest_base):
            log_step(f"{display_root}/{subdir} directory created")
        if ensure_dir(dest_namespace):
            log_step(f"{display_root}/{subdir}/{NAMESPACE} directory created")

        copied[subdir] = copy_directory_files(templates_dir / subdir, dest_namespace)
    return copied


def missing_lines(content: str, entries: Iterable[str]) -> list[str]:
    """Return the entries that append_missing_lines would add to *content*.

    Comment entries (starting with ``#``) are only kept when none of the
    pattern entries already occurs in *content*, so a section header is not
    repeated. Pattern entries are kept when they do not occur as a substring.
    """
    entries = list(entries)
    patterns = [entry for entry in entries if not entry.startswith("#")]
    section_present = any(pattern in content for pattern in patterns)

    to_add: list[str] = []
    for entry in entries:
        if entry.startswith("#"):
            if not section_present:
                to_add.append(entry)
        elif entry not in content:
            to_add.append(entry)
    return to_add


def read_text_exact(path: str | Path) -> str:
    """Read a text file without translating its line endings."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def append_missing_lines(path: str | Path, entries: Iterable[str]) -> LineUpdate:
    """Append the entries missing from a text file (typically a .gitignore).

    The file is only written when at least one entry is added; otherwise it
    stays byte-identical. Appended lines use the file's own line ending (CRLF
    when it already contains one, LF otherwise).

    Args:
        path: Text file to update; created if absent.
        entries: Lines to ensure, see missing_lines() for the rules.

    Returns:
        LineUpdate describing the outcome
    """
    p = Path(path)
    existed = p.exists()
    content = read_text_exact(p) if existed else ""

    to_add = missing_lines(content, entries)
    if not to_add:
        return LineUpdate.UNCHANGED

    eol = "\r\n" if "\r\n" in content else "\n"
    separator = eol if content and not content.endswith("\n") else ""
    with open(p, "w", encoding="utf-8", newline="") as f:
        f.write(content + separator + eol.join(to_add) + eol)
    return LineUpdate.APPENDED if existed else LineUpdate.CREATED


def report_line_update(update: LineUpdate, label: str) -> None:
    """Print the outcome of append_missing_lines for *label*."""
    action = {
        LineUpdate.CREATED: "Created",
        LineUpdate.APPENDED: "Updated",
        LineUpdate.UNCHANGED: "Already up to date",
    }[update]
    log_step(f"{action}: {label}")
