"""Settings reconciliation between a user's settings.json and the toolkit template.

The workflow is diff -> select -> apply -> persist:

1. ``detect_differences`` walks the template and reports every key path whose
   value is missing from, or differs in, the existing document.
2. ``select_changes`` asks the user which differences to take (new keys are
   pre-selected, changed keys are not).
3. ``apply_selected_changes`` writes the chosen template values into a copy
   of the existing document.
4. ``merge_settings`` drives the whole thing and backs up the previous file
   before any write.

Keys that only exist in the user's document are never reported, changed or
removed. Arrays are compared and replaced as a whole.
"""

from __future__ import annotations

import copy
import enum
import json
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from claude_toolkit.config import load_json_object, write_json
from claude_toolkit.errors import SettingsError
from claude_toolkit.tui import Choice, Selector, tui_checkbox
from claude_toolkit.utils import log_error, log_info, log_step, log_success


class DiffKind(str, enum.Enum):
    NEW = "new"
    CHANGED = "changed"


class MergeOutcome(enum.Enum):
    """Which branch of merge_settings ran."""

    CREATED = "created"
    REPLACED = "replaced"
    PREVIEWED = "previewed"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class Difference:
    """A template key path whose value is absent from or differs in the existing settings.

    Attributes:
        key: Key path from the document root (``statusLine.type``); dots inside
            a single key are escaped as ``\\.``, see join_key().
        kind: NEW when the key is absent, CHANGED when the values differ.
        template_value: Value the template carries at this path.
        existing_value: Value currently on disk (None for NEW records).
        display_value: Human readable rendering for prompts and previews.
        path: Raw key segments; used when applying, since keys may contain dots.
    """

    key: str
    kind: DiffKind
    template_value: Any
    existing_value: Any
    display_value: str
    path: tuple[str, ...]


def _normalize(value: Any) -> Any:
    """Map integral floats to ints, recursively, so 1.0 and 1 compare equal as JSON numbers."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_normalize(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize(item) for key, item in value.items()}
    return value


def join_key(path: tuple[str, ...]) -> str:
    """Render a key path as ``a.b.c``, escaping dots inside a segment as ``\\.``."""
    return ".".join(
        segment.replace("\\", "\\\\").replace(".", "\\.") for segment in path
    )


def format_value(value: Any) -> str:
    """Render a JSON value compactly for display."""
    value = _normalize(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        return f"[{len(value)} items]"
    if isinstance(value, dict):
        return "{object}"
    return str(value)


def _canonical(value: Any) -> str:
    return json.dumps(_normalize(value), ensure_ascii=False)


def _changed(path: tuple[str, ...], existing: Any, template: Any) -> Difference:
    return Difference(
        key=join_key(path),
        kind=DiffKind.CHANGED,
        template_value=template,
        existing_value=existing,
        display_value=f"{format_value(existing)} → {format_value(template)}",
        path=path,
    )


def detect_differences(
    existing: dict[str, Any], template: dict[str, Any]
) -> list[Difference]:
    """Compare *existing* against *template*, reporting template keys only.

    Keys are visited in template order, depth-first. A template object
    facing an object in *existing* is recursed into; facing anything else
    it is reported once as a whole. Every other value (arrays included) is
    compared by its JSON serialization.

    Returns:
        Differences in visiting order; each key path appears at most once.
    """
    differences: list[Difference] = []

    def walk(current: dict[str, Any], wanted: dict[str, Any], prefix: tuple[str, ...]) -> None:
        for key, template_value in wanted.items():
            path = (*prefix, key)
            if key not in current:
                differences.append(
                    Difference(
                        key=join_key(path),
                        kind=DiffKind.NEW,
                        template_value=template_value,
                        existing_value=None,
                        display_value=format_value(template_value),
                        path=path,
                    )
                )
                continue

            existing_value = current[key]
            if isinstance(template_value, dict):
                if isinstance(existing_value, dict):
                    walk(existing_value, template_value, path)
                else:
                    differences.append(_changed(path, existing_value, template_value))
            elif _canonical(existing_value) != _canonical(template_value):
                differences.append(_changed(path, existing_value, template_value))

    walk(existing, template, ())
    return differences


def select_changes(
    differences: list[Difference], selector: Selector = tui_checkbox
) -> set[str]:
    """Ask which differences to apply.

    Args:
        differences: Output of detect_differences.
        selector: Checkbox prompt; receives the message and the choices.

    Returns:
        Keys of the selected differences (possibly empty).
    """
    if not differences:
        log_success("No differences found - settings are already up to date!")
        return set()

    log_info(
        f"\nFound {len(differences)} difference(s) between your settings "
        "and the Hexium toolkit:"
    )
    choices = [
        Choice(
            label=f"{diff.key}: {diff.display_value}",
            value=diff.key,
            checked=diff.kind is DiffKind.NEW,
        )
        for diff in differences
    ]
    return set(selector("Select settings to update from the Hexium toolkit:", choices))


def set_nested_value(document: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set *value* at *path* inside *document*, creating mappings along the way.

    An intermediate segment that holds anything other than a mapping
    (a string, a list, null) is replaced by an empty mapping, discarding the
    old value.
    """
    if not path:
        raise ValueError("path must contain at least one key")

    current = document
    for segment in path[:-1]:
        child = current.get(segment)
        if not isinstance(child, dict):
            child = {}
            current[segment] = child
        current = child
    current[path[-1]] = value


def apply_selected_changes(
    existing: dict[str, Any],
    differences: list[Difference],
    selection: Iterable[str],
) -> dict[str, Any]:
    """Return a copy of *existing* with the selected template values applied.

    Selected keys that do not match any difference are ignored; *existing*
    itself is left untouched.
    """
    selected = set(selection)
    result = copy.deepcopy(existing)
    for diff in differences:
        if diff.key in selected:
            set_nested_value(result, diff.path, copy.deepcopy(diff.template_value))
    return result


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def backup_settings(path: str | Path) -> Path | None:
    """Copy *path* to ``<path>.backup.<timestamp>``.

    A numeric suffix is added if that name is already taken, so earlier
    backups are never overwritten.

    Returns:
        The backup path, or None if there was no file to back up.
    """
    source = Path(path)
    if not source.is_file():
        return None

    base = source.with_name(f"{source.name}.backup.{_timestamp()}")
    backup = base
    counter = 0
    while backup.exists():
        counter += 1
        backup = base.with_name(f"{base.name}-{counter}")

    shutil.copyfile(source, backup)
    log_step(f"Backup created: {backup.name}")
    return backup


def _load_existing(path: Path) -> dict[str, Any]:
    try:
        return load_json_object(path)
    except (OSError, ValueError) as exc:
        raise SettingsError(f"Error reading existing settings file {path}: {exc}") from exc


def merge_settings(
    existing_path: str | Path,
    template: dict[str, Any],
    *,
    force: bool = False,
    dry_run: bool = False,
    selector: Selector = tui_checkbox,
) -> MergeOutcome:
    """Reconcile the settings file at *existing_path* with *template*.

    Branches, first match wins:

    1. No file yet: write the template as-is (nothing to back up).
    2. force: back up, then replace the file with the template.
    3. dry_run: print the differences, touch nothing.
    4. Otherwise prompt for the differences to apply; back up and write the
       merged document if anything was selected.

    In dry-run mode branches 1 and 2 only report what they would do. An
    existing file that is not a valid JSON object aborts the merge with an
    error message and leaves the disk untouched.

    Returns:
        MergeOutcome naming the branch taken.
    """
    target = Path(existing_path)

    if not target.exists():
        log_info("No existing settings found - creating new file")
        if dry_run:
            log_step(f"--dry-run: Would create {target}")
            return MergeOutcome.PREVIEWED
        write_json(target, template)
        log_success("Settings file created successfully")
        return MergeOutcome.CREATED

    try:
        existing = _load_existing(target)
    except SettingsError as exc:
        log_error(str(exc))
        return MergeOutcome.FAILED

    differences = detect_differences(existing, template)

    if force:
        if dry_run:
            log_info("--dry-run: Would forcefully update all settings")
            return MergeOutcome.PREVIEWED
        backup_settings(target)
        write_json(target, template)
        log_success("Settings forcefully updated")
        return MergeOutcome.REPLACED

    if dry_run:
        log_info("--dry-run: Would show the following differences:")
        for diff in differences:
            log_step(f"{diff.key}: {diff.display_value}")
        return MergeOutcome.PREVIEWED

    selection = select_changes(differences, selector)
    if not selection:
        if differences:
            log_info("No changes selected - settings unchanged")
        return MergeOutcome.UNCHANGED

    backup_settings(target)
    merged = apply_selected_changes(existing, differences, selection)
    write_json(target, merged)
    applied = sum(1 for diff in differences if diff.key in selection)
    log_success(f"Settings updated! Applied {applied} change(s)")
    return MergeOutcome.UPDATED
