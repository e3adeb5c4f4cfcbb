"""Interactive prompt utilities for claude-toolkit.

This module provides the interactive prompts used by the installers, using
gum (preferred) with a Click fallback.

All functions respect the HXM_NONINTERACTIVE environment variable for
automated/batch operations: prompts then return their defaults.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from functools import lru_cache
from typing import Callable, NamedTuple

import click


class Choice(NamedTuple):
    """One entry of a checkbox prompt."""

    label: str
    value: str
    checked: bool = False


Selector = Callable[[str, list[Choice]], list[str]]
"""Signature of a checkbox prompt: (message, choices) -> selected values."""


@lru_cache(maxsize=1)
def _has_gum() -> bool:
    """Check if gum is available on PATH (cached)."""
    return shutil.which("gum") is not None


def _run_gum(*args: str, input_text: str | None = None) -> tuple[bool, str]:
    """Run a gum command, return (success, stdout)."""
    try:
        result = subprocess.run(
            ["gum", *args],
            stdout=subprocess.PIPE,
            text=True,
            check=False,
            input=input_text,
            timeout=300,
        )
        return result.returncode == 0, result.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False, ""


def _is_noninteractive() -> bool:
    """Check if running in non-interactive mode.

    Returns:
        True if HXM_NONINTERACTIVE=1.
    """
    return os.environ.get("HXM_NONINTERACTIVE") == "1"


def _parse_numbers(raw: str, count: int) -> list[int] | None:
    """Parse "1, 3 4" into zero-based indexes, or None if any token is invalid."""
    text = raw.strip().lower()
    if text in ("", "none"):
        return []
    if text == "all":
        return list(range(count))

    indexes: list[int] = []
    for token in text.replace(",", " ").split():
        if not token.isdigit() or not 1 <= int(token) <= count:
            return None
        index = int(token) - 1
        if index not in indexes:
            indexes.append(index)
    return sorted(indexes)


def tui_checkbox(prompt: str, choices: list[Choice]) -> list[str]:
    """Prompt for any number of items from a list.

    Args:
        prompt: The prompt message to display.
        choices: Items to offer; ``checked`` items are pre-selected.

    Returns:
        Values of the selected items, in the order they were offered.
    """
    if not choices:
        return []

    defaults = [choice.value for choice in choices if choice.checked]
    if _is_noninteractive():
        return defaults

    if _has_gum():
        gum_args = ["choose", "--no-limit", "--header", prompt]
        # gum splits --selected on commas unless they are escaped
        for choice in choices:
            if choice.checked:
                gum_args.append("--selected=" + choice.label.replace(",", "\\,"))
        gum_args.extend(choice.label for choice in choices)
        ok, output = _run_gum(*gum_args)
        if ok:
            picked = set(output.splitlines())
            return [choice.value for choice in choices if choice.label in picked]

    # Click fallback: numbered list, answer with the numbers to keep
    click.echo()
    click.echo(prompt)
    for i, choice in enumerate(choices, start=1):
        mark = "x" if choice.checked else " "
        click.echo(f"  [{mark}] {i}. {choice.label}")
    click.echo()

    default = ",".join(
        str(i) for i, choice in enumerate(choices, start=1) if choice.checked
    )
    while True:
        raw: str = click.prompt(
            "Numbers to select (comma-separated, 'all' or 'none')",
            default=default or "none",
            type=str,
        )
        indexes = _parse_numbers(raw, len(choices))
        if indexes is not None:
            return [choices[i].value for i in indexes]
        click.echo(f"  Please enter numbers between 1 and {len(choices)}.")


def tui_header(title: str) -> None:
    """Display a styled header.

    Args:
        title: The header text to display.
    """
    if _has_gum() and not _is_noninteractive():
        ok, output = _run_gum(
            "style",
            "--border", "rounded",
            "--border-foreground", "12",
            "--padding", "0 2",
            "--bold",
            title,
        )
        if ok:
            click.echo()
            click.echo(output)
            return

    # ASCII box fallback
    width = len(title) + 4
    click.echo()
    click.echo(f"  {'─' * width}")
    click.echo(f"  │ {title} │")
    click.echo(f"  {'─' * width}")
