"""Validate command: check that the toolkit templates are complete and parse."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from claude_toolkit.commands._helpers import CONTEXT_SETTINGS
from claude_toolkit.config import load_json_object
from claude_toolkit.constants import REQUIRED_TEMPLATE_FILES, get_templates_dir
from claude_toolkit.utils import format_kv, log_error, log_success


def validate_templates(templates_dir: Path) -> dict[str, str | None]:
    """Check each required template file.

    Returns:
        Mapping of file name to a problem description, or None when valid.
    """
    results: dict[str, str | None] = {}
    for name in REQUIRED_TEMPLATE_FILES:
        path = templates_dir / name
        if not path.is_file():
            results[name] = f"Missing file: {name}"
            continue
        try:
            load_json_object(path)
        except (OSError, ValueError) as exc:
            results[name] = f"{name} is invalid: {exc}"
        else:
            results[name] = None
    return results


@click.command("validate", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--templates-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Templates to check (default: the bundled templates)",
)
def validate(templates_dir: Path | None) -> None:
    """Validate the toolkit templates."""
    root = templates_dir if templates_dir is not None else get_templates_dir()
    click.echo(f"Validating toolkit templates in {root}...")

    results = validate_templates(root)
    for name, problem in results.items():
        click.echo(format_kv(name, "ok" if problem is None else "error"))

    problems = [problem for problem in results.values() if problem is not None]
    if problems:
        for problem in problems:
            log_error(problem)
        log_error(f"{len(problems)} error(s) found")
        sys.exit(1)
    log_success("Validation successful!")
