"""Click-based CLI entrypoint for claude-toolkit.

All commands are implemented as Click subcommands with lazy loading.
Unknown commands raise an error.
"""

from __future__ import annotations

import importlib
import os
import sys

import click

from claude_toolkit import __version__
from claude_toolkit.utils import log_debug

# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------
# Each alias maps to (canonical_command, prepended_args). The CLI rewrites
# the invocation before dispatch.

ALIASES: dict[str, tuple[str, list[str]]] = {
    "setup": ("project-install", []),
}

# ---------------------------------------------------------------------------
# Custom Click Group
# ---------------------------------------------------------------------------


_LAZY_COMMANDS: dict[str, tuple[str, str]] = {
    "global-install": ("claude_toolkit.commands.global_install", "global_install"),
    "help": ("claude_toolkit.commands.help_cmd", "help_cmd"),
    "project-install": ("claude_toolkit.commands.project_install", "project_install"),
    "user-install": ("claude_toolkit.commands.user_install", "user_install"),
    "validate": ("claude_toolkit.commands.validate", "validate"),
}


class ToolkitGroup(click.Group):
    """Custom Click group that supports alias resolution and lazy loading.

    Behaviour:
    * Command modules are imported on first access, not at import time.
    * Aliases listed in ``ALIASES`` are rewritten to their canonical form
      before dispatch.
    * Unknown commands produce an error message.
    """

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return all available command names (eager + lazy)."""
        eager = set(self.commands or {})
        return sorted(eager | _LAZY_COMMANDS.keys())

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Look up a command, importing lazily if needed."""
        cmd = self.commands.get(cmd_name)
        if cmd is not None:
            return cmd

        entry = _LAZY_COMMANDS.get(cmd_name)
        if entry is None:
            return None

        module_path, attr_name = entry
        mod = importlib.import_module(module_path)
        loaded_cmd: click.Command = getattr(mod, attr_name)
        # Cache so subsequent lookups skip the import
        self.add_command(loaded_cmd, cmd_name)
        return loaded_cmd

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Resolve a command name, handling aliases.

        Order of operations:
        1. If the token is an alias, rewrite to canonical name + prepend args.
        2. Try normal Click resolution (registered subcommands).
        3. If not found, raise an error.
        """
        if not args:
            return super().resolve_command(ctx, args)

        cmd_name = args[0]
        remaining = list(args[1:])

        if cmd_name in ALIASES:
            canonical, prepended = ALIASES[cmd_name]
            log_debug(f"Alias '{cmd_name}' -> '{canonical}' with args {prepended}")
            cmd_name = canonical
            remaining = prepended + remaining

        cmd_obj = self.get_command(ctx, cmd_name)
        if cmd_obj is not None:
            return cmd_name, cmd_obj, remaining

        ctx.fail(
            f"Unknown command '{cmd_name}'. Run 'claude-toolkit help' for available commands."
        )


# ---------------------------------------------------------------------------
# Main CLI Group
# ---------------------------------------------------------------------------


@click.group(
    cls=ToolkitGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="claude-toolkit")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Hexium Claude toolkit - install Claude settings, agents, commands and MCP servers."""
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None and not ctx.args:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------


def _validate_lazy_commands() -> None:
    """Verify all lazy command entries resolve to valid modules.

    Only runs when HXM_VALIDATE_COMMANDS=1 is set (debug/CI).
    """
    if not os.environ.get("HXM_VALIDATE_COMMANDS"):
        return
    for cmd_name, (module_path, attr_name) in _LAZY_COMMANDS.items():
        try:
            mod = importlib.import_module(module_path)
            if not hasattr(mod, attr_name):
                raise RuntimeError(
                    f"Lazy command '{cmd_name}' is broken: "
                    f"{module_path}.{attr_name} not found"
                )
        except ImportError as exc:
            raise RuntimeError(
                f"Lazy command '{cmd_name}' is broken: {exc}"
            ) from exc


def main() -> None:
    """Entry point for the CLI.

    Uses ``standalone_mode=False`` so that Click does not call
    ``sys.exit`` on its own; exit codes are managed explicitly.

    Usage errors (bad flags, unknown commands) are normalised to exit
    code 1. Click's default for ``UsageError`` is exit code 2.
    """
    _validate_lazy_commands()
    try:
        result = cli(standalone_mode=False)
    except click.UsageError as exc:
        click.echo(f"Error: {exc.format_message()}", err=True)
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        sys.exit(1 if code == 2 else code)
    if isinstance(result, int):
        sys.exit(result)


if __name__ == "__main__":
    main()
