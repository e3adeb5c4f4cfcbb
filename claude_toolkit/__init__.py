"""claude-toolkit - installer for Hexium Claude settings, agents, commands and MCP servers."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("claude-toolkit")
except PackageNotFoundError:
    __version__ = "1.4.0"  # fallback for editable installs / dev
