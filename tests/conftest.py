"""
Top-level pytest conftest.py -- shared fixtures for claude-toolkit tests.

Provides:
    templates_dir  - temporary template tree (settings, .mcp.json, agents, commands)
    install_paths  - InstallPaths pointing every location into tmp_path
    toolkit_env    - environment wired to the temporary locations
"""

import json

import pytest

from claude_toolkit.paths import InstallPaths


TEMPLATE_SETTINGS = {
    "includeCoAuthoredBy": False,
    "permissions": {"allow": ["Bash(git status:*)"], "deny": []},
    "statusLine": {"type": "command", "command": "git branch --show-current"},
}

TEMPLATE_MCP = {
    "mcpServers": {
        "context7": {
            "type": "stdio",
            "command": "npx",
            "args": ["-y", "@upstash/context7-mcp"],
        },
        "docs": {"type": "sse", "url": "https://docs.example.com/sse"},
    }
}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep developer environment variables from leaking into tests."""
    for name in (
        "INIT_CWD",
        "CLAUDE_CONFIG_DIR",
        "HXM_TEMPLATES_DIR",
        "HXM_NONINTERACTIVE",
        "HXM_DEBUG",
        "HXM_VALIDATE_COMMANDS",
        "CLICKUP_API_KEY",
        "CLICKUP_TEAM_ID",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def templates_dir(tmp_path):
    """Create a template tree mirroring the bundled one.

    Yields the ``pathlib.Path`` to the templates root.
    """
    root = tmp_path / "templates"
    (root / "agents").mkdir(parents=True)
    (root / "commands").mkdir()
    (root / "settings.json").write_text(json.dumps(TEMPLATE_SETTINGS, indent=2))
    (root / ".mcp.json").write_text(json.dumps(TEMPLATE_MCP, indent=2))
    (root / "agents" / "reviewer.md").write_text("# reviewer\n")
    (root / "commands" / "commit.md").write_text("# commit\n")
    (root / "commands" / "nested").mkdir()
    (root / "commands" / "nested" / "ignored.md").write_text("# ignored\n")
    yield root


@pytest.fixture
def install_paths(tmp_path, templates_dir):
    """InstallPaths with a fake home and project under tmp_path."""
    project = tmp_path / "project"
    project.mkdir()
    return InstallPaths(
        templates_dir=templates_dir,
        user_claude_dir=tmp_path / "home" / ".claude",
        project_root=project,
        project_claude_dir=project / ".claude",
    )


@pytest.fixture
def toolkit_env(monkeypatch, install_paths):
    """Point the environment-driven path resolution at install_paths."""
    monkeypatch.setenv("HXM_TEMPLATES_DIR", str(install_paths.templates_dir))
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(install_paths.user_claude_dir))
    monkeypatch.setenv("INIT_CWD", str(install_paths.project_root))
    monkeypatch.setenv("HXM_NONINTERACTIVE", "1")
    return install_paths
