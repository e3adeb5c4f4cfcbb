"""Unit tests for claude_toolkit/tui.py prompt helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from claude_toolkit.tui import Choice, _parse_numbers, tui_checkbox, tui_header


CHOICES = [
    Choice("permissions: {...}", "permissions", checked=True),
    Choice("model: \"opus\" → \"sonnet\"", "model"),
    Choice("env: {...}", "env", checked=True),
]


class TestParseNumbers:

    @pytest.mark.parametrize("raw", ["", "none", "  NONE "])
    def test_empty(self, raw):
        assert _parse_numbers(raw, 3) == []

    def test_all(self):
        assert _parse_numbers("all", 3) == [0, 1, 2]

    def test_mixed_separators_and_duplicates(self):
        assert _parse_numbers("3, 1 3", 3) == [0, 2]

    @pytest.mark.parametrize("raw", ["0", "4", "x", "1,-2"])
    def test_invalid(self, raw):
        assert _parse_numbers(raw, 3) is None


class TestTuiCheckbox:

    def test_no_choices(self):
        assert tui_checkbox("Pick", []) == []

    def test_noninteractive_returns_checked(self, monkeypatch):
        monkeypatch.setenv("HXM_NONINTERACTIVE", "1")
        assert tui_checkbox("Pick", CHOICES) == ["permissions", "env"]

    @patch("claude_toolkit.tui._has_gum", return_value=True)
    @patch("claude_toolkit.tui._run_gum")
    def test_gum_selection(self, mock_gum, mock_has_gum):
        mock_gum.return_value = (True, "env: {...}\nmodel: \"opus\" → \"sonnet\"")

        assert tui_checkbox("Pick", CHOICES) == ["model", "env"]
        args = mock_gum.call_args[0]
        assert args[:4] == ("choose", "--no-limit", "--header", "Pick")
        assert "--selected=permissions: {...}" in args
        assert "--selected=env: {...}" in args

    @patch("claude_toolkit.tui._has_gum", return_value=True)
    @patch("claude_toolkit.tui._run_gum")
    def test_gum_preselects_labels_containing_commas(self, mock_gum, mock_has_gum):
        choices = [
            Choice('statusLine.command: "git log --format=%h,%s"', "statusLine.command", checked=True),
            Choice("model: 1 → 2", "model"),
        ]
        mock_gum.return_value = (True, choices[0].label)

        assert tui_checkbox("Pick", choices) == ["statusLine.command"]
        args = mock_gum.call_args[0]
        assert [a for a in args if a.startswith("--selected")] == [
            '--selected=statusLine.command: "git log --format=%h\\,%s"',
        ]
        assert args[-2:] == (choices[0].label, choices[1].label)

    @patch("claude_toolkit.tui._has_gum", return_value=False)
    @patch("claude_toolkit.tui.click.prompt", return_value="2")
    def test_click_fallback(self, mock_prompt, mock_has_gum, capsys):
        assert tui_checkbox("Pick", CHOICES) == ["model"]
        assert mock_prompt.call_args[1]["default"] == "1,3"
        assert "[x] 1. permissions" in capsys.readouterr().out

    @patch("claude_toolkit.tui._has_gum", return_value=False)
    @patch("claude_toolkit.tui.click.prompt", side_effect=["9", "none"])
    def test_click_fallback_reprompts(self, mock_prompt, mock_has_gum, capsys):
        assert tui_checkbox("Pick", CHOICES) == []
        assert mock_prompt.call_count == 2
        assert "Please enter numbers between 1 and 3" in capsys.readouterr().out


class TestTuiHeader:

    @patch("claude_toolkit.tui._has_gum", return_value=False)
    def test_ascii_fallback(self, mock_has_gum, capsys):
        tui_header("Install")
        assert "│ Install │" in capsys.readouterr().out
