"""Unit tests for the exception hierarchy in claude_toolkit.errors."""

import pytest

from claude_toolkit.errors import McpError, SettingsError, TemplateError, ToolkitError


class TestExceptionHierarchy:
    """All concrete exceptions must be subclasses of ToolkitError."""

    @pytest.mark.parametrize("exc_cls", [TemplateError, SettingsError, McpError])
    def test_subclass_of_toolkit_error(self, exc_cls):
        assert issubclass(exc_cls, ToolkitError)

    @pytest.mark.parametrize("exc_cls", [TemplateError, SettingsError, McpError])
    def test_catchable_via_base(self, exc_cls):
        with pytest.raises(ToolkitError):
            raise exc_cls("test")

    def test_toolkit_error_is_exception(self):
        assert issubclass(ToolkitError, Exception)

    @pytest.mark.parametrize("exc_cls", [TemplateError, SettingsError, McpError])
    def test_message_preserved(self, exc_cls):
        err = exc_cls("something went wrong")
        assert str(err) == "something went wrong"


class TestErrorChaining:

    def test_cause_kept(self):
        inner = ValueError("bad json")
        try:
            try:
                raise inner
            except ValueError as exc:
                raise TemplateError("template unreadable") from exc
        except ToolkitError as outer:
            assert outer.__cause__ is inner
