"""Unit tests for claude_toolkit/file_utils.py.

Tests the idempotent provisioning primitives: directory creation, file and
directory copies, namespace copies and .gitignore line appends.
"""

from __future__ import annotations

from claude_toolkit.file_utils import (
    LineUpdate,
    append_missing_lines,
    copy_directory_files,
    copy_file,
    copy_namespace_files,
    ensure_dir,
    missing_lines,
    read_text_exact,
    report_line_update,
)


ENTRIES = [
    "# Ignore Hexium toolkit settings to prevent noise in PRs",
    ".claude/settings.json",
    ".claude/*/hxm/*",
    ".mcp.json",
]


# ============================================================================
# ensure_dir tests
# ============================================================================


class TestEnsureDir:

    def test_creates_missing_ancestors(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_dir(target) is True
        assert target.is_dir()

    def test_existing_directory_is_not_an_error(self, tmp_path):
        assert ensure_dir(tmp_path) is False


# ============================================================================
# copy_file tests
# ============================================================================


class TestCopyFile:

    def test_missing_source_is_noop(self, tmp_path, capsys):
        dest = tmp_path / "dest.json"
        dest.write_text("untouched")

        assert copy_file(tmp_path / "missing.json", dest, "missing.json") is False
        assert dest.read_text() == "untouched"
        assert "Source file not found: missing.json" in capsys.readouterr().err

    def test_reports_created(self, tmp_path, capsys):
        src = tmp_path / "src.bin"
        src.write_bytes(b"\x00\x01data")
        dest = tmp_path / "dest.bin"

        assert copy_file(src, dest, "dest.bin") is True
        assert dest.read_bytes() == b"\x00\x01data"
        assert "Created: dest.bin" in capsys.readouterr().out

    def test_reports_updated_and_overwrites(self, tmp_path, capsys):
        src = tmp_path / "src.txt"
        src.write_text("new")
        dest = tmp_path / "dest.txt"
        dest.write_text("old")

        assert copy_file(src, dest, "dest.txt") is True
        assert dest.read_text() == "new"
        assert "Updated: dest.txt" in capsys.readouterr().out


# ============================================================================
# copy_directory_files tests
# ============================================================================


class TestCopyDirectoryFiles:

    def test_missing_source_dir_is_noop(self, tmp_path):
        dest = tmp_path / "dest"
        assert copy_directory_files(tmp_path / "nope", dest) == []
        assert not dest.exists()

    def test_copies_only_top_level_files(self, tmp_path):
        src = tmp_path / "src"
        (src / "sub").mkdir(parents=True)
        (src / "a.md").write_text("a")
        (src / "b.md").write_text("b")
        (src / "sub" / "c.md").write_text("c")
        dest = tmp_path / "out" / "dest"

        assert copy_directory_files(src, dest) == ["a.md", "b.md"]
        assert sorted(p.name for p in dest.iterdir()) == ["a.md", "b.md"]

    def test_overwrites_existing(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.md").write_text("new")
        dest = tmp_path / "dest"
        dest.mkdir()
        (dest / "a.md").write_text("old")
        (dest / "user.md").write_text("mine")

        copy_directory_files(src, dest)

        assert (dest / "a.md").read_text() == "new"
        assert (dest / "user.md").read_text() == "mine"


# ============================================================================
# copy_namespace_files tests
# ============================================================================


class TestCopyNamespaceFiles:

    def test_copies_into_hxm(self, tmp_path, templates_dir, capsys):
        target = tmp_path / ".claude"

        copied = copy_namespace_files(templates_dir, target, ["agents", "commands"], ".claude")

        assert copied == {"agents": ["reviewer.md"], "commands": ["commit.md"]}
        assert (target / "agents" / "hxm" / "reviewer.md").read_text() == "# reviewer\n"
        assert (target / "commands" / "hxm" / "commit.md").exists()
        assert not (target / "commands" / "hxm" / "nested").exists()
        out = capsys.readouterr().out
        assert ".claude/agents directory created" in out
        assert ".claude/agents/hxm directory created" in out

    def test_missing_template_subdir_still_creates_namespace(self, tmp_path):
        target = tmp_path / ".claude"
        copied = copy_namespace_files(tmp_path / "empty", target, ["agents"], ".claude")
        assert copied == {"agents": []}
        assert (target / "agents" / "hxm").is_dir()

    def test_rerun_reports_no_directory_creation(self, tmp_path, templates_dir, capsys):
        target = tmp_path / ".claude"
        copy_namespace_files(templates_dir, target, ["agents"], ".claude")
        capsys.readouterr()

        copy_namespace_files(templates_dir, target, ["agents"], ".claude")

        assert "directory created" not in capsys.readouterr().out


# ============================================================================
# append_missing_lines tests
# ============================================================================


class TestMissingLines:

    def test_everything_missing_from_empty_content(self):
        assert missing_lines("", ENTRIES) == ENTRIES

    def test_comment_suppressed_when_any_pattern_present(self):
        assert missing_lines("foo\n", ["# header", "foo", "bar"]) == ["bar"]

    def test_substring_match_counts_as_present(self):
        assert missing_lines("/.mcp.json.bak\n", [".mcp.json"]) == []

    def test_comment_kept_when_only_comments(self):
        assert missing_lines("anything", ["# only a comment"]) == ["# only a comment"]


class TestAppendMissingLines:

    def test_creates_absent_file(self, tmp_path):
        path = tmp_path / ".gitignore"

        assert append_missing_lines(path, ENTRIES) is LineUpdate.CREATED
        assert path.read_text() == "\n".join(ENTRIES) + "\n"

    def test_scenario_header_suppressed(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_text("foo\n")

        assert append_missing_lines(path, ["# header", "foo", "bar"]) is LineUpdate.APPENDED
        assert path.read_text() == "foo\nbar\n"

    def test_adds_separator_when_missing_trailing_newline(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_text("node_modules")

        append_missing_lines(path, [".mcp.json"])

        assert path.read_text() == "node_modules\n.mcp.json\n"

    def test_crlf_file_keeps_its_line_endings(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_bytes(b"node_modules\r\ndist\r\n")

        assert append_missing_lines(path, [".mcp.json"]) is LineUpdate.APPENDED
        assert path.read_bytes() == b"node_modules\r\ndist\r\n.mcp.json\r\n"

    def test_crlf_file_without_trailing_newline(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_bytes(b"node_modules\r\ndist")

        append_missing_lines(path, [".mcp.json", "build/"])

        assert path.read_bytes() == b"node_modules\r\ndist\r\n.mcp.json\r\nbuild/\r\n"

    def test_unchanged_file_is_byte_identical(self, tmp_path):
        path = tmp_path / ".gitignore"
        original = "# mine\n.claude/settings.json\n.claude/*/hxm/*\n.mcp.json"
        path.write_text(original)
        before = path.stat().st_mtime_ns

        assert append_missing_lines(path, ENTRIES) is LineUpdate.UNCHANGED
        assert path.read_text() == original
        assert path.stat().st_mtime_ns == before

    def test_idempotent(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_text("dist/\n")

        append_missing_lines(path, ENTRIES)
        first = path.read_text()
        assert append_missing_lines(path, ENTRIES) is LineUpdate.UNCHANGED
        assert path.read_text() == first

    def test_absent_file_with_nothing_to_add_stays_absent(self, tmp_path):
        path = tmp_path / ".gitignore"
        assert append_missing_lines(path, []) is LineUpdate.UNCHANGED
        assert not path.exists()

    def test_read_text_exact_keeps_crlf(self, tmp_path):
        path = tmp_path / ".gitignore"
        path.write_bytes(b"a\r\nb\r\n")
        assert read_text_exact(path) == "a\r\nb\r\n"

    def test_report(self, capsys):
        report_line_update(LineUpdate.UNCHANGED, ".gitignore")
        report_line_update(LineUpdate.APPENDED, ".gitignore")
        out = capsys.readouterr().out
        assert "Already up to date: .gitignore" in out
        assert "Updated: .gitignore" in out
