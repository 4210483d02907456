"""Tests for walking a directory with ancestor pruning."""

from pathlib import PurePosixPath

import pytest

from ignoretree.loader import load_ruleset
from ignoretree.ruleset import compile_lines
from ignoretree.walker import (
    IgnoreReport,
    WalkOptions,
    collect_report,
    find_excluded_parent,
    generate_tree,
    is_path_ignored,
    split_path,
    traverse_directory_dfs,
)


class TestSplitPath:
    def test_clean_segments(self):
        assert split_path("a//b/./c/") == ("a", "b", "c")

    def test_pure_path(self):
        assert split_path(PurePosixPath("a/b")) == ("a", "b")

    def test_parent_reference_rejected(self):
        with pytest.raises(ValueError):
            split_path("../x")


class TestIsPathIgnored:
    def test_excluded_directory_wins_over_negation(self, project):
        ruleset = load_ruleset(project)
        assert is_path_ignored(ruleset, "build/keep.log")
        assert not is_path_ignored(ruleset, "src/keep.log")

    def test_directory_flag(self, project):
        ruleset = load_ruleset(project)
        assert is_path_ignored(ruleset, "build", is_directory=True)
        assert not is_path_ignored(ruleset, "build")

    def test_find_excluded_parent(self):
        ruleset = compile_lines(["build/", "x/**"])
        assert find_excluded_parent(ruleset, ("build", "a", "b")) == ("build",)
        assert find_excluded_parent(ruleset, ("x", "a", "b")) == ("x", "a")
        assert find_excluded_parent(ruleset, ("src", "a")) is None


class TestTraverse:
    def test_dfs_order_and_verdicts(self, project):
        entries = list(traverse_directory_dfs(project, load_ruleset(project)))
        seen = [("/".join(entry.relative), entry.ignored) for entry in entries]
        assert seen == [
            ("build", True),
            ("src", False),
            ("src/debug.log", True),
            ("src/keep.log", False),
            ("src/main.py", False),
            (".gitignore", False),
            ("README.md", False),
        ]

    def test_depth_and_kind(self, project):
        entries = {
            "/".join(entry.relative): entry
            for entry in traverse_directory_dfs(project, load_ruleset(project))
        }
        assert entries["src"].is_dir
        assert entries["src"].depth == 1
        assert not entries["src/main.py"].is_dir
        assert entries["src/main.py"].depth == 2
        assert entries["src/main.py"].path == project / "src" / "main.py"

    def test_descend_ignored_marks_contents(self, project):
        options = WalkOptions(descend_ignored=True)
        entries = list(traverse_directory_dfs(project, load_ruleset(project), options))
        seen = {"/".join(entry.relative): entry.ignored for entry in entries}
        assert seen["build/keep.log"] is True
        assert seen["build/out.o"] is True

    def test_hidden_entries_can_be_skipped(self, project):
        options = WalkOptions(include_hidden=False)
        names = [
            entry.path.name
            for entry in traverse_directory_dfs(project, load_ruleset(project), options)
        ]
        assert ".gitignore" not in names
        assert "README.md" in names

    def test_git_directory_skipped(self, project):
        names = [
            entry.path.name
            for entry in traverse_directory_dfs(project, load_ruleset(project))
        ]
        assert ".git" not in names
        assert "HEAD" not in names

    def test_not_a_directory(self, project):
        with pytest.raises(ValueError):
            list(traverse_directory_dfs(project / "README.md", compile_lines([])))


class TestReport:
    def test_collect_report(self, project):
        report = collect_report(project, load_ruleset(project))
        assert report.total == 7
        assert report.ignored == ["build", "src/debug.log"]

    def test_collect_report_descending(self, project):
        options = WalkOptions(descend_ignored=True)
        report = collect_report(project, load_ruleset(project), options)
        assert report.total == 9
        assert report.ignored == [
            "build",
            "build/keep.log",
            "build/out.o",
            "src/debug.log",
        ]

    def test_empty_report(self):
        report = IgnoreReport()
        assert report.total == 0
        assert report.ignored == []


def test_generate_tree(project):
    lines = generate_tree(project, load_ruleset(project)).splitlines()
    assert lines[0] == project.name
    assert lines[1:] == [
        "├── src",
        "    └── keep.log",
        "    └── main.py",
        "└── .gitignore",
        "└── README.md",
    ]


class TestSymlinks:
    @pytest.fixture
    def looped(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "loop").symlink_to("..", target_is_directory=True)
        return tmp_path

    def test_link_to_parent_is_not_followed(self, looped):
        report = collect_report(looped, compile_lines([]))
        assert report.total == 2

    def test_link_is_not_a_directory(self, looped):
        entries = {
            "/".join(entry.relative): entry
            for entry in traverse_directory_dfs(looped, compile_lines(["loop/"]))
        }
        assert set(entries) == {"a", "a/loop"}
        assert not entries["a/loop"].is_dir
        assert not entries["a/loop"].ignored
