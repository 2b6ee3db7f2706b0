"""Tests for GitOps revision-range diffs."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pygit2
import pytest

from lintemit.diff import parse_change_set
from lintemit.git import GitOps, NotARepositoryError, RefNotFoundError

Commit = Callable[[str], pygit2.Oid]

TWENTY_LINES = "".join(f"line {i}\n" for i in range(1, 21))


class TestGitOpsInit:
    def test_init_valid_repo(self, temp_repo: pygit2.Repository, repo_root: Path) -> None:
        ops = GitOps(temp_repo.workdir)
        assert ops.path == repo_root
        assert isinstance(ops.repo, pygit2.Repository)

    def test_init_from_subdirectory(self, repo_root: Path) -> None:
        sub = repo_root / "pkg"
        sub.mkdir()
        assert GitOps(sub).path == repo_root

    def test_init_not_a_repo(self, tmp_path: Path) -> None:
        outside = tmp_path / "plain"
        outside.mkdir()
        with pytest.raises(NotARepositoryError):
            GitOps(outside)


class TestFileDiffs:
    def test_working_tree_changes_against_head(self, repo_root: Path, commit: Commit) -> None:
        (repo_root / "app.py").write_text(TWENTY_LINES)
        commit("Add app")
        lines = TWENTY_LINES.splitlines(keepends=True)
        lines.insert(10, "inserted = True\n")
        (repo_root / "app.py").write_text("".join(lines))

        diffs = GitOps(repo_root).file_diffs("HEAD")

        path = (repo_root / "app.py").resolve()
        assert list(diffs) == [path]
        change_set = parse_change_set(path, diffs[path])
        assert change_set.line_numbers == frozenset({11})
        assert change_set.get(11).source == "inserted = True"  # type: ignore[union-attr]

    def test_staged_and_unstaged_changes_are_combined(
        self, repo_root: Path, temp_repo: pygit2.Repository
    ) -> None:
        (repo_root / "staged.py").write_text("a = 1\n")
        temp_repo.index.add("staged.py")
        temp_repo.index.write()
        (repo_root / "README.md").write_text("# Test Repo\nmore\n")

        changed = GitOps(repo_root).changed_files()

        assert sorted(p.name for p in changed) == ["README.md", "staged.py"]

    def test_untracked_files_are_not_included(self, repo_root: Path) -> None:
        (repo_root / "scratch.py").write_text("x = 1\n")

        assert GitOps(repo_root).changed_files("HEAD") == []

    def test_commit_range(self, repo_root: Path, commit: Commit) -> None:
        (repo_root / "one.py").write_text("one = 1\n")
        commit("one")
        (repo_root / "two.py").write_text("two = 2\n")
        commit("two")

        ops = GitOps(repo_root)

        assert [p.name for p in ops.changed_files("HEAD~1..HEAD")] == ["two.py"]
        assert sorted(p.name for p in ops.changed_files("HEAD~2..HEAD")) == ["one.py", "two.py"]

    def test_deleted_files_are_excluded(
        self, temp_repo: pygit2.Repository, repo_root: Path, commit: Commit
    ) -> None:
        (repo_root / "gone.py").write_text("x = 1\n")
        commit("add gone")
        (repo_root / "gone.py").unlink()
        temp_repo.index.remove("gone.py")
        (repo_root / "kept.py").write_text("y = 2\n")
        commit("delete gone, add kept")

        assert [p.name for p in GitOps(repo_root).changed_files("HEAD~1..HEAD")] == ["kept.py"]

    def test_renamed_and_edited_file_is_listed_under_new_path(
        self, temp_repo: pygit2.Repository, repo_root: Path, commit: Commit
    ) -> None:
        """Given a rename with one extra line, then only that line counts as added."""
        # Given
        (repo_root / "old_name.py").write_text(TWENTY_LINES)
        commit("add old_name")
        (repo_root / "old_name.py").unlink()
        temp_repo.index.remove("old_name.py")
        (repo_root / "new_name.py").write_text(TWENTY_LINES + "extra = True\n")
        commit("rename and edit")

        # When
        diffs = GitOps(repo_root).file_diffs("HEAD~1..HEAD")

        # Then
        path = (repo_root / "new_name.py").resolve()
        assert list(diffs) == [path]
        assert parse_change_set(path, diffs[path]).line_numbers == frozenset({21})

    def test_merge_base_range(
        self, temp_repo: pygit2.Repository, repo_root: Path, commit: Commit
    ) -> None:
        temp_repo.branches.local.create("feature", temp_repo.head.peel(pygit2.Commit))
        (repo_root / "main_only.py").write_text("m = 1\n")
        commit("on main")

        ops = GitOps(repo_root)

        # main...feature: feature has nothing new since the merge base
        assert ops.changed_files("main...feature") == []
        assert [p.name for p in ops.changed_files("feature...main")] == ["main_only.py"]

    def test_file_diff_for_untouched_file_is_empty(self, repo_root: Path) -> None:
        assert GitOps(repo_root).file_diff("HEAD", "README.md") == ""

    def test_file_diff_relative_path(self, repo_root: Path) -> None:
        (repo_root / "README.md").write_text("# Test Repo\nadded\n")

        text = GitOps(repo_root).file_diff("HEAD", "README.md")

        assert "+added" in text

    def test_unknown_ref_raises(self, repo_root: Path) -> None:
        with pytest.raises(RefNotFoundError):
            GitOps(repo_root).file_diffs("nope..HEAD")
