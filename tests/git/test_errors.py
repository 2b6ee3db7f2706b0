"""Tests for git error types."""

from pathlib import Path

import pytest

from lintemit.git.errors import (
    GitError,
    InvalidRangeError,
    NoMergeBaseError,
    NotARepositoryError,
    RefNotFoundError,
)


class TestGitErrors:
    @pytest.mark.parametrize(
        "error",
        [
            NotARepositoryError("/tmp/x"),
            RefNotFoundError("main"),
            InvalidRangeError("a..b..c"),
            NoMergeBaseError("main", "orphan"),
        ],
    )
    def test_all_are_git_errors(self, error: GitError) -> None:
        assert isinstance(error, GitError)

    def test_not_a_repository(self) -> None:
        error = NotARepositoryError("/tmp/x")

        assert str(error) == "Cannot lint /tmp/x: not a git repository"
        assert error.path == Path("/tmp/x")
        assert error.bare is False

    def test_bare_repository(self) -> None:
        error = NotARepositoryError(Path("/srv/repo.git"), bare=True)

        assert str(error) == "Cannot lint /srv/repo.git: bare repository has no working tree"
        assert error.bare is True

    def test_ref_not_found_without_range(self) -> None:
        error = RefNotFoundError("main")

        assert str(error) == "Reference not found: main"
        assert error.revision_range is None

    def test_ref_that_is_not_a_commit(self) -> None:
        error = RefNotFoundError("HEAD^{tree}", not_commit=True)

        assert str(error) == "Reference does not point to a commit: HEAD^{tree}"

    def test_bare_ref_range_is_not_repeated(self) -> None:
        assert str(RefNotFoundError("nope", revision_range="nope")) == "Reference not found: nope"

    def test_invalid_range_keeps_text(self) -> None:
        error = InvalidRangeError("a..b..c")

        assert error.revision_range == "a..b..c"
        assert str(error) == "Invalid revision range: a..b..c"

    def test_no_merge_base(self) -> None:
        error = NoMergeBaseError("main", "orphan")

        assert (error.base, error.target) == ("main", "orphan")
        assert error.revision_range == "main...orphan"
