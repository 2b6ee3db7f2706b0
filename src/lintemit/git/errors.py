"""Errors raised while turning a revision range into per-file diffs.

All of them abort a check before any linter runs (exit status 2).
"""

from pathlib import Path


class GitError(Exception):
    """The repository or revision range cannot be diffed."""

    def __init__(self, message: str, *, revision_range: str | None = None) -> None:
        super().__init__(message)
        self.revision_range = revision_range


class NotARepositoryError(GitError):
    """No working tree to lint at ``path``."""

    def __init__(self, path: Path | str, *, bare: bool = False) -> None:
        reason = "bare repository has no working tree" if bare else "not a git repository"
        super().__init__(f"Cannot lint {path}: {reason}")
        self.path = Path(path)
        self.bare = bare


class RefNotFoundError(GitError):
    """One side of the revision range does not name a commit."""

    def __init__(
        self, ref: str, *, revision_range: str | None = None, not_commit: bool = False
    ) -> None:
        if not_commit:
            message = f"Reference does not point to a commit: {ref}"
        else:
            message = f"Reference not found: {ref}"
        if revision_range is not None and revision_range != ref:
            message += f" (in {revision_range})"
        super().__init__(message, revision_range=revision_range)
        self.ref = ref


class InvalidRangeError(GitError):
    """Revision range is not of the form ``A``, ``A..B`` or ``A...B``."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid revision range: {text}", revision_range=text)


class NoMergeBaseError(GitError):
    """``A...B`` was asked for but the two sides share no history."""

    def __init__(self, base: str, target: str) -> None:
        super().__init__(
            f"No merge base between {base} and {target}",
            revision_range=f"{base}...{target}",
        )
        self.base = base
        self.target = target
