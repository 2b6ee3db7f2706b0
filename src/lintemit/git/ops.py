"""Git operations via pygit2 - changed files and per-file patches for a range."""

from __future__ import annotations

from pathlib import Path

import pygit2

from lintemit.git.errors import NotARepositoryError
from lintemit.git.planners import DiffPlanner, RevisionRange, parse_revision_range

# `git diff --diff-filter=ACMR`: files that exist after the change, keyed by new path
_LINTABLE_DELTAS = frozenset(
    {
        pygit2.GIT_DELTA_ADDED,
        pygit2.GIT_DELTA_COPIED,
        pygit2.GIT_DELTA_MODIFIED,
        pygit2.GIT_DELTA_RENAMED,
    }
)


class GitOps:
    """Thin wrapper around pygit2.Repository for revision-range diffs."""

    def __init__(self, repo_path: Path | str) -> None:
        start = Path(repo_path)
        discovered = pygit2.discover_repository(str(start))
        if discovered is None:
            raise NotARepositoryError(start)
        try:
            self._repo = pygit2.Repository(discovered)
        except pygit2.GitError as e:
            raise NotARepositoryError(start) from e
        if self._repo.workdir is None:
            raise NotARepositoryError(start, bare=True)
        self._planner = DiffPlanner(self._repo)

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        """Working tree root, resolved."""
        return Path(self._repo.workdir).resolve()

    def diff(self, revision_range: str | RevisionRange | None = None) -> pygit2.Diff:
        """Generate the diff for a revision range (default: HEAD vs working tree)."""
        if not isinstance(revision_range, RevisionRange):
            revision_range = parse_revision_range(revision_range)
        plan = self._planner.plan(revision_range)
        return self._planner.execute(plan)

    def file_diffs(self, revision_range: str | RevisionRange | None = None) -> dict[Path, str]:
        """Unified-diff text per changed file, keyed by canonical path.

        Only added, copied, modified and renamed files that still exist on
        disk are included. Renamed files appear under their new path.
        """
        root = self.path
        diffs: dict[Path, str] = {}
        for patch in self.diff(revision_range):
            delta = patch.delta
            if delta.status not in _LINTABLE_DELTAS or not delta.new_file.path:
                continue
            path = (root / delta.new_file.path).resolve()
            if not path.is_file():
                continue
            diffs[path] = patch.data.decode("utf-8", errors="replace")
        return diffs

    def changed_files(self, revision_range: str | RevisionRange | None = None) -> list[Path]:
        """Canonical paths of files added, copied, modified or renamed in the range."""
        return list(self.file_diffs(revision_range))

    def file_diff(self, revision_range: str | RevisionRange | None, path: Path | str) -> str:
        """Unified-diff text for one file, ``""`` when the range does not touch it."""
        target = Path(path)
        if not target.is_absolute():
            target = self.path / target
        return self.file_diffs(revision_range).get(target.resolve(), "")
