"""Diff planning - separates "what to compare" from "how to compare it"."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

import pygit2

from lintemit.git.errors import InvalidRangeError, NoMergeBaseError, RefNotFoundError

DEFAULT_REF = "HEAD"


class DiffType(Enum):
    """Types of diff operations."""

    REF_TO_WORKING = auto()
    REF_TO_REF = auto()


@dataclass(frozen=True, slots=True)
class RevisionRange:
    """A parsed ``A``, ``A..B`` or ``A...B`` range expression."""

    base: str
    target: str | None = None  # None means the working tree
    merge_base: bool = False

    def __str__(self) -> str:
        if self.target is None:
            return self.base
        return f"{self.base}{'...' if self.merge_base else '..'}{self.target}"


@dataclass(frozen=True, slots=True)
class DiffPlan:
    """Plan for executing a diff operation."""

    diff_type: DiffType
    base_oid: pygit2.Oid
    target_oid: pygit2.Oid | None = None


def parse_revision_range(text: str | None) -> RevisionRange:
    """Parse a revision range the way ``git diff`` reads one.

    ``""`` and ``A`` compare a commit with the working tree, ``A..B`` compares
    two commits and ``A...B`` compares B with the merge base of A and B. An
    empty side defaults to HEAD.
    """
    text = (text or "").strip()
    if not text:
        return RevisionRange(base=DEFAULT_REF)

    if "..." in text:
        base, _, target = text.partition("...")
        merge_base = True
    elif ".." in text:
        base, _, target = text.partition("..")
        merge_base = False
    else:
        return RevisionRange(base=text)

    if ".." in target:
        raise InvalidRangeError(text)
    return RevisionRange(
        base=base or DEFAULT_REF,
        target=target or DEFAULT_REF,
        merge_base=merge_base,
    )


class DiffPlanner:
    """Plans and executes diff operations."""

    def __init__(self, repo: pygit2.Repository) -> None:
        self._repo = repo

    def resolve_commit(self, ref: str, revision_range: str | None = None) -> pygit2.Commit:
        try:
            obj = self._repo.revparse_single(ref)
        except (KeyError, ValueError, pygit2.GitError) as e:
            raise RefNotFoundError(ref, revision_range=revision_range) from e
        try:
            return obj.peel(pygit2.Commit)  # type: ignore[no-any-return]
        except (ValueError, pygit2.GitError) as e:
            raise RefNotFoundError(ref, revision_range=revision_range, not_commit=True) from e

    def plan(self, revision_range: RevisionRange) -> DiffPlan:
        """Resolve refs upfront so bad ranges fail before any diff runs."""
        text = str(revision_range)
        base_oid = self.resolve_commit(revision_range.base, text).id
        if revision_range.target is None:
            return DiffPlan(DiffType.REF_TO_WORKING, base_oid=base_oid)

        target_oid = self.resolve_commit(revision_range.target, text).id
        if revision_range.merge_base:
            merge_base = self._repo.merge_base(base_oid, target_oid)
            if merge_base is None:
                raise NoMergeBaseError(revision_range.base, revision_range.target)
            base_oid = merge_base
        return DiffPlan(DiffType.REF_TO_REF, base_oid=base_oid, target_oid=target_oid)

    def execute(self, plan: DiffPlan) -> pygit2.Diff:
        """Execute a diff plan. All validation done at plan time."""
        base_tree = self._repo.get(plan.base_oid).peel(pygit2.Tree)

        if plan.diff_type == DiffType.REF_TO_WORKING:
            # Staged and unstaged changes together, like `git diff <commit>`
            index = self._repo.index
            diff = base_tree.diff_to_index(index)
            diff.merge(index.diff_to_workdir())
        else:
            target_tree = self._repo.get(plan.target_oid).peel(pygit2.Tree)
            diff = base_tree.diff_to_tree(target_tree)

        diff.find_similar()
        return diff
