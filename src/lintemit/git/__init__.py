"""Git module - revision-range diffs via pygit2."""

from lintemit.git.errors import (
    GitError,
    InvalidRangeError,
    NoMergeBaseError,
    NotARepositoryError,
    RefNotFoundError,
)
from lintemit.git.ops import GitOps
from lintemit.git.planners import RevisionRange, parse_revision_range

__all__ = [
    "GitError",
    "GitOps",
    "InvalidRangeError",
    "NoMergeBaseError",
    "NotARepositoryError",
    "RefNotFoundError",
    "RevisionRange",
    "parse_revision_range",
]
