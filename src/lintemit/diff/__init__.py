"""Diff module - added-line extraction from unified diffs."""

from lintemit.diff.hunks import (
    hunk_new_start,
    parse_change_set,
    parse_changed_lines,
    sanitize_source,
)
from lintemit.diff.models import ChangedLine, ChangeSet, file_extension

__all__ = [
    "ChangeSet",
    "ChangedLine",
    "file_extension",
    "hunk_new_start",
    "parse_change_set",
    "parse_changed_lines",
    "sanitize_source",
]
