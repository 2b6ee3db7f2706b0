"""Unified diff hunk parsing.

Turns the patch text of one file into the lines it added, numbered as in the
post-change file. A hunk header ``@@ -a,b +c,d @@`` moves the counter to
``c - 1``; every line that exists after the change (context or added)
advances it, removed lines do not.
"""

from __future__ import annotations

import re
from pathlib import Path

from lintemit.core.errors import DiffParseError
from lintemit.diff.models import ChangedLine, ChangeSet

_HUNK_PREFIX = "@@"
_FILE_HEADER_PREFIX = "diff --git "
_NO_NEWLINE_PREFIX = "\\"
_ADDED = "+"
_REMOVED = "-"

_NEW_START_RE = re.compile(r"\+(\d+)")
# Diff marker plus the whitespace run that follows it
_SANITIZE_RE = re.compile(r"^[-+ ]\s*")


def hunk_new_start(header: str, path: str | None = None) -> int:
    """Return the post-change start line of a hunk header.

    Raises:
        DiffParseError: If the header has no ``+<digits>`` component.
    """
    match = _NEW_START_RE.search(header)
    if match is None:
        raise DiffParseError.bad_hunk_header(header, path)
    return int(match.group(1))


def _diff_lines(diff_text: str) -> list[str]:
    """Split patch text on newlines only.

    Form feeds and other characters that ``str.splitlines`` treats as breaks
    are ordinary source content inside a diff line.
    """
    lines = diff_text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def sanitize_source(line: str) -> str:
    """Strip the diff marker and the whitespace that follows it."""
    return _SANITIZE_RE.sub("", line, count=1)


def parse_changed_lines(diff_text: str, path: str | None = None) -> list[ChangedLine]:
    """Return the added lines of ``diff_text`` in diff order.

    Text with no hunk header (binary, rename-only or mode-only diffs) yields
    an empty list. ``path`` is only used in error details.
    """
    changed: list[ChangedLine] = []
    current_line: int | None = None

    for line in _diff_lines(diff_text):
        if line.startswith(_HUNK_PREFIX):
            current_line = hunk_new_start(line, path) - 1
            continue

        if line.startswith(_FILE_HEADER_PREFIX):
            # Next file's headers; nothing counts until its first hunk
            current_line = None
            continue

        if current_line is None or line.startswith((_REMOVED, _NO_NEWLINE_PREFIX)):
            continue

        current_line += 1
        if line.startswith(_ADDED):
            changed.append(ChangedLine(line_number=current_line, source=sanitize_source(line)))

    return changed


def parse_change_set(path: Path, diff_text: str) -> ChangeSet:
    """Build the ChangeSet for ``path`` from its patch text."""
    lines = parse_changed_lines(diff_text, str(path))
    return ChangeSet(path=path, lines=tuple(lines))
