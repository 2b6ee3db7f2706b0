"""Extract candidate violations from free-form linter output."""

from __future__ import annotations

import re

from lintemit.lint.models import Candidate


def _group(match: re.Match[str], name: str) -> str | None:
    if name not in match.re.groupindex:
        return None
    value = match.group(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def match_output(pattern: re.Pattern[str], output: str, default_file: str) -> list[Candidate]:
    """Find every non-overlapping match of ``pattern`` in ``output``.

    Matches without usable ``line`` or ``message`` content are dropped; they
    are usually banners or summaries that happen to resemble the pattern.
    Matches without a ``file`` group default to ``default_file``.
    """
    candidates: list[Candidate] = []
    for match in pattern.finditer(output):
        raw_line = _group(match, "line")
        message = _group(match, "message")
        if raw_line is None or message is None:
            continue
        if not (raw_line.isascii() and raw_line.isdigit()):
            continue
        line = int(raw_line)
        if line < 1:
            continue
        candidates.append(
            Candidate(
                file=_group(match, "file") or default_file,
                line=line,
                message=message,
            )
        )
    return candidates
