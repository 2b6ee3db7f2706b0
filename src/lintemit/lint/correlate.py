"""Keep only the candidates that fall on lines the diff added."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from lintemit.diff.models import ChangeSet
from lintemit.lint.models import Candidate, LintMessage

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


def canonicalize(raw: str | Path, base_dir: Path | None = None) -> Path:
    """Resolve a linter-reported path to an absolute, symlink-free path.

    Relative paths are taken relative to ``base_dir`` (the directory the
    linter ran in), or the current directory when it is not given.
    """
    path = Path(raw)
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    return path.resolve()


def correlate(
    linter: str,
    candidate: Candidate,
    change_set: ChangeSet,
    *,
    base_dir: Path | None = None,
    logger: BoundLogger | None = None,
) -> LintMessage | None:
    """Turn ``candidate`` into a LintMessage if it is on an added line.

    The message source is the line text recorded from the diff, never the
    linter's own echo of it.
    """
    file = canonicalize(candidate.file, base_dir)
    target = change_set.path.resolve()
    if file != target:
        if logger is not None:
            logger.debug(
                "candidate_rejected", reason="other_file", file=str(file), line=candidate.line
            )
        return None

    changed = change_set.get(candidate.line)
    if changed is None:
        if logger is not None:
            logger.debug(
                "candidate_rejected", reason="unchanged_line", file=str(file), line=candidate.line
            )
        return None

    return LintMessage(
        linter=linter,
        file=target,
        line=changed.line_number,
        source=changed.source,
        message=candidate.message,
    )


def filter_candidates(
    linter: str,
    candidates: Iterable[Candidate],
    change_set: ChangeSet,
    *,
    base_dir: Path | None = None,
    logger: BoundLogger | None = None,
) -> list[LintMessage]:
    """Correlate every candidate, returning the accepted messages in order."""
    messages: list[LintMessage] = []
    for candidate in candidates:
        message = correlate(linter, candidate, change_set, base_dir=base_dir, logger=logger)
        if message is not None:
            messages.append(message)
    return messages
