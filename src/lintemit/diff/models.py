"""Diff models - the lines a revision range added to a file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ChangedLine:
    """A line added by the diff, numbered as in the post-change file."""

    line_number: int
    source: str


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Added lines for a single file.

    Lines are kept in diff order. Overlapping hunks may repeat a line number;
    lookups return the first occurrence.
    """

    path: Path
    lines: tuple[ChangedLine, ...] = ()
    _by_number: dict[int, ChangedLine] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        for changed in self.lines:
            self._by_number.setdefault(changed.line_number, changed)

    def __contains__(self, line_number: object) -> bool:
        return line_number in self._by_number

    def __len__(self) -> int:
        return len(self.lines)

    def get(self, line_number: int) -> ChangedLine | None:
        return self._by_number.get(line_number)

    @property
    def line_numbers(self) -> frozenset[int]:
        return frozenset(self._by_number)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def extension(self) -> str:
        """Lower-cased suffix without the dot, ``""`` for files without one."""
        return file_extension(self.path)


def file_extension(path: Path) -> str:
    """Return the lower-cased extension of ``path`` without the leading dot."""
    return path.suffix.lstrip(".").lower()
