"""Lint models - candidates, accepted messages and run results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

UnitStatus = Literal["clean", "dirty", "skipped", "error"]
ErrorKind = Literal["invocation", "timeout", "parse", "io"]


@dataclass(frozen=True, slots=True)
class Candidate:
    """A violation read from linter output, not yet checked against the diff."""

    file: str
    line: int
    message: str


@dataclass(frozen=True, slots=True)
class LintMessage:
    """A violation on a line the revision range added."""

    linter: str
    file: Path
    line: int
    source: str  # text of the changed line, from the diff
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "linter": self.linter,
            "file": str(self.file),
            "line": self.line,
            "source": self.source,
            "message": self.message,
        }


@dataclass
class UnitResult:
    """Outcome of one (file, linter) unit of work.

    ``linter`` is None for outcomes that concern the file alone, such as a
    diff that could not be parsed or an extension with no linter.
    """

    path: Path
    linter: str | None
    status: UnitStatus
    messages: list[LintMessage] = field(default_factory=list)
    error_detail: str | None = None  # reason for "skipped" or "error"
    error_kind: ErrorKind | None = None  # If status=="error"
    command: list[str] | None = None  # Command that was run
    duration_seconds: float = 0.0

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()


@dataclass
class RunResult:
    """Aggregated result of linting a set of changed files."""

    units: list[UnitResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def messages(self) -> list[LintMessage]:
        return [m for u in self.units for m in u.messages]

    @property
    def total_messages(self) -> int:
        return sum(len(u.messages) for u in self.units)

    @property
    def skipped(self) -> list[UnitResult]:
        return [u for u in self.units if u.status == "skipped"]

    @property
    def failed(self) -> list[UnitResult]:
        return [u for u in self.units if u.status == "error"]

    @property
    def clean(self) -> list[UnitResult]:
        return [u for u in self.units if u.status == "clean"]

    @property
    def skipped_extensions(self) -> list[str]:
        """Extensions no configured linter applies to, sorted."""
        return sorted({u.extension for u in self.skipped if u.linter is None})

    @property
    def files(self) -> list[Path]:
        return sorted({u.path for u in self.units})

    @property
    def status(self) -> Literal["clean", "dirty", "error"]:
        if any(u.status == "dirty" for u in self.units):
            return "dirty"
        if any(u.status == "error" for u in self.units):
            return "error"
        return "clean"
