"""Lint operations - fan linters out over changed files and collect results."""

from __future__ import annotations

import asyncio
import os
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from lintemit.core.errors import (
    DiffParseError,
    InvocationError,
    InvocationTimeoutError,
    ParseError,
)
from lintemit.core.logging import bind_unit, get_logger
from lintemit.diff.hunks import parse_change_set
from lintemit.diff.models import ChangeSet
from lintemit.lint.correlate import filter_candidates
from lintemit.lint.invoker import DEFAULT_TIMEOUT_SEC, LinterInvoker, LinterOutput
from lintemit.lint.matcher import match_output
from lintemit.lint.models import ErrorKind, RunResult, UnitResult
from lintemit.lint.tools import LinterConfig

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

UnitCallback = Callable[[UnitResult], None]


class Invoker(Protocol):
    async def invoke(self, linter: LinterConfig, path: Path) -> LinterOutput: ...


def default_max_workers() -> int:
    """Bound concurrent linter processes by the CPU count."""
    return os.cpu_count() or 4


def bucket_by_extension(change_sets: Sequence[ChangeSet]) -> dict[str, list[ChangeSet]]:
    """Group change sets by extension, keeping first-seen order."""
    buckets: dict[str, list[ChangeSet]] = {}
    for change_set in change_sets:
        buckets.setdefault(change_set.extension, []).append(change_set)
    return buckets


class Dispatcher:
    """Runs every applicable linter on every changed file.

    Each (file, linter) pair is an independent unit. A unit that fails is
    recorded as an ``error`` result and never stops the other units.
    """

    def __init__(
        self,
        linters: Sequence[LinterConfig],
        *,
        cwd: Path | None = None,
        max_workers: int | None = None,
        timeout_sec: float | None = DEFAULT_TIMEOUT_SEC,
        invoker: Invoker | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._linters = list(linters)
        self._cwd = cwd
        self._max_workers = max(1, max_workers or default_max_workers())
        self._invoker: Invoker = invoker or LinterInvoker(cwd=cwd, timeout_sec=timeout_sec)
        self._log = logger or get_logger("dispatcher")

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def select(self, extension: str) -> list[LinterConfig]:
        """Linters whose extension list contains ``extension``, in config order."""
        return [t for t in self._linters if t.applies_to(extension)]

    def plan(
        self, change_sets: Sequence[ChangeSet]
    ) -> tuple[list[tuple[ChangeSet, LinterConfig]], list[UnitResult]]:
        """Split the work into runnable units and results known up front.

        Returns:
            (units to run, results for skipped or empty files)
        """
        units: list[tuple[ChangeSet, LinterConfig]] = []
        settled: list[UnitResult] = []

        for extension, bucket in bucket_by_extension(change_sets).items():
            linters = self.select(extension)
            if not linters:
                label = f".{extension}" if extension else "files without extension"
                self._log.info("bucket_skipped", extension=extension, files=len(bucket))
                settled.extend(
                    UnitResult(
                        path=cs.path,
                        linter=None,
                        status="skipped",
                        error_detail=f"No linter configured for {label}",
                    )
                    for cs in bucket
                )
                continue

            for change_set in bucket:
                if change_set.is_empty:
                    settled.append(
                        UnitResult(
                            path=change_set.path,
                            linter=None,
                            status="clean",
                            error_detail="No added lines",
                        )
                    )
                    continue
                units.extend((change_set, linter) for linter in linters)

        return units, settled

    async def run(
        self,
        change_sets: Sequence[ChangeSet],
        *,
        on_unit_done: UnitCallback | None = None,
    ) -> RunResult:
        """Lint ``change_sets`` and aggregate every unit's outcome."""
        start_time = time.time()
        units, settled = self.plan(change_sets)
        self._log.debug(
            "dispatch_start",
            files=len(change_sets),
            units=len(units),
            max_workers=self._max_workers,
        )

        sem = asyncio.Semaphore(self._max_workers)

        async def run_unit(change_set: ChangeSet, linter: LinterConfig) -> UnitResult:
            async with sem:
                result = await self._run_unit(change_set, linter)
            if on_unit_done is not None:
                on_unit_done(result)
            return result

        results = await asyncio.gather(*(run_unit(cs, linter) for cs, linter in units))

        return RunResult(
            units=[*settled, *results],
            duration_seconds=time.time() - start_time,
        )

    async def _run_unit(self, change_set: ChangeSet, linter: LinterConfig) -> UnitResult:
        """Invoke, match and correlate one linter on one file."""
        start_time = time.time()
        log = bind_unit(self._log, linter.name, change_set.path)

        try:
            output = await self._invoker.invoke(linter, change_set.path)
        except InvocationTimeoutError as e:
            return self._failed(change_set, linter, "timeout", e.message, start_time, log)
        except InvocationError as e:
            return self._failed(change_set, linter, "invocation", e.message, start_time, log)
        except ParseError as e:
            return self._failed(change_set, linter, "parse", e.message, start_time, log)
        except OSError as e:
            return self._failed(change_set, linter, "io", str(e), start_time, log)

        log.debug("linter_output", exit_code=output.exit_code, output=output.text)
        candidates = match_output(linter.pattern, output.text, str(change_set.path))
        messages = filter_candidates(
            linter.name, candidates, change_set, base_dir=self._cwd, logger=log
        )
        log.debug("unit_done", candidates=len(candidates), accepted=len(messages))

        return UnitResult(
            path=change_set.path,
            linter=linter.name,
            status="dirty" if messages else "clean",
            messages=messages,
            command=output.command,
            duration_seconds=time.time() - start_time,
        )

    @staticmethod
    def _failed(
        change_set: ChangeSet,
        linter: LinterConfig,
        kind: ErrorKind,
        detail: str,
        start_time: float,
        log: BoundLogger,
    ) -> UnitResult:
        log.warning("unit_failed", kind=kind, error=detail)
        return UnitResult(
            path=change_set.path,
            linter=linter.name,
            status="error",
            error_kind=kind,
            error_detail=detail,
            duration_seconds=time.time() - start_time,
        )


def build_change_sets(
    diffs: dict[Path, str], *, logger: BoundLogger | None = None
) -> tuple[list[ChangeSet], list[UnitResult]]:
    """Parse per-file patch text; files whose diff cannot be read become errors."""
    log = logger or get_logger("dispatcher")
    change_sets: list[ChangeSet] = []
    failures: list[UnitResult] = []
    for path, text in diffs.items():
        try:
            change_sets.append(parse_change_set(path, text))
        except DiffParseError as e:
            log.warning("diff_parse_failed", file=str(path), error=e.message)
            failures.append(
                UnitResult(
                    path=path,
                    linter=None,
                    status="error",
                    error_kind="parse",
                    error_detail=e.message,
                )
            )
    return change_sets, failures


async def lint_revision_range(
    repo_root: Path,
    revision_range: str,
    linters: Sequence[LinterConfig],
    *,
    max_workers: int | None = None,
    timeout_sec: float | None = DEFAULT_TIMEOUT_SEC,
    logger: BoundLogger | None = None,
    on_unit_done: UnitCallback | None = None,
) -> RunResult:
    """Lint the lines added in ``revision_range`` of the repository at ``repo_root``.

    Raises:
        GitError: The repository or a revision in the range cannot be resolved.
    """
    from lintemit.git.ops import GitOps

    start_time = time.time()
    log = logger or get_logger("dispatcher")
    git = GitOps(repo_root)
    diffs = git.file_diffs(revision_range)
    log.debug("changed_files", revision_range=revision_range, files=[str(p) for p in diffs])

    change_sets, failures = build_change_sets(diffs, logger=log)
    dispatcher = Dispatcher(
        linters,
        cwd=git.path,
        max_workers=max_workers,
        timeout_sec=timeout_sec,
        logger=log,
    )
    result = await dispatcher.run(change_sets, on_unit_done=on_unit_done)
    result.units[:0] = failures
    result.duration_seconds = time.time() - start_time
    return result
