"""Run one linter against one file and capture its text output."""

from __future__ import annotations

import asyncio
import contextlib
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path

from lintemit.core.errors import InvocationError, InvocationTimeoutError, OutputDecodeError
from lintemit.lint.tools import FILE_PLACEHOLDER, LinterConfig

DEFAULT_TIMEOUT_SEC = 120.0


@dataclass(frozen=True, slots=True)
class LinterOutput:
    """Captured output of a finished linter process."""

    command: list[str]
    text: str
    exit_code: int | None
    duration_seconds: float = 0.0


def build_command(linter: LinterConfig, path: Path | str) -> list[str]:
    """Build the argv for ``linter``, substituting ``{file}`` in every argument."""
    file_arg = str(path)
    return [linter.cmd, *(arg.replace(FILE_PLACEHOLDER, file_arg) for arg in linter.args)]


def resolve_executable(cmd: str, cwd: Path | None = None) -> str | None:
    """Locate ``cmd`` the way the spawned process will see it.

    Bare names are searched on PATH. Relative paths such as
    ``vendor/bin/phpcs`` are taken relative to ``cwd``, the directory the
    linter runs in, rather than the directory lint-emit was started from.
    """
    separators = [s for s in (os.sep, os.altsep) if s]
    if cwd is not None and any(s in cmd for s in separators) and not Path(cmd).is_absolute():
        cmd = str(cwd / cmd)
    return shutil.which(cmd)


def select_output(stdout: bytes, stderr: bytes) -> bytes:
    """Prefer stdout; linters that only write to stderr get stderr."""
    return stdout if stdout else stderr


class LinterInvoker:
    """Runs linter subprocesses.

    The exit status never decides whether output is read: most linters exit
    non-zero exactly when they report something.
    """

    def __init__(
        self,
        *,
        cwd: Path | None = None,
        timeout_sec: float | None = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self._cwd = cwd
        self._timeout_sec = timeout_sec or None

    async def invoke(self, linter: LinterConfig, path: Path) -> LinterOutput:
        """Run ``linter`` on ``path`` and return its decoded output.

        Raises:
            InvocationError: The executable is missing or could not be started.
            InvocationTimeoutError: The process outlived the timeout and was killed.
            OutputDecodeError: The selected stream is not valid UTF-8.
        """
        start_time = time.time()
        cmd = build_command(linter, path)

        executable = resolve_executable(linter.cmd, self._cwd)
        if executable is None:
            raise InvocationError.not_found(linter.name, linter.cmd)

        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                *cmd[1:],
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
            )
        except OSError as e:
            raise InvocationError.spawn_failed(linter.name, linter.cmd, str(e)) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout_sec
            )
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise InvocationTimeoutError.expired(
                linter.name, str(path), self._timeout_sec or 0.0
            ) from None

        raw = select_output(stdout_bytes, stderr_bytes)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise OutputDecodeError.invalid_text(linter.name, str(path), str(e)) from e

        return LinterOutput(
            command=cmd,
            text=text,
            exit_code=proc.returncode,
            duration_seconds=time.time() - start_time,
        )
