"""lint-emit error types with typed error codes.

Error code ranges:
- 2xxx: Config (fatal, validated once before any file is processed)
- 3xxx: Invocation (scoped to one file/linter unit)
- 4xxx: Parse (scoped to one file or one file/linter unit)
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_GROUP = 2003
    CONFIG_BAD_PATTERN = 2004
    CONFIG_UNKNOWN_LINTER = 2005

    # Invocation (3xxx)
    INVOCATION_NOT_FOUND = 3001
    INVOCATION_SPAWN_FAILED = 3002
    INVOCATION_TIMEOUT = 3003

    # Parse (4xxx)
    PARSE_BAD_HUNK_HEADER = 4001
    PARSE_INVALID_TEXT = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class LintEmitError(Exception):
    """Base error with structured context for reporting."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(LintEmitError):
    """Configuration-related errors. Abort the run."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def bad_pattern(cls, linter: str, pattern: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_BAD_PATTERN,
            message=f"Linter '{linter}' has an invalid regex: {reason}",
            details={"linter": linter, "pattern": pattern, "reason": reason},
        )

    @classmethod
    def missing_group(cls, linter: str, group: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_GROUP,
            message=f"Linter '{linter}' regex must define the named group '{group}'",
            details={"linter": linter, "group": group},
        )

    @classmethod
    def unknown_linter(cls, name: str, known: list[str]) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_UNKNOWN_LINTER,
            message=f"Unknown linter: {name}. Known linters: {', '.join(sorted(known))}",
            details={"linter": name, "known": sorted(known)},
        )


class InvocationError(LintEmitError):
    """A linter could not be run. Scoped to one file/linter unit."""

    @classmethod
    def not_found(cls, linter: str, executable: str) -> "InvocationError":
        return cls(
            code=ErrorCode.INVOCATION_NOT_FOUND,
            message=f"Executable not found: {executable}",
            details={"linter": linter, "executable": executable},
        )

    @classmethod
    def spawn_failed(cls, linter: str, executable: str, reason: str) -> "InvocationError":
        return cls(
            code=ErrorCode.INVOCATION_SPAWN_FAILED,
            message=f"Failed to run {executable}: {reason}",
            details={"linter": linter, "executable": executable, "reason": reason},
        )


class InvocationTimeoutError(InvocationError):
    """A linter ran past its timeout and was killed."""

    @classmethod
    def expired(cls, linter: str, path: str, timeout_sec: float) -> "InvocationTimeoutError":
        return cls(
            code=ErrorCode.INVOCATION_TIMEOUT,
            message=f"{linter} timed out after {timeout_sec:g}s on {path}",
            details={"linter": linter, "path": path, "timeout_sec": timeout_sec},
        )


class ParseError(LintEmitError):
    """Diff text or tool output could not be interpreted."""


class DiffParseError(ParseError):
    """A hunk header without a readable new-file start line."""

    @classmethod
    def bad_hunk_header(cls, header: str, path: str | None = None) -> "DiffParseError":
        return cls(
            code=ErrorCode.PARSE_BAD_HUNK_HEADER,
            message=f"Cannot read start line from hunk header: {header!r}",
            details={"header": header, "path": path},
        )


class OutputDecodeError(ParseError):
    """Linter output is not valid UTF-8 text."""

    @classmethod
    def invalid_text(cls, linter: str, path: str, reason: str) -> "OutputDecodeError":
        return cls(
            code=ErrorCode.PARSE_INVALID_TEXT,
            message=f"{linter} produced output that is not valid text: {reason}",
            details={"linter": linter, "path": path, "reason": reason},
        )


class InternalError(LintEmitError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
