"""Core module exports."""

from lintemit.core.errors import (
    ConfigError,
    DiffParseError,
    ErrorCode,
    InternalError,
    InvocationError,
    InvocationTimeoutError,
    LintEmitError,
    OutputDecodeError,
    ParseError,
)
from lintemit.core.logging import bind_unit, configure_logging, get_logger, level_for_verbosity
from lintemit.core.progress import LintProgress, lint_progress, pluralize, status

__all__ = [
    # Errors
    "ConfigError",
    "DiffParseError",
    "ErrorCode",
    "InternalError",
    "InvocationError",
    "InvocationTimeoutError",
    "LintEmitError",
    "OutputDecodeError",
    "ParseError",
    # Logging
    "bind_unit",
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
    # Progress
    "LintProgress",
    "lint_progress",
    "pluralize",
    "status",
]
