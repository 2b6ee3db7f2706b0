"""Structured logging for lint-emit.

Log records go through structlog into stdlib handlers, one per configured
output. Console handlers go quiet while a spinner is live; file handlers
keep everything. Paths under the repository root are logged relative to it
so unit events stay short.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from lintemit.config.models import LoggingConfig

# -v count -> level name; anything above the last entry is DEBUG
_VERBOSITY_LEVELS = ("ERROR", "WARNING", "INFO", "DEBUG")

# Event keys that carry file paths
_PATH_KEYS = ("file", "path", "repo")


def level_for_verbosity(verbosity: int) -> str:
    """Map a ``-v`` occurrence count to a level name."""
    if verbosity < 0:
        return _VERBOSITY_LEVELS[0]
    return _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)]


def _level_number(name: str, default: int = logging.ERROR) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), default)


class ConsoleSuppressingFilter(logging.Filter):
    """Block console log records while a spinner is active."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from lintemit.core.progress import is_console_suppressed

        return not is_console_suppressed()


class RelativePathProcessor:
    """Rewrite path-valued event keys under ``root`` as root-relative strings."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def __call__(
        self, _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        for key in _PATH_KEYS:
            value = event_dict.get(key)
            if value is None:
                continue
            try:
                event_dict[key] = Path(value).relative_to(self.root).as_posix() or "."
            except (TypeError, ValueError):
                pass
        return event_dict


def _formatter(
    output_format: str, *, colors: bool, pre_chain: list[structlog.types.Processor]
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    level: str = "ERROR",
    json_format: bool = False,
    project_root: Path | None = None,
) -> None:
    """Install structlog and the stdlib handlers it renders through.

    Args:
        config: Logging section of the loaded config. When omitted, a single
            stderr output at ``level`` is used.
        level: Level for the default output.
        json_format: Render the default output as JSON lines.
        project_root: Repository root used to shorten logged paths.
    """
    from lintemit.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level.upper(),  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    default_level = _level_number(config.level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]
    if project_root is not None:
        processors.append(RelativePathProcessor(project_root))

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Each check reconfigures once the repo config is known
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(default_level)

    for output in config.outputs:
        is_console = output.destination in ("stderr", "stdout")
        handler = _create_handler(output.destination, is_console=is_console)
        handler.setLevel(_level_number(output.level or config.level, default_level))
        handler.setFormatter(
            _formatter(
                output.format,
                colors=is_console and sys.stderr.isatty(),
                pre_chain=processors,
            )
        )
        root_logger.addHandler(handler)


def _create_handler(destination: str, *, is_console: bool) -> logging.Handler:
    """Create a handler for stderr, stdout or a file path."""
    handler: logging.Handler
    if destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")

    if is_console:
        handler.addFilter(ConsoleSuppressingFilter())

    return handler


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]


def bind_unit(
    logger: structlog.stdlib.BoundLogger, linter: str, path: Path
) -> structlog.stdlib.BoundLogger:
    """Logger carrying the (linter, file) pair of one unit of work."""
    return logger.bind(linter=linter, file=str(path))
