"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (LINTEMIT__SECTION__KEY)
3. Repo YAML (.lint-emit.yaml)
4. Global YAML ($XDG_CONFIG_HOME/lint-emit/config.yaml)
5. Built-in defaults (this file)

Examples:
    LINTEMIT__LOGGING__LEVEL=DEBUG
    LINTEMIT__RUN__TIMEOUT_SEC=30
    LINTEMIT__RUN__MAX_WORKERS=2
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from lintemit.lint.tools import LinterConfig, registry

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LINTEMIT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="ERROR",
        description="Root log level. The CLI's -v flags raise it.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class RunConfig(BaseModel):
    """Linter execution configuration.

    Env vars:
        LINTEMIT__RUN__MAX_WORKERS: Concurrent linter processes (default: CPU count)
        LINTEMIT__RUN__TIMEOUT_SEC: Per-invocation timeout, 0 disables
    """

    max_workers: int | None = Field(
        default=None,
        description="Concurrent linter processes. Defaults to the CPU count.",
    )
    timeout_sec: float = Field(
        default=120.0,
        description="Kill a linter that runs longer than this on one file. 0 disables.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"timeout_sec must be >= 0, got {v}")
        return v


class LintEmitConfig(BaseModel):
    """Root configuration for lint-emit.

    ``linters`` is None when nothing was configured; callers then fall back
    to the built-in linters available on PATH.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    linters: list[LinterConfig] | None = None

    @field_validator("linters", mode="before")
    @classmethod
    def resolve_builtin_names(cls, v: Any) -> Any:
        # Bare names refer to built-in definitions; unknown names raise ConfigError
        if not isinstance(v, list):
            return v
        return [registry.require(item) if isinstance(item, str) else item for item in v]

    @model_validator(mode="after")
    def unique_linter_names(self) -> "LintEmitConfig":
        seen: set[str] = set()
        for linter in self.linters or ():
            if linter.name in seen:
                raise ValueError(f"Duplicate linter name: {linter.name}")
            seen.add(linter.name)
        return self

    def linter(self, name: str) -> LinterConfig | None:
        for linter in self.linters or ():
            if linter.name == name:
                return linter
        return None
