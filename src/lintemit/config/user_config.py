"""User-facing configuration files.

The repo config lives in ``.lint-emit.yaml`` at the repository root; the
global config in ``$XDG_CONFIG_HOME/lint-emit/config.yaml``. Both hold the
same fields. ``linters`` entries are either names of built-in linters or
full definitions::

    linters:
      - ruff
      - name: mylint
        cmd: mylint
        args: ["--plain", "{file}"]
        regex: '(?P<file>[^:]+):(?P<line>\\d+): (?P<message>.*)'
        ext: [py]
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from lintemit.config.models import LogLevel

REPO_CONFIG_NAME = ".lint-emit.yaml"
APP_DIR_NAME = "lint-emit"

LinterEntry = str | dict[str, Any]


class UserConfig(BaseModel):
    """Options a user may set in a config file."""

    linters: list[LinterEntry] | None = Field(
        default=None,
        description="Linters to run. Omit to use every built-in linter found on PATH.",
    )
    log_level: LogLevel | None = Field(default=None, description="Log level.")
    max_workers: int | None = Field(default=None, description="Concurrent linter processes.")
    timeout_sec: float | None = Field(default=None, description="Per-invocation timeout.")


def global_config_path() -> Path:
    """Global config location, honouring ``XDG_CONFIG_HOME``."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base).expanduser() / APP_DIR_NAME / "config.yaml"


def repo_config_path(repo_root: Path) -> Path:
    return repo_root / REPO_CONFIG_NAME


def write_user_config(path: Path, linters: list[str], *, log_level: LogLevel | None = None) -> None:
    """Write a config file selecting ``linters`` by name, with helpful comments."""
    lines = [
        "# lint-emit configuration",
        "#",
        "# Linters run on files whose extension they list. Entries are built-in",
        "# names or full definitions with name, cmd, args, regex and ext.",
        "",
    ]
    if linters:
        lines.append(yaml.safe_dump({"linters": linters}, default_flow_style=False).rstrip())
    else:
        lines.append("linters: []")
    lines.append("")

    lines.append("# Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL")
    if log_level is not None:
        lines.append(f"log_level: {log_level}")
    else:
        lines.append("# log_level: ERROR")
    lines.append("")

    lines.append("# Concurrent linter processes (default: CPU count)")
    lines.append("# max_workers: 4")
    lines.append("")
    lines.append("# Kill a linter that runs longer than this on one file (0 disables)")
    lines.append("# timeout_sec: 120")
    lines.append("")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines))


def user_config_to_settings(user_config: UserConfig) -> dict[str, Any]:
    """Map user config fields onto the internal config structure."""
    data: dict[str, Any] = {}
    if user_config.log_level is not None:
        data["logging"] = {"level": user_config.log_level}
    run: dict[str, Any] = {}
    if user_config.max_workers is not None:
        run["max_workers"] = user_config.max_workers
    if user_config.timeout_sec is not None:
        run["timeout_sec"] = user_config.timeout_sec
    if run:
        data["run"] = run
    if user_config.linters is not None:
        data["linters"] = list(user_config.linters)
    return data
