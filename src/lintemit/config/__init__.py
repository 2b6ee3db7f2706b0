"""Config module exports."""

from lintemit.config.loader import available_builtin_linters, load_config, resolve_linters
from lintemit.config.models import LintEmitConfig, LoggingConfig, RunConfig
from lintemit.config.user_config import (
    UserConfig,
    global_config_path,
    repo_config_path,
    write_user_config,
)

__all__ = [
    "LintEmitConfig",
    "LoggingConfig",
    "RunConfig",
    "UserConfig",
    "available_builtin_linters",
    "global_config_path",
    "load_config",
    "repo_config_path",
    "resolve_linters",
    "write_user_config",
]
