"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (LINTEMIT__SECTION__KEY)
3. Repo config (.lint-emit.yaml)
4. Global config ($XDG_CONFIG_HOME/lint-emit/config.yaml)
5. Built-in defaults (lowest priority)
"""

import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from lintemit.config.models import LintEmitConfig, LoggingConfig, RunConfig
from lintemit.config.user_config import (
    UserConfig,
    global_config_path,
    repo_config_path,
    user_config_to_settings,
)
from lintemit.core.errors import ConfigError
from lintemit.lint.tools import LinterConfig, registry


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _load_user_config(path: Path) -> dict[str, Any]:
    """Read one config file and map it onto the internal structure."""
    data = _load_yaml(path)
    if not data:
        return {}
    try:
        user_config = UserConfig(**data)
    except ValidationError as e:
        raise _config_error(e) from e
    return user_config_to_settings(user_config)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _config_error(error: ValidationError) -> ConfigError:
    err = error.errors()[0]
    field = ".".join(str(loc) for loc in err["loc"])
    return ConfigError.invalid_value(field, err.get("input"), err["msg"])


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class LintEmitSettings(BaseSettings):
        """Root config. Env vars: LINTEMIT__LOGGING__LEVEL, LINTEMIT__RUN__TIMEOUT_SEC, etc."""

        model_config = SettingsConfigDict(
            env_prefix="LINTEMIT__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        run: RunConfig = RunConfig()
        # Names or definitions; resolved by LintEmitConfig
        linters: list[Any] | None = None

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return LintEmitSettings


def load_config(
    repo_root: Path | None = None,
    *,
    global_path: Path | None = None,
    **kwargs: Any,
) -> LintEmitConfig:
    """Load config: defaults < global YAML < repo YAML < env vars < kwargs.

    Args:
        repo_root: Repository root holding ``.lint-emit.yaml``.
                   Defaults to current working directory.
        global_path: Override the global config location.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML, invalid values, unknown linter names or
            linter patterns that do not compile or lack required groups.
    """
    repo_root = repo_root or Path.cwd()

    global_config = _load_user_config(global_path or global_config_path())
    repo_config = _load_user_config(repo_config_path(repo_root))
    yaml_config = _deep_merge(global_config, repo_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
        return LintEmitConfig(
            logging=settings.logging,  # type: ignore[attr-defined]
            run=settings.run,  # type: ignore[attr-defined]
            linters=settings.linters,  # type: ignore[attr-defined]
        )
    except ValidationError as e:
        raise _config_error(e) from e


def available_builtin_linters() -> list[LinterConfig]:
    """Built-in linters whose executable is on PATH."""
    return [t for t in registry.all() if shutil.which(t.cmd) is not None]


def resolve_linters(
    config: LintEmitConfig, names: Sequence[str] | None = None
) -> list[LinterConfig]:
    """Pick the linters for a run.

    Without ``names`` this is the configured list, or every built-in linter
    found on PATH when nothing is configured. With ``names`` each name is
    looked up in the configured list first, then among the built-ins.

    Raises:
        ConfigError: A name matches neither a configured nor a built-in linter.
    """
    configured = config.linters if config.linters is not None else available_builtin_linters()
    if not names:
        return list(configured)

    by_name = {t.name: t for t in configured}
    selected: list[LinterConfig] = []
    for name in names:
        linter = by_name.get(name) or registry.get(name)
        if linter is None:
            raise ConfigError.unknown_linter(name, sorted({*by_name, *registry.names()}))
        selected.append(linter)
    return selected
