"""Linter definitions and the registry of built-in linters."""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from lintemit.core.errors import ConfigError

FILE_PLACEHOLDER = "{file}"

REQUIRED_GROUPS = ("line", "message")
OPTIONAL_GROUPS = ("file",)


class LinterConfig(BaseModel):
    """How to run one external linter and read its output.

    ``regex`` must define the named groups ``line`` and ``message`` and may
    define ``file``. It is compiled once, when the config is built; a bad
    pattern raises ConfigError before any file is linted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Unique linter id.")
    cmd: str = Field(min_length=1, description="Executable name or path.")
    args: list[str] = Field(
        default_factory=list,
        description="Argument templates. '{file}' is replaced by the linted file.",
    )
    regex: str = Field(description="Pattern with named groups line, message and optionally file.")
    ext: list[str] = Field(
        default_factory=list,
        description="File extensions (without leading dot) this linter applies to.",
    )

    _pattern: re.Pattern[str] = PrivateAttr()

    @field_validator("ext")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [e.strip().lstrip(".").lower() for e in v if e.strip()]

    @model_validator(mode="after")
    def compile_pattern(self) -> LinterConfig:
        try:
            pattern = re.compile(self.regex)
        except re.error as e:
            raise ConfigError.bad_pattern(self.name, self.regex, str(e)) from e
        for group in REQUIRED_GROUPS:
            if group not in pattern.groupindex:
                raise ConfigError.missing_group(self.name, group)
        self._pattern = pattern
        return self

    @property
    def pattern(self) -> re.Pattern[str]:
        return self._pattern

    @property
    def extensions(self) -> frozenset[str]:
        return frozenset(self.ext)

    @property
    def uses_file_group(self) -> bool:
        return "file" in self._pattern.groupindex

    def applies_to(self, extension: str) -> bool:
        return extension.lstrip(".").lower() in self.extensions


class LinterRegistry:
    """Registry of linters, looked up by name or by file extension."""

    def __init__(self, linters: Iterable[LinterConfig] = ()) -> None:
        self._linters: dict[str, LinterConfig] = {}
        for linter in linters:
            self.register(linter)

    def register(self, linter: LinterConfig) -> None:
        """Register a linter, replacing any previous one with the same name."""
        self._linters[linter.name] = linter

    def get(self, name: str) -> LinterConfig | None:
        return self._linters.get(name)

    def require(self, name: str) -> LinterConfig:
        """Get a linter by name, raising ConfigError if unknown."""
        linter = self._linters.get(name)
        if linter is None:
            raise ConfigError.unknown_linter(name, self.names())
        return linter

    def all(self) -> list[LinterConfig]:
        return list(self._linters.values())

    def names(self) -> list[str]:
        return list(self._linters)

    def for_extension(self, extension: str) -> list[LinterConfig]:
        """Get linters that apply to an extension, in registration order."""
        return [t for t in self._linters.values() if t.applies_to(extension)]

    def select(self, names: Iterable[str]) -> list[LinterConfig]:
        """Resolve ``names`` to linters, preserving the given order."""
        return [self.require(name) for name in names]

    def clear(self) -> None:
        self._linters.clear()

    def __len__(self) -> int:
        return len(self._linters)

    def __contains__(self, name: object) -> bool:
        return name in self._linters


# Built-in linters, populated by lintemit.lint.definitions
registry = LinterRegistry()
