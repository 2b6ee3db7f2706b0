"""Tests for linter definitions and the registry.

Verifies LinterConfig validation, LinterRegistry lookups and the built-ins.
"""

import pytest
from pydantic import ValidationError

from lintemit.core.errors import ConfigError, ErrorCode
from lintemit.lint.tools import LinterConfig, LinterRegistry, registry

GCC = r"(?P<file>[^:]+):(?P<line>\d+):\d+: (?P<message>.+)"


def make_linter(name: str = "demo", **overrides: object) -> LinterConfig:
    fields: dict[str, object] = {
        "name": name,
        "cmd": "demo",
        "args": ["{file}"],
        "regex": GCC,
        "ext": ["py"],
    }
    fields.update(overrides)
    return LinterConfig(**fields)  # type: ignore[arg-type]


class TestLinterConfig:
    """Tests for LinterConfig validation."""

    def test_compiles_pattern_once(self) -> None:
        linter = make_linter()
        assert linter.pattern.pattern == GCC
        assert linter.pattern is linter.pattern
        assert linter.uses_file_group is True

    def test_pattern_without_file_group_is_valid(self) -> None:
        linter = make_linter(regex=r"(?P<line>\d+): (?P<message>.+)")
        assert linter.uses_file_group is False

    @pytest.mark.parametrize("group", ["line", "message"])
    def test_missing_required_group_raises(self, group: str) -> None:
        regex = {
            "line": r"(?P<file>[^:]+):\d+: (?P<message>.+)",
            "message": r"(?P<file>[^:]+):(?P<line>\d+): .+",
        }[group]

        with pytest.raises(ConfigError) as exc_info:
            make_linter(regex=regex)

        assert exc_info.value.code == ErrorCode.CONFIG_MISSING_GROUP
        assert exc_info.value.details == {"linter": "demo", "group": group}

    def test_invalid_regex_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            make_linter(regex=r"(?P<line>\d+")

        assert exc_info.value.code == ErrorCode.CONFIG_BAD_PATTERN
        assert exc_info.value.details["pattern"] == r"(?P<line>\d+"

    def test_extensions_are_normalized(self) -> None:
        linter = make_linter(ext=[".PY", " pyi ", ""])
        assert linter.ext == ["py", "pyi"]
        assert linter.extensions == frozenset({"py", "pyi"})

    @pytest.mark.parametrize(
        ("extension", "expected"),
        [("py", True), (".py", True), ("PY", True), ("rs", False), ("", False)],
    )
    def test_applies_to(self, extension: str, expected: bool) -> None:
        assert make_linter().applies_to(extension) is expected

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_linter(extensions=["py"])

    def test_is_frozen(self) -> None:
        linter = make_linter()
        with pytest.raises(ValidationError):
            linter.name = "other"  # type: ignore[misc]


class TestLinterRegistry:
    """Tests for LinterRegistry."""

    def test_register_and_get(self) -> None:
        reg = LinterRegistry()
        linter = make_linter()
        reg.register(linter)

        assert reg.get("demo") is linter
        assert "demo" in reg
        assert len(reg) == 1
        assert reg.get("missing") is None

    def test_register_replaces_same_name(self) -> None:
        reg = LinterRegistry([make_linter(cmd="old")])
        reg.register(make_linter(cmd="new"))

        assert len(reg) == 1
        assert reg.require("demo").cmd == "new"

    def test_require_unknown_raises(self) -> None:
        reg = LinterRegistry([make_linter("b"), make_linter("a")])

        with pytest.raises(ConfigError) as exc_info:
            reg.require("c")

        assert exc_info.value.code == ErrorCode.CONFIG_UNKNOWN_LINTER
        assert exc_info.value.details["known"] == ["a", "b"]

    def test_for_extension_keeps_registration_order(self) -> None:
        reg = LinterRegistry(
            [
                make_linter("first", ext=["rs"]),
                make_linter("python", ext=["py"]),
                make_linter("second", ext=["rs", "toml"]),
            ]
        )

        assert [t.name for t in reg.for_extension("rs")] == ["first", "second"]
        assert reg.for_extension("go") == []

    def test_select_preserves_given_order(self) -> None:
        reg = LinterRegistry([make_linter("a"), make_linter("b")])
        assert [t.name for t in reg.select(["b", "a"])] == ["b", "a"]

    def test_clear(self) -> None:
        reg = LinterRegistry([make_linter()])
        reg.clear()
        assert len(reg) == 0


class TestBuiltinLinters:
    """The shipped definitions are registered and well-formed."""

    @pytest.mark.parametrize(
        ("name", "extension"),
        [
            ("clippy", "rs"),
            ("eslint", "js"),
            ("phpmd", "php"),
            ("phpcs", "php"),
            ("flake8", "py"),
            ("ruff", "py"),
            ("pylint", "py"),
            ("shellcheck", "sh"),
            ("rubocop", "rb"),
            ("go-vet", "go"),
        ],
    )
    def test_builtin_registered(self, name: str, extension: str) -> None:
        linter = registry.require(name)
        assert linter.applies_to(extension)

    def test_eslint_compact_output(self) -> None:
        line = "/repo/app.js: line 12, col 5, Error - Unexpected var (no-var)"
        match = registry.require("eslint").pattern.search(line)

        assert match is not None
        assert match.group("file") == "/repo/app.js"
        assert match.group("line") == "12"
        assert match.group("message") == "Error - Unexpected var (no-var)"

    def test_phpmd_text_output(self) -> None:
        line = "/repo/src/Foo.php:23\tAvoid unused local variables such as '$x'."
        match = registry.require("phpmd").pattern.search(line)

        assert match is not None
        assert match.group("line") == "23"
        assert match.group("message").startswith("Avoid unused")

    def test_clippy_short_output(self) -> None:
        line = "src/lib.rs:23:9: warning: unused variable: `x`"
        match = registry.require("clippy").pattern.search(line)

        assert match is not None
        assert match.group("file") == "src/lib.rs"
        assert match.group("line") == "23"
        assert match.group("message") == "warning: unused variable: `x`"

    def test_php_linters_share_extension(self) -> None:
        names = [t.name for t in registry.for_extension("php")]
        assert names == ["phpmd", "phpcs"]
