"""Built-in linter definitions - register all supported linters."""

from lintemit.lint.tools import LinterConfig, registry

# Shared shape of "path:line:col: message" reporters
_GCC_STYLE = r"(?P<file>[^\s:][^:\n]*):(?P<line>\d+):\d+: (?P<message>[^\n]+)"

# =============================================================================
# Rust
# =============================================================================

registry.register(
    LinterConfig(
        name="clippy",
        cmd="cargo",
        args=["clippy", "--message-format=short"],
        regex=_GCC_STYLE,
        ext=["rs"],
    )
)

# =============================================================================
# JavaScript
# =============================================================================

registry.register(
    LinterConfig(
        name="eslint",
        cmd="eslint",
        args=["{file}", "-f=compact"],
        regex=r"(?P<file>.*): line (?P<line>\d*), col \d*, (?P<message>.*)",
        ext=["js", "jsx"],
    )
)

# =============================================================================
# PHP
# =============================================================================

registry.register(
    LinterConfig(
        name="phpmd",
        cmd="phpmd",
        args=["{file}", "text", "cleancode,codesize,controversial,design,naming,unusedcode"],
        regex=r"(?P<file>.*):(?P<line>\d*)\t(?P<message>.*)",
        ext=["php"],
    )
)

registry.register(
    LinterConfig(
        name="phpcs",
        cmd="phpcs",
        args=["{file}", "--report=emacs"],
        regex=r"(?P<file>.*):(?P<line>\d*):.*: (?P<message>.*)",
        ext=["php"],
    )
)

# =============================================================================
# Python
# =============================================================================

registry.register(
    LinterConfig(
        name="flake8",
        cmd="flake8",
        args=["{file}"],
        regex=_GCC_STYLE,
        ext=["py"],
    )
)

registry.register(
    LinterConfig(
        name="ruff",
        cmd="ruff",
        args=["check", "--output-format=concise", "--no-cache", "{file}"],
        regex=_GCC_STYLE,
        ext=["py", "pyi"],
    )
)

registry.register(
    LinterConfig(
        name="pylint",
        cmd="pylint",
        args=["--output-format=parseable", "--score=n", "{file}"],
        regex=r"(?P<file>[^\s:][^:\n]*):(?P<line>\d+): (?P<message>\[[^\n]+)",
        ext=["py"],
    )
)

# =============================================================================
# Shell
# =============================================================================

registry.register(
    LinterConfig(
        name="shellcheck",
        cmd="shellcheck",
        args=["--format=gcc", "{file}"],
        regex=_GCC_STYLE,
        ext=["sh", "bash"],
    )
)

# =============================================================================
# Ruby
# =============================================================================

registry.register(
    LinterConfig(
        name="rubocop",
        cmd="rubocop",
        args=["--format", "emacs", "{file}"],
        regex=_GCC_STYLE,
        ext=["rb"],
    )
)

# =============================================================================
# Go
# =============================================================================

registry.register(
    LinterConfig(
        name="go-vet",
        cmd="go",
        args=["vet", "{file}"],
        regex=r"(?P<file>[^\s:]+\.go):(?P<line>\d+):(?:\d+:)? (?P<message>[^\n]+)",
        ext=["go"],
    )
)
