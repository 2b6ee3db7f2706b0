"""CLI utilities."""

from pathlib import Path

import click

from lintemit.core.errors import ConfigError

# Exit statuses of `lint-emit check`
EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_ABORTED = 2  # bad config, not a repository or unresolvable range
EXIT_LINTER_FAILED = 3


class AbortedException(click.ClickException):
    """Stops the command before any linter runs."""

    exit_code = EXIT_ABORTED


class ConfigErrorException(AbortedException):
    """Reports a ConfigError."""

    def __init__(self, error: ConfigError) -> None:
        super().__init__(error.message)
        self.error = error


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree looking for a .git directory.
    If start_path is None, uses the current working directory.

    Raises:
        AbortedException: If not inside a git repository
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate

    raise AbortedException(
        f"Not inside a git repository: {start_path}\n"
        "lint-emit compares revisions, so it must be run from within a git repository."
    )


def split_names(value: str | None) -> list[str]:
    """Split a comma or space separated list of linter names."""
    if not value:
        return []
    return [name for name in value.replace(",", " ").split() if name]
