"""lint-emit init command - write a config file selecting linters."""

import shutil
from pathlib import Path

import click
import questionary

from lintemit.cli.utils import ConfigErrorException, find_repo_root, split_names
from lintemit.config.user_config import global_config_path, repo_config_path, write_user_config
from lintemit.core.errors import ConfigError
from lintemit.core.progress import get_console, status
from lintemit.lint.tools import registry


def parse_selection(answer: str) -> list[str]:
    """Turn a comma-separated list of built-in names into validated names.

    Raises:
        ConfigError: An entry is not a built-in linter.
    """
    names: list[str] = []
    for entry in split_names(answer):
        name = registry.require(entry).name
        if name not in names:
            names.append(name)
    return names


def _prompt_for_linters() -> list[str] | None:
    """Ask which built-ins to enable. Returns None when the user cancels."""
    choices = [
        questionary.Choice(
            f"{linter.name} ({', '.join(linter.ext)})",
            value=linter.name,
            checked=shutil.which(linter.cmd) is not None,
        )
        for linter in registry.all()
    ]
    answer: list[str] | None = questionary.checkbox(
        "Linters to enable (found on PATH are preselected)",
        choices=choices,
        style=questionary.Style(
            [
                ("question", "bold"),
                ("highlighted", "fg:cyan bold"),
                ("selected", "fg:green"),
            ]
        ),
    ).ask()
    return answer


def initialize_config(path: Path, linters: list[str], *, force: bool = False) -> bool:
    """Write a config at ``path`` selecting ``linters``, returning True on success.

    An existing file is left alone unless ``force`` is set.
    """
    if path.exists() and not force:
        status(f"Already initialized: {path}", style="info")
        status("Use --force to overwrite", style="info")
        return False

    write_user_config(path, linters)
    status(f"Wrote {path}", style="success")
    if not linters:
        status("No linters selected; lint-emit will report nothing", style="warning", indent=2)
    return True


@click.command()
@click.option(
    "--linters",
    "linter_names",
    default=None,
    help="Comma-separated built-in linters (skips the prompt)",
)
@click.option("--global", "use_global", is_flag=True, help="Write the global config instead")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository to initialize (default: current directory)",
)
def init_command(
    linter_names: str | None, use_global: bool, force: bool, repo_path: Path | None
) -> None:
    """Create a lint-emit config file.

    Writes .lint-emit.yaml at the repository root, or the global config with
    --global. Without --linters, lists the built-in linters and asks which
    to enable.
    """
    path = global_config_path() if use_global else repo_config_path(find_repo_root(repo_path))

    if path.exists() and not force:
        initialize_config(path, [], force=False)
        return

    if linter_names is None:
        selected = _prompt_for_linters()
        if selected is None:
            get_console().print("[dim]Cancelled[/dim]")
            return
        linters = selected
    else:
        try:
            linters = parse_selection(linter_names)
        except ConfigError as e:
            raise ConfigErrorException(e) from e

    initialize_config(path, linters, force=force)
