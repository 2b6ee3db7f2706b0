"""lint-emit linters command - show the linters a check would run."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lintemit.cli.utils import ConfigErrorException, find_repo_root
from lintemit.config.loader import load_config, resolve_linters
from lintemit.core.errors import ConfigError
from lintemit.lint.invoker import resolve_executable


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository whose config to read (default: current directory)",
)
def linters_command(as_json: bool, repo_path: Path | None) -> None:
    """List the linters that `lint-emit check` would run."""
    repo_root = find_repo_root(repo_path)
    try:
        config = load_config(repo_root)
        linters = resolve_linters(config)
    except ConfigError as e:
        raise ConfigErrorException(e) from e

    found = {t.name: resolve_executable(t.cmd, repo_root) is not None for t in linters}
    source = "configured" if config.linters is not None else "built-in, found on PATH"

    if as_json:
        payload = {
            "source": source,
            "linters": [
                {
                    **linter.model_dump(),
                    "available": found[linter.name],
                }
                for linter in linters
            ],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    console = Console()
    if not linters:
        console.print(f"No linters ({source})")
        return

    table = Table(title=f"Linters ({source})", box=None, padding=(0, 2), title_justify="left")
    table.add_column("Linter", style="cyan")
    table.add_column("Command")
    table.add_column("Extensions")
    table.add_column("Found")
    for linter in linters:
        table.add_row(
            linter.name,
            escape(" ".join([linter.cmd, *linter.args])),
            ", ".join(linter.ext),
            "[green]yes[/green]" if found[linter.name] else "[red]no[/red]",
        )
    console.print(table)
