"""lint-emit CLI."""

import importlib.metadata

import click

from lintemit.cli.check import check_command
from lintemit.cli.init import init_command
from lintemit.cli.linters import linters_command
from lintemit.core.logging import configure_logging, level_for_verbosity


def _get_version() -> str:
    """Get package version from installed metadata."""
    try:
        return importlib.metadata.version("lint-emit")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


@click.group()
@click.version_option(version=_get_version(), prog_name="lint-emit")
@click.option(
    "-v",
    "--verbose",
    "verbosity",
    count=True,
    help="Increase log verbosity (-v warnings, -vv info, -vvv debug)",
)
@click.pass_context
def cli(ctx: click.Context, verbosity: int) -> None:
    """lint-emit - report linter violations on lines added in a revision range."""
    ctx.ensure_object(dict)
    ctx.obj["verbosity"] = verbosity
    configure_logging(level=level_for_verbosity(verbosity))


cli.add_command(check_command, name="check")
cli.add_command(init_command, name="init")
cli.add_command(linters_command, name="linters")


if __name__ == "__main__":
    cli()
