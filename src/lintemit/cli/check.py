"""lint-emit check command - lint the lines added in a revision range."""

import asyncio
from functools import partial
from pathlib import Path

import click
import structlog
from rich.console import Console

from lintemit.cli.utils import (
    EXIT_CLEAN,
    EXIT_LINTER_FAILED,
    EXIT_VIOLATIONS,
    AbortedException,
    ConfigErrorException,
    find_repo_root,
    split_names,
)
from lintemit.config.loader import load_config, resolve_linters
from lintemit.core.errors import ConfigError
from lintemit.core.logging import configure_logging, level_for_verbosity
from lintemit.core.progress import LintProgress, get_console, lint_progress, status
from lintemit.display.render import render, render_summary, to_json
from lintemit.git.errors import GitError
from lintemit.lint.models import RunResult, UnitResult
from lintemit.lint.ops import lint_revision_range

log = structlog.get_logger()


def exit_code_for(result: RunResult) -> int:
    """Violations win over failures; failures alone still fail the run."""
    if result.total_messages:
        return EXIT_VIOLATIONS
    if result.failed:
        return EXIT_LINTER_FAILED
    return EXIT_CLEAN


def _report_unit(progress: LintProgress, unit: UnitResult) -> None:
    if unit.linter is None:
        return
    progress.advance(failed=unit.status == "error")
    if unit.status == "error":
        status(f"{unit.linter} failed on {unit.path}", style="warning", indent=2)
    else:
        log.info(
            "unit_finished",
            linter=unit.linter,
            file=str(unit.path),
            status=unit.status,
            messages=len(unit.messages),
        )


@click.command()
@click.argument("revision_range", default="HEAD", required=False)
@click.option(
    "--linters",
    "linter_names",
    default=None,
    help="Comma-separated linters to run instead of the configured ones",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Concurrent linter processes (default: CPU count)",
)
@click.option(
    "--timeout",
    "timeout_sec",
    type=click.FloatRange(min=0),
    default=None,
    help="Per-invocation timeout in seconds, 0 disables",
)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository to check (default: current directory)",
)
@click.pass_context
def check_command(
    ctx: click.Context,
    revision_range: str,
    linter_names: str | None,
    as_json: bool,
    jobs: int | None,
    timeout_sec: float | None,
    repo_path: Path | None,
) -> None:
    """Report linter violations on lines added in REVISION_RANGE.

    REVISION_RANGE is A (A against the working tree, default HEAD), A..B,
    or A...B (B against the merge base of A and B).

    Exits 1 when violations are found, 2 when the run cannot start (bad
    config or revision range) and 3 when linters failed but reported nothing.
    """
    repo_root = find_repo_root(repo_path)

    try:
        config = load_config(repo_root)
        linters = resolve_linters(config, split_names(linter_names))
    except ConfigError as e:
        raise ConfigErrorException(e) from e

    # -v on the command line takes precedence over the configured level
    verbosity = (ctx.obj or {}).get("verbosity", 0)
    if verbosity:
        configure_logging(level=level_for_verbosity(verbosity), project_root=repo_root)
    else:
        configure_logging(config=config.logging, project_root=repo_root)

    if not linters:
        status("No linters configured and none of the built-ins found on PATH", style="warning")

    max_workers = jobs if jobs is not None else config.run.max_workers
    timeout = timeout_sec if timeout_sec is not None else config.run.timeout_sec
    log.debug(
        "check_started",
        repo=str(repo_root),
        revision_range=revision_range,
        linters=[t.name for t in linters],
        max_workers=max_workers,
        timeout_sec=timeout,
    )

    try:
        with lint_progress(f"Linting changes in {revision_range}") as progress:
            result = asyncio.run(
                lint_revision_range(
                    repo_root,
                    revision_range,
                    linters,
                    max_workers=max_workers,
                    timeout_sec=timeout or None,
                    on_unit_done=partial(_report_unit, progress),
                )
            )
    except GitError as e:
        raise AbortedException(str(e)) from e

    if as_json:
        click.echo(to_json(result, project_root=repo_root))
    else:
        render(result, Console(), project_root=repo_root)
        render_summary(result, get_console(), project_root=repo_root)

    ctx.exit(exit_code_for(result))
