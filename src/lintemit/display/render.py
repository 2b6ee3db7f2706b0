"""Terminal and JSON presentation of a lint run."""

from __future__ import annotations

import json
from collections.abc import Iterable
from itertools import groupby
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from lintemit.core.progress import pluralize
from lintemit.lint.models import LintMessage, RunResult


def find_project_root(path: Path) -> Path | None:
    """Nearest ancestor of ``path`` (or itself) containing ``.git``."""
    current = path if path.is_dir() else path.parent
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def display_path(path: Path, project_root: Path | None) -> str:
    """Show ``path`` relative to the project root when it lies inside it."""
    if project_root is not None and path.is_relative_to(project_root):
        return str(path.relative_to(project_root))
    return str(path)


def sort_messages(messages: Iterable[LintMessage]) -> list[LintMessage]:
    """Order by file, then line, then linter."""
    return sorted(messages, key=lambda m: (str(m.file), m.line, m.linter, m.message))


def render(result: RunResult, console: Console, *, project_root: Path | None = None) -> None:
    """Print accepted messages grouped by file and sorted by line."""
    for file, group in groupby(sort_messages(result.messages), key=lambda m: m.file):
        root = project_root or find_project_root(file)
        name = escape(display_path(file, root))
        for message in group:
            linter = escape(message.linter)
            console.print(
                f"[bold green]{name}[/bold green]:[dim]{message.line}[/dim]  [cyan]{linter}[/cyan]"
            )
            console.print(f"  {escape(message.message)}", highlight=False)
            if message.source:
                console.print(f"  [dim]> {escape(message.source)}[/dim]", highlight=False)
        console.print()


def render_summary(
    result: RunResult, console: Console, *, project_root: Path | None = None
) -> None:
    """Summarize outcomes so that skipped and failed units are not mistaken for clean ones."""
    files = pluralize(len(result.files), "file")
    clean = pluralize(len(result.clean), "linter run")
    total = result.total_messages
    if total:
        console.print(f"[red]✗[/red] {pluralize(total, 'violation')} on changed lines in {files}")
    elif result.failed:
        runs = pluralize(len(result.failed), "linter run")
        console.print(f"[yellow]![/yellow] No violations reported, but {runs} failed")
    else:
        console.print(
            f"[green]✓[/green] No violations on changed lines ({files} checked, {clean} clean)"
        )
    if result.clean and (total or result.failed):
        console.print(f"  [dim]{clean} clean[/dim]")

    if result.skipped_extensions:
        labels = ", ".join(
            f".{ext}" if ext else "(no extension)" for ext in result.skipped_extensions
        )
        console.print(f"  [dim]Skipped, no linter configured for: {escape(labels)}[/dim]")

    for unit in sorted(result.failed, key=lambda u: (str(u.path), u.linter or "")):
        name = escape(display_path(unit.path, project_root or find_project_root(unit.path)))
        who = escape(unit.linter or "diff")
        detail = escape(unit.error_detail or "unknown error")
        console.print(f"  [yellow]![/yellow] {who} failed on {name}: {detail}")


def to_dict(result: RunResult, *, project_root: Path | None = None) -> dict[str, Any]:
    """Machine-readable form of a run."""
    return {
        "status": result.status,
        "messages": [m.to_dict() for m in sort_messages(result.messages)],
        "skipped_extensions": result.skipped_extensions,
        "failures": [
            {
                "file": str(u.path),
                "linter": u.linter,
                "kind": u.error_kind,
                "detail": u.error_detail,
            }
            for u in result.failed
        ],
        "files_checked": len(result.files),
        "clean_units": len(result.clean),
        "duration_seconds": round(result.duration_seconds, 3),
        "project_root": str(project_root) if project_root else None,
    }


def to_json(result: RunResult, *, project_root: Path | None = None) -> str:
    return json.dumps(to_dict(result, project_root=project_root), indent=2)
