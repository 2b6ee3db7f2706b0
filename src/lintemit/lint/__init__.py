"""Lint module - run linters and keep violations on changed lines."""

# Import definitions to register all built-in linters
from lintemit.lint import definitions as _definitions  # noqa: F401
from lintemit.lint.correlate import canonicalize, correlate, filter_candidates
from lintemit.lint.invoker import LinterInvoker, LinterOutput, build_command
from lintemit.lint.matcher import match_output
from lintemit.lint.models import Candidate, LintMessage, RunResult, UnitResult
from lintemit.lint.ops import Dispatcher, lint_revision_range
from lintemit.lint.tools import LinterConfig, LinterRegistry, registry

__all__ = [
    "Candidate",
    "Dispatcher",
    "LintMessage",
    "LinterConfig",
    "LinterInvoker",
    "LinterOutput",
    "LinterRegistry",
    "RunResult",
    "UnitResult",
    "build_command",
    "canonicalize",
    "correlate",
    "filter_candidates",
    "lint_revision_range",
    "match_output",
    "registry",
]
