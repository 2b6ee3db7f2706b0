"""Tests for revision range parsing and diff planning."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pygit2
import pytest

from lintemit.git.errors import InvalidRangeError, NoMergeBaseError, RefNotFoundError
from lintemit.git.planners import DiffPlanner, DiffType, RevisionRange, parse_revision_range


class TestParseRevisionRange:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", RevisionRange(base="HEAD")),
            (None, RevisionRange(base="HEAD")),
            ("HEAD~1", RevisionRange(base="HEAD~1")),
            ("main..feature", RevisionRange(base="main", target="feature")),
            ("main..", RevisionRange(base="main", target="HEAD")),
            ("..feature", RevisionRange(base="HEAD", target="feature")),
            ("main...feature", RevisionRange(base="main", target="feature", merge_base=True)),
            ("  v1.0..v2.0  ", RevisionRange(base="v1.0", target="v2.0")),
        ],
    )
    def test_parses(self, text: str | None, expected: RevisionRange) -> None:
        assert parse_revision_range(text) == expected

    def test_too_many_dots_raises(self) -> None:
        with pytest.raises(InvalidRangeError):
            parse_revision_range("a..b..c")


class TestDiffPlanner:
    def test_single_ref_plans_against_working_tree(self, temp_repo: pygit2.Repository) -> None:
        planner = DiffPlanner(temp_repo)

        plan = planner.plan(RevisionRange(base="HEAD"))

        assert plan.diff_type == DiffType.REF_TO_WORKING
        assert plan.base_oid == temp_repo.head.target
        assert plan.target_oid is None

    def test_two_refs_plan_ref_to_ref(
        self, temp_repo: pygit2.Repository, commit: Callable[[str], pygit2.Oid]
    ) -> None:
        first = temp_repo.head.target
        (Path(temp_repo.workdir) / "a.txt").write_text("a\n")
        second = commit("Add a")

        plan = DiffPlanner(temp_repo).plan(RevisionRange(base="HEAD~1", target="HEAD"))

        assert plan.diff_type == DiffType.REF_TO_REF
        assert plan.base_oid == first
        assert plan.target_oid == second

    def test_merge_base_replaces_base(
        self, temp_repo: pygit2.Repository, commit: Callable[[str], pygit2.Oid]
    ) -> None:
        root = temp_repo.head.target
        temp_repo.branches.local.create("feature", temp_repo.head.peel(pygit2.Commit))
        (Path(temp_repo.workdir) / "main.txt").write_text("main\n")
        commit("Commit on main")

        plan = DiffPlanner(temp_repo).plan(
            RevisionRange(base="feature", target="main", merge_base=True)
        )

        assert plan.base_oid == root

    def test_unknown_ref_raises(self, temp_repo: pygit2.Repository) -> None:
        with pytest.raises(RefNotFoundError):
            DiffPlanner(temp_repo).plan(RevisionRange(base="does-not-exist"))


    def test_unknown_ref_names_the_range(self, temp_repo: pygit2.Repository) -> None:
        with pytest.raises(RefNotFoundError) as exc_info:
            DiffPlanner(temp_repo).plan(RevisionRange(base="HEAD", target="nope"))

        assert exc_info.value.ref == "nope"
        assert exc_info.value.revision_range == "HEAD..nope"
        assert str(exc_info.value) == "Reference not found: nope (in HEAD..nope)"

    def test_unrelated_histories_have_no_merge_base(self, temp_repo: pygit2.Repository) -> None:
        sig = pygit2.Signature("Test User", "test@example.com")
        tree = temp_repo.index.write_tree()
        temp_repo.create_commit("refs/heads/orphan", sig, sig, "Orphan", tree, [])

        with pytest.raises(NoMergeBaseError) as exc_info:
            DiffPlanner(temp_repo).plan(parse_revision_range("main...orphan"))

        assert exc_info.value.revision_range == "main...orphan"


class TestRevisionRangeStr:
    @pytest.mark.parametrize("text", ["HEAD~2", "main..feature", "main...feature"])
    def test_round_trips_parsed_text(self, text: str) -> None:
        assert str(parse_revision_range(text)) == text
