"""Tests for merge analysis and report writing."""

import json

import pytest

from mergespace.analysis import (
    MergeReport,
    ProjectReport,
    analyze_merge,
    count_matching,
)
from mergespace.conflict import ConflictingMerge
from mergespace.git.merger import MergeResult
from mergespace.git.repository import Commit, RepositoryReadError

SHA = "fedcba9876543210fedcba9876543210fedcba98"

CONFLICTED = (
    "head\n"
    "<<<<<<< ours\nmine\n=======\nyours\n>>>>>>> theirs\n"
    "tail\n"
)


class StubRepository:
    def __init__(self, blobs):
        self.blobs = blobs

    def read_blob(self, commit, path):
        if (commit, path) not in self.blobs:
            raise RepositoryReadError(f"Cannot read {path} at {commit}")
        return self.blobs[(commit, path)]


class StubMerger:
    def __init__(self, results):
        self.results = results
        self.merged = []

    def merge(self, commit):
        self.merged.append(commit)
        return self.results


@pytest.fixture
def commit():
    return Commit(sha=SHA, parents=("1" * 40, "2" * 40))


@pytest.fixture
def merger():
    return StubMerger({
        "a.txt": MergeResult(path="a.txt", content=CONFLICTED, conflicts=1),
        "b.txt": MergeResult(path="b.txt", content="clean\n"),
    })


def test_actual_resolution_in_space(commit, merger):
    """Taking theirs is found at rank 1 and counted once."""
    repository = StubRepository({(SHA, "a.txt"): "head\nyours\ntail\n"})

    report = analyze_merge(repository, commit, merger, exhaustive_limit=100)

    assert report.commit_id == SHA
    assert report.commit_id_short == "fedcba9"
    assert report.files == ["a.txt"]
    assert report.conflict_count == 1
    assert report.resolution_count == 4
    assert report.actual_in_space is True
    assert report.actual_rank == 1
    assert report.matching_resolutions == 1
    assert report.error is None
    assert merger.merged == [commit]


def test_actual_resolution_outside_space(commit, merger):
    """A hand-written resolution is reported as outside the space."""
    repository = StubRepository({(SHA, "a.txt"): "head\nrewritten\ntail\n"})

    report = analyze_merge(repository, commit, merger, exhaustive_limit=100)

    assert report.actual_in_space is False
    assert report.actual_rank is None
    assert report.matching_resolutions == 0


def test_exhaustive_search_disabled(commit, merger):
    """With a zero limit the space is not traversed."""
    repository = StubRepository({(SHA, "a.txt"): "head\nmine\ntail\n"})

    report = analyze_merge(repository, commit, merger, exhaustive_limit=0)

    assert report.actual_rank == 0
    assert report.matching_resolutions is None


def test_unreadable_actual_resolution(commit, merger):
    """Read failures are recorded instead of raised."""
    report = analyze_merge(StubRepository({}), commit, merger)

    assert report.actual_in_space is None
    assert "Cannot read a.txt" in report.error
    assert report.resolution_count == 4


def test_merge_without_conflicts(commit):
    """Clean merges produce no report."""
    merger = StubMerger({"b.txt": MergeResult(path="b.txt", content="x\n")})

    assert analyze_merge(StubRepository({}), commit, merger) is None


def test_count_matching(commit, merger):
    """count_matching visits every candidate."""
    merge = ConflictingMerge(StubRepository({}), commit, merger.results)

    assert count_matching(merge, merge.resolution_at(3)) == 1


def test_project_report_write(tmp_path):
    """Reports are written as <project>.json."""
    report = ProjectReport(
        project="alpha",
        merge_commits=5,
        merges=[
            MergeReport(
                commit_id=SHA,
                commit_id_short=SHA[:7],
                files=["a.txt"],
                conflict_count=1,
                resolution_count=4,
                actual_in_space=True,
                actual_rank=0,
            ),
        ],
    )

    path = report.write(tmp_path / "reports")

    assert path == tmp_path / "reports" / "alpha.json"
    data = json.loads(path.read_text())
    assert data["project"] == "alpha"
    assert data["merge_commits"] == 5
    assert data["merges"][0]["resolution_count"] == 4
    assert report.conflicting_merges == 1
