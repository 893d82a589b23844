"""Shared fixtures for conflict tests."""

import pytest

from mergespace.git.merger import MergeResult
from mergespace.git.repository import Commit, RepositoryReadError

MERGE_SHA = "0123456789abcdef0123456789abcdef01234567"


class FakeRepository:
    """Blob reader backed by a dict of (commit, path) -> content."""

    def __init__(self, blobs=None):
        self.blobs = dict(blobs or {})
        self.reads = []

    def read_blob(self, commit, path):
        self.reads.append((commit, path))
        try:
            return self.blobs[(commit, path)]
        except KeyError:
            raise RepositoryReadError(
                f"Cannot read {path} at {commit}"
            ) from None


def build_conflicted(*hunks, before="top\n", between="middle\n", after="bottom\n"):
    """Build merged content with one conflict per (ours, theirs) pair."""
    parts = [before]
    for index, (ours, theirs) in enumerate(hunks):
        if index:
            parts.append(between)
        parts.append(
            f"<<<<<<< ours\n{ours}=======\n{theirs}>>>>>>> theirs\n"
        )
    parts.append(after)
    return "".join(parts)


@pytest.fixture
def conflicted():
    """Factory for merged content with conflict markers."""
    return build_conflicted


@pytest.fixture
def fake_repository():
    """Factory for FakeRepository instances."""
    return FakeRepository


@pytest.fixture
def commit():
    return Commit(sha=MERGE_SHA, parents=("a" * 40, "b" * 40))


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def one_hunk_result():
    content = build_conflicted(("ours line\n", "theirs line\n"))
    return MergeResult(path="one.txt", content=content, conflicts=1)


@pytest.fixture
def two_hunk_result():
    content = build_conflicted(("o1\n", "t1\n"), ("o2\n", "t2\n"))
    return MergeResult(path="two.txt", content=content, conflicts=2)
