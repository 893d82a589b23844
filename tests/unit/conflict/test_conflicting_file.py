"""Tests for ConflictingFile candidate generation and lookup."""

import pytest

from mergespace.conflict.file import ConflictingFile
from mergespace.git.merger import MergeResult
from mergespace.git.repository import RepositoryReadError
from mergespace.resolution.models import ResolutionFile


def test_clean_result_rejected(repository, commit):
    """A merge result without conflicts cannot build a ConflictingFile."""
    clean = MergeResult(path="clean.txt", content="fine\n", conflicts=0)

    with pytest.raises(ValueError, match="no conflicts"):
        ConflictingFile(repository, commit, clean, "clean.txt")


def test_one_hunk_candidates(repository, commit, one_hunk_result):
    """A single hunk yields ours, theirs and both concatenations."""
    conflicting = ConflictingFile(
        repository, commit, one_hunk_result, "one.txt"
    )

    contents = [resolved.content for resolved in conflicting.produce()]

    assert conflicting.conflict_count() == 1
    assert conflicting.size() == 4
    assert contents == [
        "top\nours line\nbottom\n",
        "top\ntheirs line\nbottom\n",
        "top\nours line\ntheirs line\nbottom\n",
        "top\ntheirs line\nours line\nbottom\n",
    ]
    assert all(resolved.path == "one.txt" for resolved in conflicting)


def test_two_hunk_size_is_product(repository, commit, two_hunk_result):
    """Hunks are independent dimensions of the file's space."""
    conflicting = ConflictingFile(
        repository, commit, two_hunk_result, "two.txt"
    )

    candidates = list(conflicting.produce())

    assert conflicting.conflict_count() == 2
    assert conflicting.size() == 16
    assert len(candidates) == 16
    assert len(set(candidates)) == 16
    assert candidates[0].content == "top\no1\nmiddle\no2\nbottom\n"
    assert candidates[1].content == "top\no1\nmiddle\nt2\nbottom\n"


def test_candidates_contain_no_markers(repository, commit, two_hunk_result):
    """Every candidate is fully resolved."""
    conflicting = ConflictingFile(
        repository, commit, two_hunk_result, "two.txt"
    )

    for resolved in conflicting:
        assert "<<<<<<<" not in resolved.content
        assert ">>>>>>>" not in resolved.content


def test_actual_resolution_file_reads_merge_commit(
    fake_repository, commit, one_hunk_result
):
    """The actual resolution comes from the merge commit itself."""
    repository = fake_repository({(commit.sha, "one.txt"): "resolved\n"})
    conflicting = ConflictingFile(
        repository, commit, one_hunk_result, "one.txt"
    )

    actual = conflicting.actual_resolution_file()

    assert actual == ResolutionFile(path="one.txt", content="resolved\n")
    assert repository.reads == [(commit.sha, "one.txt")]


def test_actual_resolution_file_read_error(repository, commit, one_hunk_result):
    """Read failures propagate as RepositoryReadError."""
    conflicting = ConflictingFile(
        repository, commit, one_hunk_result, "one.txt"
    )

    with pytest.raises(RepositoryReadError):
        conflicting.actual_resolution_file()


def test_index_of_matches_produce_order(repository, commit, two_hunk_result):
    """index_of finds every candidate at its traversal position."""
    conflicting = ConflictingFile(
        repository, commit, two_hunk_result, "two.txt"
    )

    for rank, candidate in enumerate(conflicting.produce()):
        assert conflicting.index_of(candidate) == rank


def test_index_of_outside_space(repository, commit, two_hunk_result):
    """Hand-edited resolutions and other paths are not found."""
    conflicting = ConflictingFile(
        repository, commit, two_hunk_result, "two.txt"
    )

    edited = ResolutionFile("two.txt", "top\nsomething else\nbottom\n")
    other_path = ResolutionFile("one.txt", "top\no1\nmiddle\no2\nbottom\n")

    assert conflicting.index_of(edited) is None
    assert conflicting.index_of(other_path) is None


def test_index_of_ambiguous_content_lowest_rank(repository, commit, conflicted):
    """When several choices give the same text the first one wins."""
    content = conflicted(("x\n", ""), ("", "x\n"), between="")
    result = MergeResult(path="a.txt", content=content, conflicts=2)
    conflicting = ConflictingFile(repository, commit, result, "a.txt")

    target = ResolutionFile("a.txt", "top\nx\nbottom\n")
    rank = conflicting.index_of(target)

    candidates = list(conflicting.produce())
    assert rank == candidates.index(target)


def test_index_of_many_hunks(repository, commit, conflicted):
    """Files with hundreds of hunks are matched without deep recursion."""
    hunks = [(f"o{n}\n", f"t{n}\n") for n in range(600)]
    result = MergeResult(
        path="many.txt", content=conflicted(*hunks), conflicts=600
    )
    conflicting = ConflictingFile(repository, commit, result, "many.txt")

    all_ours = "top\n" + "middle\n".join(ours for ours, _ in hunks)
    all_theirs = "top\n" + "middle\n".join(theirs for _, theirs in hunks)

    assert conflicting.index_of(
        ResolutionFile("many.txt", all_ours + "bottom\n")
    ) == 0
    assert conflicting.index_of(
        ResolutionFile("many.txt", all_theirs + "bottom\n")
    ) == sum(4 ** n for n in range(600))
    assert conflicting.index_of(
        ResolutionFile("many.txt", all_ours + "edited\n")
    ) is None


def test_final_hunk_without_trailing_newline(repository, commit, conflicted):
    """A side taken as-is matches even when its file had no final newline."""
    content = conflicted(("ours\n", "theirs\n"), before="a\n", after="")
    result = MergeResult(
        path="eol.txt",
        content=content,
        conflicts=1,
        ours_missing_eol=True,
        theirs_missing_eol=True,
    )
    conflicting = ConflictingFile(repository, commit, result, "eol.txt")

    assert [c.content for c in conflicting] == [
        "a\nours",
        "a\ntheirs",
        "a\nours\ntheirs",
        "a\ntheirs\nours",
    ]
    assert conflicting.index_of(ResolutionFile("eol.txt", "a\nours")) == 0
    assert conflicting.index_of(ResolutionFile("eol.txt", "a\nours\n")) is None


def test_missing_newline_ignored_for_inner_hunks(repository, commit, conflicted):
    """Only a hunk that ends the file drops the added newline."""
    content = conflicted(("ours\n", "theirs\n"))
    result = MergeResult(
        path="eol.txt", content=content, conflicts=1, ours_missing_eol=True
    )
    conflicting = ConflictingFile(repository, commit, result, "eol.txt")

    assert next(iter(conflicting)).content == "top\nours\nbottom\n"
