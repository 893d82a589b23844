"""ConflictingFile - the candidate resolutions of one conflicting file."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from typing import Protocol

from mergespace.conflict.parser import Conflict, parse_segments
from mergespace.git.repository import Commit
from mergespace.resolution.models import ResolutionFile
from mergespace.space.chain import ProductSpace
from mergespace.space.choice import ListChoiceSet, SizedChoiceSet


class BlobReader(Protocol):
    """What a ConflictingFile needs from a repository."""

    def read_blob(self, commit: str, path: str) -> str:
        ...


class MergeOutcome(Protocol):
    """What a ConflictingFile needs from a three-way merge result."""

    content: str
    ours_missing_eol: bool
    theirs_missing_eol: bool

    def contains_conflicts(self) -> bool:
        ...


class ConflictingFile(SizedChoiceSet[ResolutionFile]):
    """A file whose three-way merge left conflict markers.

    Each hunk can be resolved as ours, theirs, or either
    concatenation of the two; the file's candidates are the
    product of those choices over all hunks, with the text
    between hunks kept as merged.
    """

    def __init__(
        self,
        repository: BlobReader,
        commit: Commit,
        merge_result: MergeOutcome,
        path: str,
    ):
        """Initialize ConflictingFile.

        Args:
            repository: Repository to read the actual resolution from
            commit: Merge commit holding the actual resolution
            merge_result: Three-way merge result for this file
            path: File path relative to the repository root

        Raises:
            ValueError: If merge_result contains no conflicts or its
                markers are malformed
        """
        if not merge_result.contains_conflicts():
            raise ValueError(f"Merge result for {path} has no conflicts")

        self.repository = repository
        self.commit = commit
        self.path = path
        self.segments = parse_segments(merge_result.content)
        # Only a hunk that ends the file can carry a side's last line
        if self.segments and isinstance(self.segments[-1], Conflict):
            self.segments[-1] = replace(
                self.segments[-1],
                ours_missing_eol=merge_result.ours_missing_eol,
                theirs_missing_eol=merge_result.theirs_missing_eol,
            )
        self.hunks = [
            segment for segment in self.segments
            if isinstance(segment, Conflict)
        ]

    def _build_space(self) -> ProductSpace[str]:
        return ProductSpace(
            [ListChoiceSet(hunk.candidates()) for hunk in self.hunks]
        )

    def conflict_count(self) -> int:
        """Number of conflict hunks in this file."""
        return len(self.hunks)

    def size(self) -> int:
        return self._build_space().size()

    def produce(self) -> Iterator[ResolutionFile]:
        for choices in self._build_space().traverse():
            yield self._assemble(choices)

    def _assemble(self, choices: tuple[str, ...]) -> ResolutionFile:
        chosen = iter(choices)
        parts = [
            next(chosen) if isinstance(segment, Conflict) else segment
            for segment in self.segments
        ]
        return ResolutionFile(path=self.path, content="".join(parts))

    def actual_resolution_file(self) -> ResolutionFile:
        """Read the file as committed in the merge commit.

        Raises:
            RepositoryReadError: If the file cannot be read
        """
        return ResolutionFile(
            path=self.path,
            content=self.repository.read_blob(self.commit.sha, self.path),
        )

    def match(self, content: str) -> tuple[str, ...] | None:
        """Find the hunk choices that produce content.

        Stable text between hunks anchors the search. Candidates
        are tried in order, so the first match found is the one
        with the lowest rank. The search keeps an explicit stack and
        remembers (segment, position) pairs that cannot complete, so
        files with many hunks neither recurse deeply nor revisit
        dead ends.

        Returns:
            One chosen text per hunk, or None if no candidate
            equals content
        """
        end = len(self.segments)
        failed: set[tuple[int, int]] = set()
        # taken[k] is the text consumed by segment k
        taken: list[str] = []
        stack = [(0, 0, iter(self._options(0)))]

        while stack:
            index, position, options = stack[-1]
            if index == end and position == len(content):
                return tuple(
                    text for segment, text in zip(self.segments, taken)
                    if isinstance(segment, Conflict)
                )

            for option in options:
                following = (index + 1, position + len(option))
                if (content.startswith(option, position)
                        and following not in failed):
                    taken.append(option)
                    stack.append(
                        (*following, iter(self._options(index + 1)))
                    )
                    break
            else:
                failed.add((index, position))
                stack.pop()
                if taken:
                    taken.pop()

        return None

    def _options(self, index: int) -> list[str]:
        if index == len(self.segments):
            return []
        segment = self.segments[index]
        if isinstance(segment, Conflict):
            return segment.candidates()
        return [segment]

    def index_of(self, value: ResolutionFile) -> int | None:
        """Rank of a resolved version of this file among the candidates."""
        if value.path != self.path:
            return None
        choices = self.match(value.content)
        if choices is None:
            return None
        return self._build_space().index_of(choices)

    def __repr__(self) -> str:
        return (
            f"ConflictingFile({self.path!r}, "
            f"hunks={len(self.hunks)})"
        )
