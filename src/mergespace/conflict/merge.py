"""ConflictingMerge - every possible resolution of a conflicting merge."""

from __future__ import annotations

from collections.abc import Mapping

from mergespace.conflict.file import BlobReader, ConflictingFile, MergeOutcome
from mergespace.git.repository import Commit
from mergespace.resolution.models import ResolutionFile, ResolutionMerge
from mergespace.space.chain import ProductSpace
from mergespace.space.iterator import ProductIterator


class ResolutionIterator:
    """Iterator over whole-merge resolutions.

    Wraps one product-space traversal and turns every combination
    of resolved files into a ResolutionMerge. Past exhaustion,
    next() raises StopIteration; next(iterator, None) returns None.
    """

    def __init__(self, traversal: ProductIterator[ResolutionFile]):
        self._traversal = traversal

    def has_next(self) -> bool:
        return self._traversal.has_next()

    def __next__(self) -> ResolutionMerge:
        return ResolutionMerge(next(self._traversal))

    def __iter__(self) -> ResolutionIterator:
        return self


class ConflictingMerge:
    """A merge commit whose three-way merge produced conflicts.

    Conflicting files are discovered once, in the constructor.
    The resolution space over them is rebuilt for every count or
    traversal, so separate traversals never share a cursor.
    """

    def __init__(
        self,
        repository: BlobReader,
        commit: Commit,
        merge_results: Mapping[str, MergeOutcome],
    ):
        """Initialize ConflictingMerge.

        Args:
            repository: Repository the merge belongs to
            commit: The merge commit
            merge_results: Three-way merge result per file path
        """
        self.repository = repository
        self.commit = commit
        self._conflicting_files = tuple(
            ConflictingFile(repository, commit, result, path)
            for path, result in merge_results.items()
            if result.contains_conflicts()
        )

    @property
    def conflicting_files(self) -> tuple[ConflictingFile, ...]:
        return self._conflicting_files

    @property
    def commit_id(self) -> str:
        return self.commit.sha

    @property
    def commit_id_short(self) -> str:
        """First seven characters of the commit id.

        Raises:
            IndexError: If the commit id is shorter than that
        """
        return self.commit.short_id

    def _build_resolutions(self) -> ProductSpace[ResolutionFile]:
        """Connect one dimension per conflicting file, in file order."""
        space = ProductSpace()
        for conflicting_file in self._conflicting_files:
            space.connect(conflicting_file)
        return space

    def size(self) -> int:
        """Number of candidate resolutions.

        Returns:
            0 without conflicting files, otherwise the product of
            the files' candidate counts
        """
        return self._build_resolutions().size()

    def conflict_count(self) -> int:
        """Number of conflict hunks over all conflicting files."""
        return sum(
            conflicting_file.conflict_count()
            for conflicting_file in self._conflicting_files
        )

    def iterator(self) -> ResolutionIterator:
        """Start a new traversal of every candidate resolution."""
        return ResolutionIterator(self._build_resolutions().traverse())

    def __iter__(self) -> ResolutionIterator:
        return self.iterator()

    def resolution_at(self, index: int) -> ResolutionMerge:
        """Candidate resolution at a given rank in traversal order.

        Raises:
            IndexError: If index is outside [0, size())
        """
        return ResolutionMerge(self._build_resolutions().combination_at(index))

    def actual_resolution(self) -> ResolutionMerge:
        """The resolution committed in history.

        Read straight from the merge commit, independent of the
        resolution space.

        Raises:
            RepositoryReadError: If any conflicting file cannot be
                read; no partial resolution is returned
        """
        return ResolutionMerge(
            conflicting_file.actual_resolution_file()
            for conflicting_file in self._conflicting_files
        )

    def locate(self, resolution: ResolutionMerge) -> int | None:
        """Rank of a resolution in traversal order.

        Returns:
            Zero-based rank, or None if the resolution is not one of
            the candidates
        """
        return self._build_resolutions().index_of(resolution.files)

    def __repr__(self) -> str:
        return (
            f"ConflictingMerge({self.commit.sha[:7]!r}, "
            f"files={len(self._conflicting_files)})"
        )
