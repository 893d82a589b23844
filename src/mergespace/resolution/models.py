"""Resolved files and whole-merge resolutions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolutionFile:
    """One fully resolved version of a single file."""

    path: str
    content: str


class ResolutionMerge:
    """One resolved file per conflicting file of a merge.

    Candidate resolutions drawn from a resolution space and the
    actual resolution read from history share this type; which
    one a value is depends only on where it came from.
    """

    def __init__(self, files: Iterable[ResolutionFile] = ()):
        """Initialize ResolutionMerge.

        Args:
            files: Resolved files, in conflicting-file order
        """
        self._files = tuple(files)

    @property
    def files(self) -> tuple[ResolutionFile, ...]:
        return self._files

    @property
    def paths(self) -> list[str]:
        return [file.path for file in self._files]

    def get(self, path: str) -> ResolutionFile | None:
        """Return the resolved file for path, or None."""
        for file in self._files:
            if file.path == path:
                return file
        return None

    def __iter__(self) -> Iterator[ResolutionFile]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResolutionMerge):
            return NotImplemented
        return self._files == other._files

    def __hash__(self) -> int:
        return hash(self._files)

    def __repr__(self) -> str:
        return f"ResolutionMerge({self.paths!r})"
