"""Conflicting merges, conflicting files and conflict parsing."""

from mergespace.conflict.file import ConflictingFile
from mergespace.conflict.merge import ConflictingMerge, ResolutionIterator
from mergespace.conflict.parser import Conflict, parse, parse_segments

__all__ = [
    "Conflict",
    "ConflictingFile",
    "ConflictingMerge",
    "ResolutionIterator",
    "parse",
    "parse_segments",
]
