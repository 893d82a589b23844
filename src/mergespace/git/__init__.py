"""Git collaborators: repository access and three-way merging."""

from mergespace.git.merger import MergeResult, ThreeWayMerger
from mergespace.git.repository import (
    Commit,
    Repository,
    RepositoryError,
    RepositoryReadError,
)

__all__ = [
    "Commit",
    "Repository",
    "RepositoryError",
    "RepositoryReadError",
    "MergeResult",
    "ThreeWayMerger",
]
