"""Compare the actual resolution of a merge with its resolution space."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from mergespace.conflict.merge import ConflictingMerge
from mergespace.core.log import logger
from mergespace.git.merger import ThreeWayMerger
from mergespace.git.repository import Commit, Repository, RepositoryReadError
from mergespace.resolution.models import ResolutionMerge


class MergeReport(BaseModel):
    """Findings for one conflicting merge commit."""

    commit_id: str
    commit_id_short: str
    files: list[str]
    conflict_count: int
    resolution_count: int
    actual_in_space: bool | None = Field(
        default=None,
        description="None when the actual resolution could not be read",
    )
    actual_rank: int | None = Field(
        default=None,
        description="Rank of the actual resolution in traversal order",
    )
    matching_resolutions: int | None = Field(
        default=None,
        description=(
            "Candidates equal to the actual resolution, counted by "
            "exhaustive traversal; None when the space was too large"
        ),
    )
    error: str | None = None


class ProjectReport(BaseModel):
    """Findings for every merge commit of one project."""

    project: str
    merge_commits: int
    merges: list[MergeReport]
    analyzed_at: datetime = Field(default_factory=datetime.now)

    @property
    def conflicting_merges(self) -> int:
        return len(self.merges)

    def write(self, output_dir: Path) -> Path:
        """Write this report as <output_dir>/<project>.json.

        Returns:
            Path of the written report
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{self.project}.json"
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path


def count_matching(merge: ConflictingMerge, actual: ResolutionMerge) -> int:
    """Count candidates equal to actual by visiting every candidate."""
    matching = 0
    resolutions = merge.iterator()
    while resolutions.has_next():
        if next(resolutions) == actual:
            matching += 1
    return matching


def analyze_merge(
    repository: Repository,
    commit: Commit,
    merger: ThreeWayMerger,
    exhaustive_limit: int = 0,
) -> MergeReport | None:
    """Analyze one merge commit.

    Args:
        repository: Repository holding the commit
        commit: Merge commit to analyze
        merger: Merger recomputing the commit's three-way merge
        exhaustive_limit: Largest space also searched exhaustively

    Returns:
        MergeReport, or None if the merge has no conflicts
    """
    merge = ConflictingMerge(repository, commit, merger.merge(commit))
    if not merge.conflicting_files:
        logger.debug("Merge has no conflicts", commit=commit.short_id)
        return None

    report = MergeReport(
        commit_id=merge.commit_id,
        commit_id_short=merge.commit_id_short,
        files=[f.path for f in merge.conflicting_files],
        conflict_count=merge.conflict_count(),
        resolution_count=merge.size(),
    )

    try:
        actual = merge.actual_resolution()
    except RepositoryReadError as e:
        logger.warn(
            "Cannot read actual resolution",
            commit=merge.commit_id_short,
            error=str(e),
        )
        report.error = str(e)
        return report

    report.actual_rank = merge.locate(actual)
    report.actual_in_space = report.actual_rank is not None

    if 0 < report.resolution_count <= exhaustive_limit:
        report.matching_resolutions = count_matching(merge, actual)

    logger.info(
        "Analyzed merge {commit}",
        commit=merge.commit_id_short,
        files=len(report.files),
        conflicts=report.conflict_count,
        resolutions=str(report.resolution_count),
        actual_in_space=report.actual_in_space,
    )
    return report
