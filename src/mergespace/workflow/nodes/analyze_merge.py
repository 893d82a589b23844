"""AnalyzeMerge node - analyze the next merge commit of a project."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from mergespace.analysis.analyzer import analyze_merge
from mergespace.core.config import State
from mergespace.core.log import logger
from mergespace.git.repository import RepositoryError

if TYPE_CHECKING:
    from mergespace.workflow.nodes.write_report import WriteReport


@dataclass
class AnalyzeMerge(BaseNode[State]):
    """Analyze one queued merge commit."""

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> AnalyzeMerge | WriteReport:
        """Recompute the merge and compare it with history.

        A failure on one commit is logged and the commit skipped;
        the remaining commits are still analyzed.

        Returns:
            AnalyzeMerge: If more merge commits are queued
            WriteReport: If the project's merges are all analyzed
        """
        analysis = ctx.state.runtime.analysis

        if not analysis.pending_commits:
            from mergespace.workflow.nodes.write_report import WriteReport
            return WriteReport()

        commit = analysis.pending_commits.pop(0)
        remaining = len(analysis.pending_commits)

        with logger.span(
            "Merge {commit}", commit=commit.short_id, remaining=remaining
        ):
            try:
                report = analyze_merge(
                    analysis.repository,
                    commit,
                    analysis.merger,
                    exhaustive_limit=ctx.state.config.analysis.exhaustive_limit,
                )
            except (RepositoryError, ValueError) as e:
                logger.error(
                    f"Failed to analyze merge {commit.short_id}: {e}"
                )
                report = None

        if report is not None:
            analysis.merge_reports.append(report)

        return AnalyzeMerge()
