"""WriteReport node - persist the current project's findings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from mergespace.analysis.analyzer import ProjectReport
from mergespace.core.config import State
from mergespace.core.log import logger

if TYPE_CHECKING:
    from mergespace.workflow.nodes.analyze_project import AnalyzeProject


@dataclass
class WriteReport(BaseNode[State]):
    """Write the JSON report of the project just analyzed."""

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> AnalyzeProject:
        """Write <output_dir>/<project>.json.

        Returns:
            AnalyzeProject: Next node, moving on to the next project
        """
        analysis = ctx.state.runtime.analysis

        report = ProjectReport(
            project=analysis.current_project.name,
            merge_commits=analysis.merge_commit_count,
            merges=analysis.merge_reports,
        )
        path = report.write(ctx.state.config.analysis.output_dir)
        analysis.project_reports.append(report)

        in_space = sum(1 for merge in report.merges if merge.actual_in_space)
        logger.info(
            f"{report.project}: {report.conflicting_merges} of "
            f"{report.merge_commits} merges conflicted, "
            f"{in_space} resolved within the resolution space",
            report=str(path),
        )

        analysis.current_project = None
        analysis.repository = None
        analysis.merger = None

        from mergespace.workflow.nodes.analyze_project import AnalyzeProject
        return AnalyzeProject()
