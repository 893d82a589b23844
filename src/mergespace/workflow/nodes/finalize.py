"""Finalize node - summarize the run."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from mergespace.core.config import State
from mergespace.core.log import logger


@dataclass
class Finalize(BaseNode[State, None, int]):
    """Mark the analysis complete."""

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> End[int]:
        """Log a summary of all projects.

        Returns:
            End[int]: Number of project reports written
        """
        analysis = ctx.state.runtime.analysis
        analysis.status = "complete"

        reports = analysis.project_reports
        logger.info(
            f"Analysis complete: {len(reports)} projects, "
            f"{sum(r.conflicting_merges for r in reports)} conflicting merges"
        )
        return End(len(reports))
