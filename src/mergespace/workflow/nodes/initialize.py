"""Initialize node - load the project list into runtime state."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from mergespace.core.config import State
from mergespace.core.log import logger
from mergespace.project.reader import read_project_list

if TYPE_CHECKING:
    from mergespace.workflow.nodes.analyze_project import AnalyzeProject


@dataclass
class Initialize(BaseNode[State]):
    """Read the project list and queue every project."""

    project_list: Path

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> AnalyzeProject:
        """Queue the listed projects.

        Returns:
            AnalyzeProject: Next node, analyzing the first project
        """
        projects = read_project_list(self.project_list)

        analysis = ctx.state.runtime.analysis
        analysis.projects = list(projects)
        analysis.project_reports = []
        analysis.status = "running"

        logger.info(
            f"Loaded {len(projects)} projects",
            project_list=str(self.project_list),
        )

        from mergespace.workflow.nodes.analyze_project import AnalyzeProject
        return AnalyzeProject()
