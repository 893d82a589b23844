"""AnalyzeProject node - open the next project and list its merges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic_graph import BaseNode, GraphRunContext

from mergespace.core.config import State
from mergespace.core.log import logger
from mergespace.git.merger import ThreeWayMerger
from mergespace.git.repository import Repository, RepositoryError

if TYPE_CHECKING:
    from mergespace.workflow.nodes.analyze_merge import AnalyzeMerge
    from mergespace.workflow.nodes.finalize import Finalize


@dataclass
class AnalyzeProject(BaseNode[State]):
    """Set up repository access for the next queued project."""

    async def run(
        self, ctx: GraphRunContext[State]
    ) -> AnalyzeMerge | AnalyzeProject | Finalize:
        """Open the next project's clone and queue its merge commits.

        Returns:
            AnalyzeMerge: If a project was opened
            AnalyzeProject: If the project had to be skipped
            Finalize: If no projects remain
        """
        analysis = ctx.state.runtime.analysis
        config = ctx.state.config

        if not analysis.projects:
            from mergespace.workflow.nodes.finalize import Finalize
            return Finalize()

        project = analysis.projects.pop(0)
        workdir = config.analysis.project_dir / project.name

        if not workdir.is_dir():
            logger.warn(
                f"Skipping {project.name}: no clone at {workdir}. "
                f"Run the clone command first."
            )
            return AnalyzeProject()

        repository = Repository(
            workdir,
            commands=config.commands.get("git"),
            timeout=config.analysis.timeout,
        )
        try:
            commits = repository.merge_commits()
        except RepositoryError as e:
            logger.error(f"Skipping {project.name}: {e}")
            return AnalyzeProject()

        analysis.current_project = project
        analysis.repository = repository
        analysis.merger = ThreeWayMerger(repository)
        analysis.pending_commits = commits
        analysis.merge_commit_count = len(commits)
        analysis.merge_reports = []

        logger.info(
            f"Analyzing {project.name}: {len(commits)} merge commits",
            workdir=str(workdir),
        )

        from mergespace.workflow.nodes.analyze_merge import AnalyzeMerge
        return AnalyzeMerge()
