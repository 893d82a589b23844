"""Analyze command - measure how merges were resolved in history."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg

from mergespace.core.log import logger


class AnalyzeCommand(BaseModel):
    """Analyze the merge commits of every listed project.

    Each project must already be cloned below analysis.project_dir
    (see the clone command). For every merge commit the merge is
    recomputed, the resolution space of its conflicts is built, and
    the committed resolution is located in it. One JSON report per
    project is written to analysis.output_dir.
    """

    project_list: CliPositionalArg[Path] = Field(
        description="YAML file listing projects as name/url entries"
    )

    async def run_workflow(self, state: "State") -> int:
        """Run the analysis workflow.

        Args:
            state: State instance

        Returns:
            Exit code (0=success)
        """
        from mergespace.workflow.graph import create_workflow
        from mergespace.workflow.nodes.initialize import Initialize

        workflow = create_workflow()

        async with workflow.iter(
            Initialize(project_list=self.project_list), state=state
        ) as run:
            async for _node in run:
                pass

        logger.info(f"Reports written to {state.config.analysis.output_dir}")
        return 0
