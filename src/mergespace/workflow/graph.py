"""Graph workflow definition."""

from pydantic_graph import Graph

from mergespace.core.config import State
from mergespace.core.log import logger


def create_workflow():
    """Create the analysis workflow graph.

    Initialize → AnalyzeProject → AnalyzeMerge* → WriteReport →
        [next AnalyzeProject or Finalize]

    Returns:
        Graph workflow with State as state_type
    """
    logger.debug("Building workflow graph")

    # Imported here so the graph can resolve the nodes' return
    # annotations, which refer to each other
    from mergespace.workflow.nodes.analyze_merge import AnalyzeMerge
    from mergespace.workflow.nodes.analyze_project import AnalyzeProject
    from mergespace.workflow.nodes.finalize import Finalize
    from mergespace.workflow.nodes.initialize import Initialize
    from mergespace.workflow.nodes.write_report import WriteReport

    return Graph(
        nodes=(
            Initialize,
            AnalyzeProject,
            AnalyzeMerge,
            WriteReport,
            Finalize,
        ),
        state_type=State,
    )
