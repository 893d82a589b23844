"""Workflow nodes for graph state machine."""

from mergespace.workflow.nodes.analyze_merge import AnalyzeMerge
from mergespace.workflow.nodes.analyze_project import AnalyzeProject
from mergespace.workflow.nodes.finalize import Finalize
from mergespace.workflow.nodes.initialize import Initialize
from mergespace.workflow.nodes.write_report import WriteReport

__all__ = [
    "Initialize",
    "AnalyzeProject",
    "AnalyzeMerge",
    "WriteReport",
    "Finalize",
]
