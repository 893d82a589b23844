"""Merge analysis and reports."""

from mergespace.analysis.analyzer import (
    MergeReport,
    ProjectReport,
    analyze_merge,
    count_matching,
)

__all__ = ["MergeReport", "ProjectReport", "analyze_merge", "count_matching"]
