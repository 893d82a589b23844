"""CLI command modules for mergespace."""

from mergespace.command.analyze import AnalyzeCommand
from mergespace.command.clone import CloneCommand

__all__ = ["AnalyzeCommand", "CloneCommand"]
