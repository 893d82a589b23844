"""Resolution value types."""

from mergespace.resolution.models import ResolutionFile, ResolutionMerge

__all__ = ["ResolutionFile", "ResolutionMerge"]
