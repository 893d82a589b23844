"""Project lists."""

from mergespace.project.reader import ProjectInfo, read_project_list

__all__ = ["ProjectInfo", "read_project_list"]
