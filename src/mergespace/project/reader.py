"""Project list reading."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, TypeAdapter


class ProjectInfo(BaseModel):
    """A project to clone and analyze."""

    name: str = Field(
        min_length=1,
        description="Directory name of the clone under the project dir",
    )
    url: str = Field(
        min_length=1,
        description="URL git clones the project from",
    )


_PROJECT_LIST = TypeAdapter(list[ProjectInfo])


def read_project_list(path: Path) -> list[ProjectInfo]:
    """Read a YAML project list.

    The file is either a list of {name, url} mappings or a mapping
    with that list under "projects".

    Args:
        path: Project list file

    Returns:
        Projects in file order

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the file is not a valid project list
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid project list {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("projects")
    if data is None:
        return []

    projects = _PROJECT_LIST.validate_python(data)

    names = [project.name for project in projects]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(
            f"Duplicate project names in {path}: {', '.join(duplicates)}"
        )
    return projects
