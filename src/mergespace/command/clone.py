"""Clone command - fetch the repositories of listed projects."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg

from mergespace.core.log import logger
from mergespace.git.repository import Repository, RepositoryError
from mergespace.project.reader import read_project_list


class CloneCommand(BaseModel):
    """Clone every listed project into analysis.project_dir.

    Projects whose directory already exists are skipped, so the
    command can be rerun after a partial failure.
    """

    project_list: CliPositionalArg[Path] = Field(
        description="YAML file listing projects as name/url entries"
    )

    async def run_workflow(self, state: "State") -> int:
        """Clone the listed projects.

        Args:
            state: State instance

        Returns:
            Exit code (0=success, 1=at least one clone failed)
        """
        config = state.config
        project_dir = config.analysis.project_dir
        project_dir.mkdir(parents=True, exist_ok=True)

        projects = read_project_list(self.project_list)
        repository = Repository(
            project_dir,
            commands=config.commands.get("git"),
            timeout=config.analysis.timeout,
        )
        failures = 0

        for project in projects:
            destination = project_dir / project.name
            if destination.exists():
                logger.info(f"Skipping {project.name}: {destination} exists")
                continue

            logger.info(f"Cloning {project.name}", url=project.url)
            try:
                repository.clone(project.url, destination.resolve())
            except RepositoryError as e:
                logger.error(f"Failed to clone {project.name}: {e}")
                failures += 1

        logger.info(
            f"Cloned {len(projects) - failures} of {len(projects)} projects"
        )
        return 1 if failures else 0
