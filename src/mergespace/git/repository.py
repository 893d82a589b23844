"""Read-only access to a git repository through git commands."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

from mergespace.core.log import logger
from mergespace.core.runner import Runner

SHORT_ID_LENGTH = 7

# Used when no command templates are configured
DEFAULT_GIT_COMMANDS = {
    "show_blob": "git show {commit}:{path}",
    "blob_exists": "git cat-file -e {commit}:{path}",
    "list_merges": "git rev-list --merges --parents --all",
    "merge_base": "git merge-base {first} {second}",
    "changed_files": "git diff --name-only --no-renames {first} {second}",
    "merge_file": (
        "git merge-file -p --diff3 -L ours -L base -L theirs "
        "{ours} {base} {theirs}"
    ),
    "clone": "git clone {url} {destination}",
}


class RepositoryError(Exception):
    """A git command failed unexpectedly."""


class RepositoryReadError(RepositoryError, OSError):
    """A blob could not be read from the repository."""


@dataclass(frozen=True)
class Commit:
    """A commit and its parents, identified by full hashes."""

    sha: str
    parents: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.sha

    @property
    def short_id(self) -> str:
        """First seven characters of the hash.

        Raises:
            IndexError: If the hash is shorter than seven characters
        """
        if len(self.sha) < SHORT_ID_LENGTH:
            raise IndexError(
                f"Commit id {self.sha!r} is shorter than "
                f"{SHORT_ID_LENGTH} characters"
            )
        return self.sha[:SHORT_ID_LENGTH]

    @property
    def is_merge(self) -> bool:
        return len(self.parents) >= 2


class Repository:
    """Git repository accessor.

    Every operation runs a command template from the "git"
    command category through Runner. Placeholders are shell-quoted
    before substitution.
    """

    def __init__(
        self,
        workdir: Path,
        commands: dict[str, str] | None = None,
        runner: Runner | None = None,
        timeout: int | None = None,
    ):
        """Initialize repository accessor.

        Args:
            workdir: Path to the repository working directory
            commands: Git command templates overriding the defaults
            runner: Command runner (a new Runner if None)
            timeout: Timeout for each git command in seconds
        """
        self.workdir = Path(workdir)
        self.commands = {**DEFAULT_GIT_COMMANDS, **(commands or {})}
        self.runner = runner or Runner()
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.workdir.name

    def command(self, name: str, **params) -> str:
        """Render a command template with quoted parameters."""
        quoted = {key: shlex.quote(str(value)) for key, value in params.items()}
        return self.commands[name].format(**quoted)

    def _run(self, name: str, **params):
        cmd = self.command(name, **params)
        return cmd, self.runner.execute(
            cmd,
            cwd=self.workdir,
            timeout=self.timeout,
            check=False,
        )

    def _require_success(self, cmd: str, result) -> str:
        if result.exited != 0:
            raise RepositoryError(
                f"Git command failed: exit code {result.exited}\n"
                f"Command: {cmd}\n"
                f"stderr: {result.stderr}"
            )
        return result.stdout

    def read_blob(self, commit: str, path: str) -> str:
        """Read the content of a file at a commit.

        Args:
            commit: Commit hash or ref
            path: File path relative to the repository root

        Returns:
            File content

        Raises:
            RepositoryReadError: If the file cannot be read
        """
        cmd, result = self._run("show_blob", commit=commit, path=path)
        if result.exited != 0:
            raise RepositoryReadError(
                f"Cannot read {path} at {commit}: exit code "
                f"{result.exited}\n"
                f"Command: {cmd}\n"
                f"stderr: {result.stderr}"
            )
        return result.stdout

    def has_blob(self, commit: str, path: str) -> bool:
        """Whether path exists at commit."""
        _, result = self._run("blob_exists", commit=commit, path=path)
        return result.exited == 0

    def merge_commits(self) -> list[Commit]:
        """List every commit with two or more parents, newest first."""
        cmd, result = self._run("list_merges")
        output = self._require_success(cmd, result)

        commits = []
        for line in output.splitlines():
            fields = line.split()
            if len(fields) < 3:
                continue
            commits.append(Commit(sha=fields[0], parents=tuple(fields[1:])))

        logger.debug(
            "Found merge commits",
            repository=self.name,
            count=len(commits),
        )
        return commits

    def merge_base(self, first: str, second: str) -> str | None:
        """Best common ancestor of two commits.

        Returns:
            Hash of the merge base, or None for unrelated histories
        """
        cmd, result = self._run("merge_base", first=first, second=second)
        if result.exited == 1:
            return None
        return self._require_success(cmd, result).strip() or None

    def changed_files(self, first: str, second: str) -> set[str]:
        """Paths that differ between two commits."""
        cmd, result = self._run("changed_files", first=first, second=second)
        output = self._require_success(cmd, result)
        return {line for line in output.splitlines() if line}

    def clone(self, url: str, destination: Path) -> None:
        """Clone url into destination.

        Raises:
            RepositoryError: If git clone fails
        """
        cmd = self.command("clone", url=url, destination=destination)
        result = self.runner.execute(cmd, timeout=self.timeout, check=False)
        self._require_success(cmd, result)
