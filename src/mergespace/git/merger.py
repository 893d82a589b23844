"""Three-way merge of a merge commit's parents with git merge-file."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path

from mergespace.core.log import logger
from mergespace.git.repository import Commit, Repository

# git merge-file exits with the conflict count, capped at 127;
# anything above that is an error (e.g. binary input)
_MAX_CONFLICT_EXIT = 127


@dataclass(frozen=True)
class MergeResult:
    """Result of merging one file: merged text and conflict count.

    ours_missing_eol and theirs_missing_eol record that a side's
    version did not end in a newline, which git merge-file adds to
    a conflict section at the end of the file.
    """

    path: str
    content: str
    conflicts: int = 0
    ours_missing_eol: bool = False
    theirs_missing_eol: bool = False

    def contains_conflicts(self) -> bool:
        return self.conflicts > 0


class ThreeWayMerger:
    """Recompute the merge a merge commit started from.

    For each path changed on both sides since the merge base, the
    base, first-parent and second-parent versions are merged with
    git merge-file. A path missing on one side merges as empty.
    """

    def __init__(self, repository: Repository):
        """Initialize ThreeWayMerger.

        Args:
            repository: Repository holding the commits to merge
        """
        self.repository = repository

    def _blob_or_empty(self, commit: str | None, path: str) -> str:
        if commit is None or not self.repository.has_blob(commit, path):
            return ""
        return self.repository.read_blob(commit, path)

    def merge(self, commit: Commit) -> dict[str, MergeResult]:
        """Merge the first two parents of a merge commit.

        Args:
            commit: Merge commit to recompute

        Returns:
            Mapping of path to MergeResult, sorted by path; empty if
            commit is not a merge
        """
        if not commit.is_merge:
            return {}

        ours, theirs = commit.parents[0], commit.parents[1]
        base = self.repository.merge_base(ours, theirs)

        if base is None:
            logger.debug(
                "No merge base, merging against empty base",
                commit=commit.sha,
            )
            paths = self.repository.changed_files(ours, theirs)
        else:
            paths = (
                self.repository.changed_files(base, ours)
                & self.repository.changed_files(base, theirs)
            )

        results = {}
        with tempfile.TemporaryDirectory(prefix="mergespace-") as tmp:
            for path in sorted(paths):
                result = self.merge_file(
                    Path(tmp),
                    path,
                    base=self._blob_or_empty(base, path),
                    ours=self._blob_or_empty(ours, path),
                    theirs=self._blob_or_empty(theirs, path),
                )
                if result is not None:
                    results[path] = result

        logger.debug(
            "Merged parents",
            commit=commit.sha,
            files=len(results),
            conflicting=sum(
                1 for result in results.values()
                if result.contains_conflicts()
            ),
        )
        return results

    def merge_file(
        self, tmp: Path, path: str, base: str, ours: str, theirs: str
    ) -> MergeResult | None:
        """Merge three versions of one file.

        Args:
            tmp: Scratch directory for the three input files
            path: Repository path the versions belong to
            base: Merge base version
            ours: First parent version
            theirs: Second parent version

        Returns:
            MergeResult, or None if git cannot merge the file
        """
        inputs = {}
        for label, content in (("base", base), ("ours", ours),
                               ("theirs", theirs)):
            inputs[label] = tmp / label
            inputs[label].write_text(content, encoding="utf-8", newline="")

        cmd = self.repository.command("merge_file", **inputs)
        result = self.repository.runner.execute(
            cmd,
            cwd=self.repository.workdir,
            timeout=self.repository.timeout,
            check=False,
        )

        if result.exited < 0 or result.exited > _MAX_CONFLICT_EXIT:
            logger.warn(
                f"Skipping {path}: git merge-file failed",
                exited=result.exited,
                stderr=result.stderr.strip(),
            )
            return None

        return MergeResult(
            path=path,
            content=result.stdout,
            conflicts=result.exited,
            ours_missing_eol=_missing_eol(ours),
            theirs_missing_eol=_missing_eol(theirs),
        )


def _missing_eol(content: str) -> bool:
    return bool(content) and not content.endswith("\n")
