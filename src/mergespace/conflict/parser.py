"""Parse git conflict markers into structured data."""

from __future__ import annotations

from dataclasses import dataclass

START_MARKER = "<<<<<<<"
BASE_MARKER = "|||||||"
SEPARATOR = "======="
END_MARKER = ">>>>>>>"


@dataclass(frozen=True)
class Conflict:
    """One conflict hunk.

    Section contents keep their line endings, so that joining the
    stable text with a chosen section rebuilds the file exactly.

    git merge-file terminates a section that ended its file without
    a newline. ours_missing_eol and theirs_missing_eol mark such a
    section, so the newline is dropped again wherever that section
    ends a candidate.
    """

    ours_content: str
    theirs_content: str
    base_content: str | None
    ours_ref: str
    theirs_ref: str
    line: int
    ours_missing_eol: bool = False
    theirs_missing_eol: bool = False

    def candidates(self) -> list[str]:
        """Syntactically distinct ways to resolve this hunk.

        Returns:
            ours, theirs, ours followed by theirs, and theirs
            followed by ours, with duplicates dropped (first
            occurrence wins)
        """
        ours, theirs = self.ours_content, self.theirs_content
        ours_last = _strip_eol(ours) if self.ours_missing_eol else ours
        theirs_last = (
            _strip_eol(theirs) if self.theirs_missing_eol else theirs
        )
        return list(dict.fromkeys(
            [ours_last, theirs_last, ours + theirs_last, theirs + ours_last]
        ))


def _strip_eol(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


Segment = str | Conflict


def _is_separator(line: str) -> bool:
    return line.rstrip("\r\n") == SEPARATOR


def parse_segments(file_content: str) -> list[Segment]:
    """Split merged file content into stable text and conflicts.

    Args:
        file_content: Full file content with conflict markers

    Returns:
        Stable text chunks (str) and Conflict hunks in file order;
        no two str chunks are adjacent

    Raises:
        ValueError: If conflict markers are malformed
    """
    segments: list[Segment] = []
    stable: list[str] = []
    lines = file_content.splitlines(keepends=True)
    i = 0

    while i < len(lines):
        line = lines[i]

        if not line.startswith(START_MARKER):
            stable.append(line)
            i += 1
            continue

        ours_ref = line[len(START_MARKER):].strip()

        # diff3 format carries a base section before the separator
        base_idx = None
        for j in range(i + 1, len(lines)):
            if lines[j].startswith(BASE_MARKER):
                base_idx = j
                break
            elif _is_separator(lines[j]) or lines[j].startswith(START_MARKER):
                break

        separator_idx = None
        for j in range((base_idx if base_idx else i) + 1, len(lines)):
            if _is_separator(lines[j]):
                separator_idx = j
                break

        if separator_idx is None:
            raise ValueError(
                f"Malformed conflict at line {i + 1}: "
                f"no separator found"
            )

        end_idx = None
        theirs_ref = None
        for j in range(separator_idx + 1, len(lines)):
            if lines[j].startswith(END_MARKER):
                end_idx = j
                theirs_ref = lines[j][len(END_MARKER):].strip()
                break
            elif lines[j].startswith(START_MARKER):
                break

        if end_idx is None:
            raise ValueError(
                f"Malformed conflict at line {i + 1}: "
                f"no end marker found"
            )

        if base_idx is not None:
            ours_content = "".join(lines[i + 1:base_idx])
            base_content = "".join(lines[base_idx + 1:separator_idx])
        else:
            ours_content = "".join(lines[i + 1:separator_idx])
            base_content = None
        theirs_content = "".join(lines[separator_idx + 1:end_idx])

        if stable:
            segments.append("".join(stable))
            stable = []

        segments.append(Conflict(
            ours_content=ours_content,
            theirs_content=theirs_content,
            base_content=base_content,
            ours_ref=ours_ref or "ours",
            theirs_ref=theirs_ref or "theirs",
            line=i + 1,
        ))

        i = end_idx + 1

    if stable:
        segments.append("".join(stable))

    return segments


def parse(file_content: str) -> list[Conflict]:
    """Parse git conflict markers from file content.

    Args:
        file_content: Full file content with conflict markers

    Returns:
        List of Conflict objects (one per conflict hunk in file)

    Raises:
        ValueError: If conflict markers are malformed
    """
    return [
        segment for segment in parse_segments(file_content)
        if isinstance(segment, Conflict)
    ]
