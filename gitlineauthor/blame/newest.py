# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import NamedTuple

from gitlineauthor.blame.model import Commit, LineAuthoring, LineAuthoringResult, Untracked, ZERO_COMMIT

logger = logging.getLogger(__name__)


def newestCommitInRange(result: LineAuthoringResult, start: int, end: int) -> Commit | None:
    """
    Pick the commit that represents lines start..end (inclusive, 1-based).

    Uncommitted lines take precedence over everything else. Otherwise the
    commit with the newest authoring minute wins; on a tie, the first line
    in the range wins.

    Returns None if the range goes past the end of the LineAuthoring (the
    file grew since it was blamed). Untracked files always resolve to ZERO_COMMIT.
    """

    assert start <= end, f"bad range {start}..{end}"

    if isinstance(result, Untracked):
        return ZERO_COMMIT

    assert isinstance(result, LineAuthoring)

    if start < 1 or end > result.lineCount:
        return None

    newest = result.commitAt(start)

    for line in range(start + 1, end + 1):
        if newest.isZeroCommit:
            break
        commit = result.commitAt(line)
        if commit.isZeroCommit or commit.authoringMinute > newest.authoringMinute:
            newest = commit

    return newest


class GroupSpan(NamedTuple):
    """ Run of consecutive lines attributed to the same commit. """
    startLine: int
    size: int
    commitHash: str

    @property
    def endLine(self) -> int:
        return self.startLine + self.size - 1


def groupSpans(lineAuthoring: LineAuthoring) -> Iterator[GroupSpan]:
    """
    Walk groupSizePerStartingLine from line 1.
    Stops early (with a warning) if a group's starting line has no size entry.
    """
    line = 1
    while line <= lineAuthoring.lineCount:
        size = lineAuthoring.groupSize(line)
        if not size:
            logger.warning(f"No group starts at line {line}, stopping")
            return
        yield GroupSpan(line, size, lineAuthoring.hashAt(line))
        line += size
