# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from functools import cached_property
from types import MappingProxyType
from typing import NamedTuple

from gitlineauthor.blame.initials import collectAuthors, computeUniqueInitials
from gitlineauthor.toolbox.gitutils import parseTimeOffset

ZERO_HASH_PATTERN = re.compile(r"^0*$")

ZERO_HASH = "0" * 40


class LineAuthoringKey(NamedTuple):
    """
    Identifies one committed file state. Several editors looking at the same
    unchanged file share the LineAuthoring stored under this key.
    """
    headRevision: str
    contentHash: str
    path: str

    @staticmethod
    def make(headRevision: str, contentHash: str, path: str) -> LineAuthoringKey | None:
        if not headRevision or not contentHash or not path:
            return None
        return LineAuthoringKey(headRevision, contentHash, path)

    def __str__(self):
        return f"head{self.headRevision}-obj{self.contentHash}-path{self.path}"


@dataclasses.dataclass(frozen=True)
class Person:
    name: str | None = None
    email: str | None = None
    time: int | None = None
    tz: str | None = None

    @property
    def offset(self) -> int:
        """ Timezone offset in minutes. """
        return parseTimeOffset(self.tz) if self.tz else 0

    @property
    def empty(self) -> bool:
        return self.name is None and self.email is None and self.time is None and self.tz is None


@dataclasses.dataclass(frozen=True)
class PreviousFile:
    commitHash: str | None = None
    filename: str | None = None


@dataclasses.dataclass(frozen=True)
class Commit:
    hash: str
    summary: str
    author: Person | None = None
    committer: Person | None = None
    previous: PreviousFile | None = None
    filename: str | None = None
    "Path of the file in this commit."

    @property
    def isZeroCommit(self) -> bool:
        """ True for content that isn't committed yet (git reports it under an all-zero hash). """
        return bool(ZERO_HASH_PATTERN.match(self.hash))

    @property
    def authoringMinute(self) -> int:
        """
        Author time shifted by the author's recorded timezone, truncated to
        the minute. Commits without an author time sort as oldest.
        """
        author = self.author
        if author is None or author.time is None:
            return 0
        return (author.time + author.offset * 60) // 60


ZERO_COMMIT = Commit(ZERO_HASH, "Not Committed Yet")
"""
Stand-in commit for lines with no authorship data (untracked files).
"""


class Untracked:
    """
    The file isn't under version control: there's no authorship data, only a
    placeholder to show. Use the UNTRACKED singleton.
    """

    def __repr__(self):
        return "UNTRACKED"


UNTRACKED = Untracked()


@dataclasses.dataclass(frozen=True, eq=False)
class LineAuthoring:
    """
    Authorship index of one file, as produced by parsing a blame transcript.

    Per-line sequences are 1-based: index 0 holds a sentinel so that
    `hashPerLine[n]` is the commit for line n.

    Never mutated after parsing. Caches compare these by LineAuthoringKey,
    not by contents.
    """

    hashPerLine: tuple[str, ...]
    commits: Mapping[str, Commit]
    groupSizePerStartingLine: Mapping[int, int]
    originalFileLineNrPerLine: tuple[int, ...]
    finalFileLineNrPerLine: tuple[int, ...]

    def __post_init__(self):
        # Freeze mappings handed in by the parser
        object.__setattr__(self, "commits", MappingProxyType(dict(self.commits)))
        object.__setattr__(self, "groupSizePerStartingLine", MappingProxyType(dict(self.groupSizePerStartingLine)))

    def __repr__(self):
        return f"LineAuthoring({self.lineCount} lines, {len(self.commits)} commits)"

    @property
    def lineCount(self) -> int:
        return len(self.hashPerLine) - 1

    def hasLine(self, line: int) -> bool:
        return 1 <= line <= self.lineCount

    def hashAt(self, line: int) -> str:
        if not self.hasLine(line):
            raise IndexError(f"line {line} out of range (1-{self.lineCount})")
        return self.hashPerLine[line]

    def commitAt(self, line: int) -> Commit:
        return self.commits[self.hashAt(line)]

    def groupSize(self, startingLine: int) -> int | None:
        return self.groupSizePerStartingLine.get(startingLine)

    @cached_property
    def authors(self) -> frozenset[str]:
        """ Distinct author names, excluding uncommitted content. """
        return collectAuthors(self.commits.values())

    @cached_property
    def uniqueInitials(self) -> Mapping[str, str]:
        """ Collision-free abbreviation for each author, computed on first use. """
        return MappingProxyType(computeUniqueInitials(self.authors))


LineAuthoringResult = LineAuthoring | Untracked
