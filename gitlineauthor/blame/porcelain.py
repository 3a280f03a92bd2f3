# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Parse the output of "git blame --porcelain".

    <hash> <origLine> <finalLine> [<groupSize>]   header, one per file line
    author Jane Doe                               detail lines (only the first
    author-mail <jane@example.com>                time a commit shows up, plus
    ...                                           "filename" at each group start)
    summary Initial commit
    filename hello.txt
    \t<line contents>                             content line ends the record

See https://git-scm.com/docs/git-blame#_the_porcelain_format
"""

from __future__ import annotations

import dataclasses
import logging
import re

from gitlineauthor.blame.model import Commit, LineAuthoring, Person, PreviousFile
from gitlineauthor.toolbox.gitutils import removeEmailBrackets

logger = logging.getLogger(__name__)

_headerPattern = re.compile(r"^([0-9a-f]+) (\d+) (\d+)(?: (\d+))?$")
_detailPattern = re.compile(r"^([a-z][a-z-]*)(?: (.*))?$")


class BlameParseError(ValueError):
    def __init__(self, message: str, lineNumber: int = 0):
        if lineNumber:
            message = f"blame transcript line {lineNumber}: {message}"
        super().__init__(message)
        self.lineNumber = lineNumber


@dataclasses.dataclass
class _PersonDraft:
    name: str | None = None
    email: str | None = None
    time: int | None = None
    tz: str | None = None

    def seal(self) -> Person | None:
        person = Person(self.name, self.email, self.time, self.tz)
        return None if person.empty else person


@dataclasses.dataclass
class _CommitDraft:
    hash: str
    headerLineNumber: int = 0
    summary: str | None = None
    author: _PersonDraft = dataclasses.field(default_factory=_PersonDraft)
    committer: _PersonDraft = dataclasses.field(default_factory=_PersonDraft)
    previousHash: str | None = None
    previousFilename: str | None = None
    filename: str | None = None

    def seal(self) -> Commit:
        if self.summary is None:
            raise BlameParseError(f"summary not provided for commit {self.hash}", self.headerLineNumber)

        # "filename" alone is just the path in this commit, not a rename
        previous = None
        if self.previousHash is not None:
            previous = PreviousFile(self.previousHash, self.previousFilename)

        return Commit(
            hash=self.hash,
            summary=self.summary,
            author=self.author.seal(),
            committer=self.committer.seal(),
            previous=previous,
            filename=self.filename)

    def setDetail(self, key: str, value: str, lineNumber: int):
        def parseTime():
            try:
                return int(value)
            except ValueError as exc:
                raise BlameParseError(f"bad timestamp for {key}: '{value}'", lineNumber) from exc

        if key == "summary":
            self.summary = value
        elif key == "author":
            self.author.name = value
        elif key == "author-mail":
            self.author.email = removeEmailBrackets(value)
        elif key == "author-time":
            self.author.time = parseTime()
        elif key == "author-tz":
            self.author.tz = value
        elif key == "committer":
            self.committer.name = value
        elif key == "committer-mail":
            self.committer.email = removeEmailBrackets(value)
        elif key == "committer-time":
            self.committer.time = parseTime()
        elif key == "committer-tz":
            self.committer.tz = value
        elif key == "previous":
            # previous <hash> <filename>
            previousHash, _dummy, filename = value.partition(" ")
            self.previousHash = previousHash
            self.previousFilename = filename or None
        elif key == "filename":
            self.filename = value
        else:
            # "boundary" and any keywords added by future versions of git
            pass


def parseGitBlamePorcelain(stdout: str) -> LineAuthoring:
    """
    Turn a complete porcelain blame transcript into a LineAuthoring.
    All or nothing: any inconsistency raises BlameParseError.
    """

    transcript = stdout.replace("\r\n", "\n").split("\n")

    # A trailing newline leaves one empty string at the end
    if transcript and transcript[-1] == "":
        transcript.pop()

    hashPerLine = [""]  # one-based; index 0 is a sentinel
    originalFileLineNrPerLine = [0]
    finalFileLineNrPerLine = [0]
    groupSizePerStartingLine: dict[int, int] = {}
    drafts: dict[str, _CommitDraft] = {}

    fileLine = 1
    currentDraft: _CommitDraft | None = None  # None while looking for a header

    for lineNumber, text in enumerate(transcript, start=1):
        if currentDraft is None:
            match = _headerPattern.match(text)
            if not match:
                raise BlameParseError(f"expected '<hash> <orig> <final> [<count>]' header, got '{text}'", lineNumber)

            commitHash, origNr, finalNr, groupSize = match.groups()

            if int(finalNr) != fileLine:
                raise BlameParseError(f"blame output is out of order: expected line {fileLine}, got {finalNr}", lineNumber)

            hashPerLine.append(commitHash)
            originalFileLineNrPerLine.append(int(origNr))
            finalFileLineNrPerLine.append(int(finalNr))
            if groupSize is not None:
                groupSizePerStartingLine[fileLine] = int(groupSize)

            try:
                currentDraft = drafts[commitHash]
            except KeyError:
                currentDraft = _CommitDraft(commitHash, lineNumber)
                drafts[commitHash] = currentDraft

        elif text.startswith("\t"):
            # Content line; the text itself doesn't matter here
            currentDraft = None
            fileLine += 1

        elif _headerPattern.match(text):
            raise BlameParseError(f"expected tab-prefixed content for line {fileLine}, got header '{text}'", lineNumber)

        else:
            match = _detailPattern.match(text)
            if not match:
                raise BlameParseError(f"expected detail line or tab-prefixed content, got '{text}'", lineNumber)
            key, value = match.groups()
            currentDraft.setDetail(key, value or "", lineNumber)

    if currentDraft is not None:
        raise BlameParseError(f"transcript ends before content of line {fileLine}", len(transcript))

    commits = {commitHash: draft.seal() for commitHash, draft in drafts.items()}

    return LineAuthoring(
        hashPerLine=tuple(hashPerLine),
        commits=commits,
        groupSizePerStartingLine=groupSizePerStartingLine,
        originalFileLineNrPerLine=tuple(originalFileLineNrPerLine),
        finalFileLineNrPerLine=tuple(finalFileLineNrPerLine))
