# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Turn authorship data into what a gutter shows next to each line:
commit hash, author name, date, and background color.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Iterator
from typing import NamedTuple

from gitlineauthor.blame import (
    Commit, LineAuthoring, LineAuthoringResult, UNTRACKED, Untracked, groupSpans, newestCommitInRange)
from gitlineauthor.coloring import AgeSampler, commitAgeDays, commitColor
from gitlineauthor.qt import *
from gitlineauthor.settings import AuthorDisplay, DateDisplay, LineAuthorPrefs, TimezoneDisplay
from gitlineauthor.toolbox.gitutils import firstName, lastName, shortHash

logger = logging.getLogger(__name__)

UNCOMMITTED_MARKER = "+++"
UNSUPPORTED_MARKER = "?"

# Widest plausible values, used to size the gutter before anything is rendered
_SAMPLE_NAME = "M" * 8
_SAMPLE_INITIALS = "MM"
_SAMPLE_DATE_SECS = 977_961_599  # 2000-12-27 23:59:59 UTC


class Placeholder(enum.Enum):
    Waiting = "..."
    "Authorship not computed yet."

    Untracked = UNCOMMITTED_MARKER
    "File isn't under version control; shown like uncommitted content."

    Stale = ""
    "Line isn't covered by the authorship data (file changed since it was blamed)."

    Unavailable = UNSUPPORTED_MARKER
    "Computing authorship failed."


@dataclasses.dataclass(frozen=True)
class UnsupportedOption:
    """ A display option with no implementation. Renders as a question mark. """
    option: enum.Enum

    def __str__(self):
        return UNSUPPORTED_MARKER


@dataclasses.dataclass(frozen=True)
class LineAuthorDisplay:
    displayHash: str | None
    displayName: str | None
    displayDate: str | UnsupportedOption | None
    backgroundColor: QColor
    copyableHash: str | None = None

    @property
    def text(self) -> str:
        """ Visible parts joined by spaces. Hidden parts (None) are left out. """
        parts = (self.displayHash, self.displayName, self.displayDate)
        return " ".join(str(part) for part in parts if part is not None)


class GutterSpan(NamedTuple):
    startLine: int
    endLine: int
    placeholder: Placeholder | None = None


def formatName(commit: Commit, lineAuthoring: LineAuthoringResult, prefs: LineAuthorPrefs) -> str | None:
    style = prefs.authorDisplay

    if style == AuthorDisplay.Hide:
        return None

    if commit.isZeroCommit:
        return UNCOMMITTED_MARKER

    name = commit.author.name if commit.author is not None else None
    if not name:
        return ""

    if style == AuthorDisplay.Full:
        return name
    elif style == AuthorDisplay.FirstName:
        return firstName(name)
    elif style == AuthorDisplay.LastName:
        return lastName(name)
    elif style == AuthorDisplay.Initials:
        if isinstance(lineAuthoring, LineAuthoring):
            return lineAuthoring.uniqueInitials.get(name, name)
        return name
    else:
        raise NotImplementedError(f"unsupported author display: {style}")


def formatDateTime(secsSinceEpoch: int, prefs: LineAuthorPrefs) -> str | UnsupportedOption | None:
    style = prefs.dateDisplay

    if style == DateDisplay.Hide:
        return None
    elif style == DateDisplay.NaturalLanguage:
        return UnsupportedOption(style)

    qdt = QDateTime.fromSecsSinceEpoch(secsSinceEpoch)
    if prefs.timezone == TimezoneDisplay.Utc:
        qdt = qdt.toUTC()

    return QLocale().toString(qdt, prefs.dateFormat())


def formatDate(commit: Commit, prefs: LineAuthorPrefs) -> str | UnsupportedOption | None:
    if prefs.dateDisplay == DateDisplay.Hide:
        return None

    if commit.isZeroCommit:
        return UNCOMMITTED_MARKER

    author = commit.author
    if author is None or author.time is None:
        return ""

    return formatDateTime(author.time, prefs)


def formatHash(commit: Commit, prefs: LineAuthorPrefs) -> str | None:
    if not prefs.showCommitHash:
        return None
    if commit.isZeroCommit:
        return UNCOMMITTED_MARKER
    return shortHash(commit.hash, prefs.shortHashChars)


def resolveLineAuthor(
        lineAuthoring: LineAuthoringResult,
        start: int,
        end: int,
        prefs: LineAuthorPrefs,
        ageSampler: AgeSampler | None = None,
        now: float | None = None,
) -> LineAuthorDisplay:
    """
    Gutter contents for lines start..end (a single line if start == end).

    If the range isn't covered by the authorship data, the Stale placeholder
    is returned instead. The age of every resolved commit is fed to the
    sampler, if any.
    """

    commit = newestCommitInRange(lineAuthoring, start, end)

    if commit is None:
        return placeholderDisplay(Placeholder.Stale, prefs)

    if ageSampler is not None:
        ageSampler.record(commitAgeDays(commit, prefs.maxAgeDays(), now))

    return LineAuthorDisplay(
        displayHash=formatHash(commit, prefs),
        displayName=formatName(commit, lineAuthoring, prefs),
        displayDate=formatDate(commit, prefs),
        backgroundColor=commitColor(commit, prefs, now),
        copyableHash=None if commit.isZeroCommit else commit.hash)


def placeholderDisplay(placeholder: Placeholder, prefs: LineAuthorPrefs, ageSampler: AgeSampler | None = None) -> LineAuthorDisplay:
    if placeholder == Placeholder.Untracked:
        return resolveLineAuthor(UNTRACKED, 1, 1, prefs)

    if placeholder == Placeholder.Waiting:
        sampler = ageSampler if ageSampler is not None else AgeSampler()
        color = sampler.waitingColor(prefs)
    else:
        color = QColor(Qt.GlobalColor.transparent)

    # Put the placeholder text in a single slot so it shows up exactly once
    return LineAuthorDisplay(
        displayHash=None,
        displayName=placeholder.value,
        displayDate=None,
        backgroundColor=color)


def gutterSpans(lineAuthoring: LineAuthoringResult, docLineCount: int, lastLineEmpty: bool = False) -> Iterator[GutterSpan]:
    """
    Split a document into runs of lines that share one gutter caption.

    Yields one span per blame group, clipped to the displayed lines. Each
    line past the end of the authorship data, and a trailing empty line,
    gets a single-line span with the Stale placeholder.
    """

    if docLineCount <= 0:
        return

    lastDisplayedLine = docLineCount - 1 if lastLineEmpty else docLineCount

    if isinstance(lineAuthoring, Untracked):
        if lastDisplayedLine >= 1:
            yield GutterSpan(1, lastDisplayedLine)
        line = lastDisplayedLine + 1
    else:
        line = 1
        for group in groupSpans(lineAuthoring):
            if group.startLine > lastDisplayedLine:
                break
            endLine = min(group.endLine, lastDisplayedLine)
            yield GutterSpan(group.startLine, endLine)
            line = endLine + 1

    for line in range(line, docLineCount + 1):
        yield GutterSpan(line, line, Placeholder.Stale)


class LongestRendered:
    """
    Remembers the longest gutter text rendered with the current prefs, so
    that empty gutters can reserve the same width and the layout doesn't jump.
    """

    def __init__(self):
        self.text = ""
        self.prefsFingerprint = None

    def update(self, text: str, prefs: LineAuthorPrefs):
        fingerprint = _displayFingerprint(prefs)
        if fingerprint != self.prefsFingerprint:
            self.text = ""
            self.prefsFingerprint = fingerprint
        if len(text) > len(self.text):
            self.text = text

    def clear(self):
        self.text = ""
        self.prefsFingerprint = None

    def spacerText(self, prefs: LineAuthorPrefs) -> str:
        if self.text and self.prefsFingerprint == _displayFingerprint(prefs):
            return self.text
        return sampleGutterText(prefs)


def _displayFingerprint(prefs: LineAuthorPrefs):
    return (prefs.showCommitHash, prefs.shortHashChars, prefs.authorDisplay,
            prefs.dateDisplay, prefs.dateCustomFormat, prefs.timezone)


def sampleGutterText(prefs: LineAuthorPrefs) -> str:
    """ Plausible widest gutter text for these prefs, before any real data comes in. """
    sampleHash = "0" * prefs.shortHashChars if prefs.showCommitHash else None

    if prefs.authorDisplay == AuthorDisplay.Hide:
        sampleName = None
    elif prefs.authorDisplay == AuthorDisplay.Initials:
        sampleName = _SAMPLE_INITIALS
    else:
        sampleName = _SAMPLE_NAME

    sampleDate = formatDateTime(_SAMPLE_DATE_SECS, prefs)

    sample = LineAuthorDisplay(sampleHash, sampleName, sampleDate, QColor())
    return sample.text


def estimateGutterWidth(fontMetrics: QFontMetrics, prefs: LineAuthorPrefs, longest: LongestRendered | None = None) -> int:
    """ Horizontal room to reserve for the gutter, in pixels. """
    text = longest.spacerText(prefs) if longest is not None else sampleGutterText(prefs)
    return fontMetrics.horizontalAdvance(text + " ")


def spacerText(prefs: LineAuthorPrefs, longest: LongestRendered | None = None) -> str:
    """ Blank text as wide (in characters) as the longest caption, for lines that show no caption. """
    text = longest.spacerText(prefs) if longest is not None else sampleGutterText(prefs)
    return " " * len(text)
