# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Background color of a line, from the age of the commit that last touched it.

Recent commits get colorNew, commits older than the max age get colorOld.
In between, the age is eased so that recent history spreads over more of
the gradient than old history does.
"""

import logging
import statistics
import time

from gitlineauthor.blame.model import Commit
from gitlineauthor.qt import *
from gitlineauthor.settings import LineAuthorPrefs
from gitlineauthor.toolbox.qtutils import mixColors

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

AGE_EASING_EXPONENT = 1 / 2.3

AGE_SAMPLER_CAPACITY = 50


def commitAgeDays(commit: Commit, maxAgeDays: float, now: float | None = None) -> float:
    """
    Days elapsed since the commit was authored.
    Uncommitted lines are brand new. Commits without an author time count as the oldest.
    """
    if commit.isZeroCommit:
        return 0.0

    author = commit.author
    if author is None or author.time is None:
        return maxAgeDays

    if now is None:
        now = time.time()

    return (now - author.time) / SECONDS_PER_DAY


def ageToColor(ageDays: float, maxAgeDays: float, colorNew: QColor, colorOld: QColor) -> QColor:
    x = min(max(ageDays / maxAgeDays, 0.0), 1.0)
    x **= AGE_EASING_EXPONENT
    return mixColors(colorNew, colorOld, x)


def commitColor(commit: Commit, prefs: LineAuthorPrefs, now: float | None = None) -> QColor:
    maxAgeDays = prefs.maxAgeDays()
    ageDays = commitAgeDays(commit, maxAgeDays, now)
    return ageToColor(ageDays, maxAgeDays, prefs.newColor(), prefs.oldColor())


def previewColors(prefs: LineAuthorPrefs) -> tuple[QColor, QColor]:
    """ Both ends of the gradient, for showing the current color settings. """
    maxAgeDays = prefs.maxAgeDays()
    newColor, oldColor = prefs.newColor(), prefs.oldColor()
    return (ageToColor(0, maxAgeDays, newColor, oldColor),
            ageToColor(maxAgeDays, maxAgeDays, newColor, oldColor))


class AgeSampler:
    """
    Ring buffer of recently rendered ages (in days).

    Before a file's authorship is known, its gutter is painted with the
    median of these samples so the first paint is close to what follows.
    """

    def __init__(self, capacity: int = AGE_SAMPLER_CAPACITY):
        assert capacity > 0
        self.capacity = capacity
        self.samples: list[float] = []
        self.nextSlot = 0

    def __len__(self):
        return len(self.samples)

    def record(self, ageDays: float):
        if len(self.samples) < self.capacity:
            self.samples.append(ageDays)
        else:
            self.samples[self.nextSlot] = ageDays
        self.nextSlot = (self.nextSlot + 1) % self.capacity

    def medianAge(self, maxAgeDays: float) -> float:
        if not self.samples:
            return maxAgeDays / 2
        return statistics.median(self.samples)

    def clear(self):
        self.samples.clear()
        self.nextSlot = 0

    def waitingColor(self, prefs: LineAuthorPrefs) -> QColor:
        maxAgeDays = prefs.maxAgeDays()
        return ageToColor(self.medianAge(maxAgeDays), maxAgeDays, prefs.newColor(), prefs.oldColor())
