# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import os
import re

from gitlineauthor.prefsfile import PrefsFile
from gitlineauthor.qt import *
from gitlineauthor.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL
from gitlineauthor.toolbox.qtutils import parseColor

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.2425
DAYS_PER_MONTH = DAYS_PER_YEAR / 12

DEFAULT_MAX_AGE = "1y"
DEFAULT_COLOR_NEW = "#78a0ff"
DEFAULT_COLOR_OLD = "#ff9696"

DATE_FORMAT = "yyyy-MM-dd"
DATETIME_FORMAT = "yyyy-MM-dd HH:mm"

_maxAgePattern = re.compile(r"^(?:(\d+)y)?(?:(\d+)m)?(?:(\d+)w)?(?:(\d+)d)?$", re.IGNORECASE)


class AuthorDisplay(enum.StrEnum):
    Hide = "hide"
    Full = "full"
    FirstName = "first name"
    LastName = "last name"
    Initials = "initials"


class DateDisplay(enum.StrEnum):
    Hide = "hide"
    Date = "date"
    DateTime = "datetime"
    NaturalLanguage = "natural language"
    Custom = "custom"


class TimezoneDisplay(enum.StrEnum):
    Local = "local"
    Utc = "utc"


class LoggingLevel(enum.IntEnum):
    Benchmark = BENCHMARK_LOGGING_LEVEL
    Debug = logging.DEBUG
    Info = logging.INFO
    Warning = logging.WARNING


def describeMaxAge(text: str) -> float | None:
    """
    Parse a max-age duration such as "1y", "6m", "2w3d" (years, months,
    weeks, days, in that order, case-insensitive) into a number of days.

    Returns None if the text isn't a valid duration or if it's shorter than a day.
    """
    match = _maxAgePattern.match(text.strip())
    if not match or not any(match.groups()):
        return None

    years, months, weeks, days = (int(g) if g else 0 for g in match.groups())
    total = years * DAYS_PER_YEAR + months * DAYS_PER_MONTH + weeks * 7 + days

    if total < 1:
        return None
    return total


@dataclasses.dataclass
class LineAuthorPrefs(PrefsFile):
    _filename = "lineauthor.json"

    showCommitHash              : bool                  = False
    shortHashChars              : int                   = 7
    authorDisplay               : AuthorDisplay         = AuthorDisplay.Full
    dateDisplay                 : DateDisplay           = DateDisplay.Date
    dateCustomFormat            : str                   = DATETIME_FORMAT
    timezone                    : TimezoneDisplay       = TimezoneDisplay.Local
    coloringMaxAge              : str                   = DEFAULT_MAX_AGE
    colorNew                    : str                   = DEFAULT_COLOR_NEW
    colorOld                    : str                   = DEFAULT_COLOR_OLD
    verbosity                   : LoggingLevel          = LoggingLevel.Debug if APP_TESTMODE else LoggingLevel.Warning

    @classmethod
    def loadFrom(cls, path: str = ""):
        """
        Load prefs from a JSON file. Without a path, use the file in the
        application's config directory. A missing file yields the defaults.
        """
        prefs = cls()
        if path:
            prefs._parentDir = os.path.dirname(os.path.abspath(path))
            prefs._filename = os.path.basename(path)
        prefs.load()
        return prefs

    def maxAgeDays(self) -> float:
        days = describeMaxAge(self.coloringMaxAge)
        if days is None:
            logger.warning(f"Invalid coloring max age '{self.coloringMaxAge}', using {DEFAULT_MAX_AGE}")
            days = describeMaxAge(DEFAULT_MAX_AGE)
        return days

    def newColor(self) -> QColor:
        return parseColor(self.colorNew, DEFAULT_COLOR_NEW)

    def oldColor(self) -> QColor:
        return parseColor(self.colorOld, DEFAULT_COLOR_OLD)

    def dateFormat(self) -> str:
        assert self.dateDisplay in (DateDisplay.Date, DateDisplay.DateTime, DateDisplay.Custom)
        if self.dateDisplay == DateDisplay.Date:
            return DATE_FORMAT
        elif self.dateDisplay == DateDisplay.DateTime:
            return DATETIME_FORMAT
        else:
            return self.dateCustomFormat
