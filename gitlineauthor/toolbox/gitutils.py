# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import re

FIRST_NAME_PATTERN = re.compile(r"(\S(\.?-|\.\s?|\s))*\S+")
TIMEZONE_PATTERN = re.compile(r"^([+-])(\d\d)(\d\d)$")


def nonEmptyWords(text: str) -> list[str]:
    return text.split()


def firstName(name: str) -> str:
    # Leading initials stay attached ("J. R. Doe" -> "J. R. Doe", "Jane Doe" -> "Jane")
    match = FIRST_NAME_PATTERN.match(name.strip())
    return match[0] if match is not None else name


def lastName(name: str) -> str:
    words = nonEmptyWords(name)
    return words[-1] if words else name


def shortHash(hexHash: str, chars: int = 7) -> str:
    return hexHash[:chars]


def removeEmailBrackets(email: str) -> str:
    return email.removeprefix("<").removesuffix(">")


def parseTimeOffset(tz: str) -> int:
    """
    Convert a git timezone token ("+0130", "-0800") to an offset in minutes.
    Malformed tokens count as UTC.
    """
    match = TIMEZONE_PATTERN.match(tz)
    if not match:
        return 0
    sign, hh, mm = match.groups()
    minutes = int(hh) * 60 + int(mm)
    return -minutes if sign == "-" else minutes
