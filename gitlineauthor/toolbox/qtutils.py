# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

from gitlineauthor.qt import *

logger = logging.getLogger(__name__)


def lerp(v1, v2, c=.5, cmin=0.0, cmax=1.0):
    p = (c-cmin) / (cmax-cmin)
    p = max(p, 0)
    p = min(p, 1)
    v = v2*p + v1*(1-p)
    return v


def mixColors(c1: QColor, c2: QColor, ratio=.5, rmin=0.0, rmax=1.0):
    return QColor.fromRgbF(
        lerp(c1.redF(),   c2.redF(),   ratio, rmin, rmax),
        lerp(c1.greenF(), c2.greenF(), ratio, rmin, rmax),
        lerp(c1.blueF(),  c2.blueF(),  ratio, rmin, rmax),
        lerp(c1.alphaF(), c2.alphaF(), ratio, rmin, rmax))


def parseColor(text: str, fallback: str) -> QColor:
    """ QColor from any notation Qt understands ("#78a0ff", "tomato"...), or the fallback if invalid. """
    color = QColor(text)
    if not color.isValid():
        logger.warning(f"Invalid color '{text}', using {fallback}")
        color = QColor(fallback)
    return color


def ansiBackground(color: QColor) -> str:
    """ 24-bit ANSI escape sequence that paints a terminal cell's background. """
    return f"\x1b[48;2;{color.red()};{color.green()};{color.blue()}m"


ANSI_RESET = "\x1b[0m"
