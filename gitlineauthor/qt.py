# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
PyQt6/PySide6 compatibility layer
"""

# GitLineAuthor's preferred Qt binding is PyQt6, but you can use PySide6
# via the QT_API environment variable. Values recognized by QT_API:
#       pyqt6
#       pyside6
#
# If you're running unit tests, use the PYTEST_QT_API environment variable instead.
#
# Only QtCore and QtGui are pulled in: colors, dates, font metrics and
# processes are all we need, and none of them require a widget stack.

import logging as _logging
import os as _os
from contextlib import suppress as _suppress

from gitlineauthor.appconsts import *

_logger = _logging.getLogger(__name__)

_qtBindingOrder = ["pyqt6", "pyside6"]

QT6 = False
PYSIDE6 = False
PYQT6 = False

_qtBindingBootPref = _os.environ.get("QT_API", "").lower()

if _qtBindingBootPref:
    if _qtBindingBootPref not in _qtBindingOrder:
        # Don't touch default binding order if user passed in an unsupported binding name.
        _logger.warning(f"Unrecognized Qt binding name: '{_qtBindingBootPref}'")
    else:
        # Move preferred binding to front of list
        _qtBindingOrder.remove(_qtBindingBootPref)
        _qtBindingOrder.insert(0, _qtBindingBootPref)

_logger.debug(f"Qt binding order is: {_qtBindingOrder}")

QT_BINDING = ""
QT_BINDING_VERSION = ""

for _tentative in _qtBindingOrder:
    assert _tentative.islower()

    with _suppress(ImportError):
        if _tentative == "pyside6":
            from PySide6.QtCore import *
            from PySide6.QtGui import *
            from PySide6 import __version__ as QT_BINDING_VERSION
            QT_BINDING = "PySide6"
            QT6 = PYSIDE6 = True
        elif _tentative == "pyqt6":
            from PyQt6.QtCore import *
            from PyQt6.QtGui import *
            QT_BINDING_VERSION = PYQT_VERSION_STR
            QT_BINDING = "PyQt6"
            QT6 = PYQT6 = True
        else:
            _logger.warning(f"Unsupported Qt binding {_tentative}")

    if QT_BINDING:
        break  # We've successfully imported a binding, stop looking at candidates
else:
    raise ImportError("No Qt binding found. Please install PyQt6 or PySide6.")

# -----------------------------------------------------------------------------
# Patch some holes and incompatibilities in Qt bindings

# Match PyQt signal/slot names with PySide6
if PYQT6:
    Signal = pyqtSignal
    SignalInstance = pyqtBoundSignal
    Slot = pyqtSlot
