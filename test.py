#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import argparse
import os
import sys
from pathlib import Path

import pytest


def run():
    thisFile = Path(__file__)
    os.chdir(thisFile.parent)

    parser = argparse.ArgumentParser(description="Kick off GitLineAuthor test suite",
                                     epilog="Additional arguments are forwarded to pytest (see: pytest --help).")
    parser.add_argument("--cov", action="store_true", help="produce coverage report")
    parser.add_argument("--qt", default="pyqt6", choices=["pyqt6", "pyside6"], help="Qt bindings to use (pyqt6 by default)")
    parser.add_argument("-1", dest="single", action="store_true", help="run a single test at a time (no parallel tests)")
    args, forwardArgs = parser.parse_known_args()

    os.environ["QT_QPA_PLATFORM"] = "offscreen"

    if not args.single:
        forwardArgs = ["-n", "auto"] + forwardArgs

    if args.cov:
        forwardArgs = ["--cov=gitlineauthor", "--cov-report=term", "--cov-report=html"] + forwardArgs

    os.environ["PYTEST_QT_API"] = args.qt
    exitCode = pytest.main(forwardArgs)
    sys.exit(exitCode)


if __name__ == '__main__':
    run()
