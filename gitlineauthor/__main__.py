# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations as _annotations

import logging as _logging
import os
import sys


def _parseLineRange(text: str) -> tuple[int, int]:
    from argparse import ArgumentTypeError

    startText, _dummy, endText = text.partition(",")
    try:
        start = int(startText)
        end = int(endText) if endText else start
    except ValueError as exc:
        raise ArgumentTypeError(f"expected START[,END], got '{text}'") from exc
    if start < 1 or end < start:
        raise ArgumentTypeError(f"bad line range '{text}'")
    return start, end


def makeArgumentParser():
    from argparse import ArgumentParser

    from gitlineauthor.appconsts import APP_DISPLAY_NAME, APP_VERSION
    from gitlineauthor.settings import AuthorDisplay, DateDisplay

    parser = ArgumentParser(prog="gitlineauthor", description=f"{APP_DISPLAY_NAME} - who last changed each line, and when")
    parser.add_argument("path", help="File to annotate")
    parser.add_argument("--version", action="version", version=f"{APP_DISPLAY_NAME} {APP_VERSION}")
    parser.add_argument("--prefs", default="", help="JSON preferences file (default: the one in the user's config directory)")
    parser.add_argument("--hash", action="store_true", default=None, help="Show commit hashes")
    parser.add_argument("--author", choices=[str(v) for v in AuthorDisplay], help="How to show author names")
    parser.add_argument("--date", choices=[str(v) for v in DateDisplay], help="How to show dates")
    parser.add_argument("--date-format", help="Qt date-time format for --date=custom")
    parser.add_argument("--utc", action="store_true", default=None, help="Show dates in UTC instead of local time")
    parser.add_argument("--max-age", help="Age at which lines get the 'old' color, e.g. 1y, 6m, 2w3d")
    parser.add_argument("--color", choices=["auto", "always", "never"], default="auto", help="Paint line backgrounds")
    parser.add_argument("-L", "--lines", type=_parseLineRange, metavar="START[,END]",
                        help="Only show the newest commit among these lines")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeat for more)")
    return parser


def applyOverrides(prefs, args):
    from gitlineauthor.settings import AuthorDisplay, DateDisplay, TimezoneDisplay

    if args.hash is not None:
        prefs.showCommitHash = args.hash
    if args.author:
        prefs.authorDisplay = AuthorDisplay(args.author)
    if args.date:
        prefs.dateDisplay = DateDisplay(args.date)
    if args.date_format:
        prefs.dateCustomFormat = args.date_format
    if args.utc is not None:
        prefs.timezone = TimezoneDisplay.Utc
    if args.max_age:
        prefs.coloringMaxAge = args.max_age


def annotateCommandLineTool(argv: list[str] | None = None) -> int:
    from gitlineauthor.appconsts import APP_SYSTEM_NAME
    from gitlineauthor.display import gutterSpans, placeholderDisplay
    from gitlineauthor.gitdriver import BlameSource
    from gitlineauthor.provider import LineAuthorProvider
    from gitlineauthor.qt import QCoreApplication
    from gitlineauthor.settings import LineAuthorPrefs, LoggingLevel
    from gitlineauthor.toolbox.qtutils import ANSI_RESET, ansiBackground

    args = makeArgumentParser().parse_args(argv)

    app = QCoreApplication.instance() or QCoreApplication([sys.argv[0]])
    app.setApplicationName(APP_SYSTEM_NAME)

    prefs = LineAuthorPrefs.loadFrom(args.prefs)
    applyOverrides(prefs, args)

    verbosity = [prefs.verbosity, LoggingLevel.Info, LoggingLevel.Debug, LoggingLevel.Benchmark]
    _logging.basicConfig(
        stream=sys.stderr,
        level=verbosity[min(args.verbose, len(verbosity) - 1)],
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")
    _logging.captureWarnings(True)

    path = os.path.abspath(args.path)

    if not os.path.isfile(path):
        print(f"gitlineauthor: no such file: {args.path}", file=sys.stderr)
        return 2

    try:
        source = BlameSource(path)
    except (FileNotFoundError, ValueError) as exc:
        print(f"gitlineauthor: {exc}", file=sys.stderr)
        return 2

    provider = LineAuthorProvider(source, prefs)
    result = provider.compute(path)
    key = provider.makeKey(path)

    if result is None:
        print(f"gitlineauthor: line authoring unavailable for {args.path}", file=sys.stderr)
        return 1

    if args.lines:
        start, end = args.lines
        authorDisplay = provider.display(key, start, end)
        print(authorDisplay.text)
        return 0

    with open(path, encoding="utf-8", errors="replace") as f:
        textLines = f.read().split("\n")

    lastLineEmpty = textLines[-1] == ""
    useColor = args.color == "always" or (args.color == "auto" and sys.stdout.isatty())

    rows = []
    for span in gutterSpans(result, len(textLines), lastLineEmpty):
        if span.placeholder is not None:
            authorDisplay = placeholderDisplay(span.placeholder, prefs)
        else:
            authorDisplay = provider.display(key, span.startLine, span.endLine)
        for line in range(span.startLine, span.endLine + 1):
            caption = authorDisplay.text if line == span.startLine else ""
            rows.append((line, caption, authorDisplay))

    if lastLineEmpty:
        rows = [row for row in rows if row[0] < len(textLines)]

    width = max((len(caption) for _line, caption, _display in rows), default=0)
    width = max(width, len(provider.spacerText()))

    for line, caption, authorDisplay in rows:
        gutter = caption.ljust(width)
        if useColor and authorDisplay.backgroundColor.alpha() > 0:
            gutter = ansiBackground(authorDisplay.backgroundColor) + gutter + ANSI_RESET
        print(f"{gutter} {line:>4} {textLines[line - 1]}")

    return 0


if __name__ == "__main__":
    sys.exit(annotateCommandLineTool())
