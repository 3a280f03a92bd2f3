# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import os

from gitlineauthor.__main__ import annotateCommandLineTool
from gitlineauthor.toolbox.qtutils import ANSI_RESET
from .util import *

T0 = 1700000000


@pytest.fixture
def cliRepo(tempDir):
    repo = makeRepo(tempDir)
    commitFile(repo, "hello.txt", "hello\nworld\n", "Initial commit", makeSignature("Jane Doe", T0 - 10 * 86400))
    commitFile(repo, "hello.txt", "hello\nmonde\n", "Say hello in French", makeSignature("Joe Smith", T0))

    prefsPath = os.path.join(tempDir.name, "lineauthor.json")
    writeFile(prefsPath, json.dumps({"timezone": "utc"}))

    return os.path.join(repo.workdir, "hello.txt"), prefsPath


def testAnnotateFile(qtbot, capsys, cliRepo):
    path, prefsPath = cliRepo

    assert annotateCommandLineTool([path, "--prefs", prefsPath, "--color", "never"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert out[0].startswith("Jane Doe 2023-11-04 ")
    assert out[0].endswith("1 hello")
    assert out[1].startswith("Joe Smith 2023-11-14 ")
    assert out[1].endswith("2 monde")
    assert ANSI_RESET not in "".join(out)


def testAnnotateWithOptions(qtbot, capsys, cliRepo):
    path, prefsPath = cliRepo

    args = [path, "--prefs", prefsPath, "--hash", "--author", "initials", "--date", "hide", "--color", "always"]
    assert annotateCommandLineTool(args) == 0

    out = capsys.readouterr().out.splitlines()
    assert "\x1b[48;2;" in out[0]
    assert " JD" in out[0]
    assert " JS" in out[1]


def testAnnotateRange(qtbot, capsys, cliRepo):
    path, prefsPath = cliRepo

    assert annotateCommandLineTool([path, "--prefs", prefsPath, "-L", "1,2"]) == 0
    assert capsys.readouterr().out.strip() == "Joe Smith 2023-11-14"

    assert annotateCommandLineTool([path, "--prefs", prefsPath, "-L", "1"]) == 0
    assert capsys.readouterr().out.strip() == "Jane Doe 2023-11-04"


def testAnnotateUncommittedLines(qtbot, capsys, cliRepo):
    path, prefsPath = cliRepo
    writeFile(path, "hello\nmonde\nciao\n")

    assert annotateCommandLineTool([path, "--prefs", prefsPath, "--color", "never"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 3
    assert out[2].startswith("+++ +++ ")
    assert out[2].endswith("3 ciao")


def testAnnotateOutsideRepo(qtbot, capsys, tempDir):
    path = os.path.join(tempDir.name, "loose.txt")
    writeFile(path, "hi\n")
    assert annotateCommandLineTool([path]) == 2
    assert "not in a git repository" in capsys.readouterr().err


def testAnnotateMissingFile(qtbot, capsys, cliRepo):
    path, prefsPath = cliRepo
    missing = os.path.join(os.path.dirname(path), "missing.txt")
    assert annotateCommandLineTool([missing, "--prefs", prefsPath]) == 2
    assert "no such file" in capsys.readouterr().err
