# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path

import pygit2

from gitlineauthor.blame import LineAuthoringKey, UNTRACKED, Untracked
from gitlineauthor.qt import *

logger = logging.getLogger(__name__)


class BlameProcessError(RuntimeError):
    def __init__(self, message: str, exitCode: int = -1, stderr: str = ""):
        super().__init__(message)
        self.exitCode = exitCode
        self.stderr = stderr


class GitDriver(QProcess):
    """ A git command running in a repository's working directory. """

    _commandStem = ["git"]

    @classmethod
    def setGitPath(cls, gitPath: str):
        cls._commandStem = shlex.split(gitPath)

    def __init__(self, *args: str, directory: str = "", parent: QObject | None = None):
        super().__init__(parent)

        self.setObjectName("GitDriver")

        tokens = GitDriver._commandStem + list(args)
        self.setProgram(tokens[0])
        self.setArguments(tokens[1:])
        if directory:
            self.setWorkingDirectory(directory)

        self._stdout = None

    def commandLine(self) -> str:
        return shlex.join([self.program()] + self.arguments())

    def stdoutScrollback(self) -> str:
        if self._stdout is None:
            self._stdout = self.readAllStandardOutput().data().decode("utf-8", errors="replace")
        return self._stdout

    def stderrScrollback(self) -> str:
        return self.readAllStandardError().data().decode("utf-8", errors="replace").strip()

    def failure(self) -> BlameProcessError | None:
        """ Describe why the process didn't succeed, or None if it exited cleanly. """
        if self.error() == QProcess.ProcessError.FailedToStart:
            return BlameProcessError(f"{self.program()} failed to start: {self.errorString()}")
        if self.exitStatus() != QProcess.ExitStatus.NormalExit:
            return BlameProcessError(f"{self.program()} crashed: {self.errorString()}")
        if self.exitCode() != 0:
            stderr = self.stderrScrollback()
            return BlameProcessError(f"{self.commandLine()} exited with code {self.exitCode()}: {stderr}",
                                     self.exitCode(), stderr)
        return None

    def runSync(self) -> str:
        logger.info(f"runSync: {self.commandLine()}")
        self.start()
        self.waitForFinished(-1)
        failure = self.failure()
        if failure is not None:
            raise failure
        return self.stdoutScrollback()


class BlameSource:
    """
    Everything line authoring needs from a repository: which revision is
    checked out, the state of a file, and its blame transcript.
    """

    def __init__(self, path: str):
        if os.path.isfile(path):
            path = os.path.dirname(os.path.abspath(path))

        gitDir = pygit2.discover_repository(path)
        if gitDir is None:
            raise FileNotFoundError(f"not in a git repository: {path}")

        self.repo = pygit2.Repository(gitDir)
        if self.repo.is_bare:
            raise ValueError(f"bare repository has no working directory: {gitDir}")

        self.workdir = os.path.realpath(self.repo.workdir)

    def relativePath(self, path: str) -> str:
        """ Path relative to the working directory, with forward slashes (the way git stores it). """
        absPath = os.path.realpath(os.path.join(self.workdir, path))
        return Path(os.path.relpath(absPath, self.workdir)).as_posix()

    def headRevision(self) -> str:
        """ Hash of the commit at HEAD, or an empty string if HEAD is unborn. """
        if self.repo.head_is_unborn:
            return ""
        return str(self.repo.head.target)

    def contentHash(self, path: str) -> str:
        """ Blob hash of the file as it is on disk, or an empty string if unreadable. """
        absPath = os.path.join(self.workdir, self.relativePath(path))
        try:
            return str(pygit2.hashfile(absPath))
        except OSError as exc:
            logger.info(f"Can't hash {absPath}: {exc}")
            return ""

    def isTracked(self, path: str) -> bool:
        self.repo.index.read(force=False)
        return self.relativePath(path) in self.repo.index

    def makeKey(self, path: str) -> LineAuthoringKey | None:
        return LineAuthoringKey.make(self.headRevision(), self.contentHash(path), self.relativePath(path))

    def blameProcess(self, path: str, parent: QObject | None = None) -> GitDriver:
        return GitDriver("blame", "--porcelain", "--", self.relativePath(path), directory=self.workdir, parent=parent)

    def blame(self, path: str) -> str | Untracked:
        """
        Blame transcript of a file, or UNTRACKED if git doesn't know about the file.
        Blocks until git is done. Raises BlameProcessError if git fails.
        """
        if not self.isTracked(path):
            return UNTRACKED
        return self.blameProcess(path).runSync()
