# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Long-lived owner of line authoring state.

Several views on the same file share one computation: results are cached
by (HEAD revision, content hash, path), and a blame that's already running
for a key is never started twice.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from gitlineauthor.blame import (
    BlameParseError, LineAuthoringKey, LineAuthoringResult, UNTRACKED, parseGitBlamePorcelain)
from gitlineauthor.coloring import AgeSampler
from gitlineauthor.display import (
    LineAuthorDisplay, LongestRendered, Placeholder, placeholderDisplay, resolveLineAuthor, spacerText)
from gitlineauthor.gitdriver import BlameProcessError, BlameSource, GitDriver
from gitlineauthor.qt import *
from gitlineauthor.settings import LineAuthorPrefs
from gitlineauthor.toolbox.benchmark import Benchmark

logger = logging.getLogger(__name__)


class LineAuthorProvider(QObject):
    lineAuthoringReady = Signal(object, object)
    "Emitted with (LineAuthoringKey, LineAuthoringResult) once authorship is known."

    lineAuthoringFailed = Signal(object, str)
    "Emitted with (LineAuthoringKey, error message) if git or the parser failed."

    source: BlameSource
    prefs: LineAuthorPrefs
    cache: dict[LineAuthoringKey, LineAuthoringResult]
    inFlight: dict[LineAuthoringKey, GitDriver]
    failedKeys: set[LineAuthoringKey]

    def __init__(self, source: BlameSource, prefs: LineAuthorPrefs | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self.setObjectName("LineAuthorProvider")
        self.source = source
        self.prefs = prefs if prefs is not None else LineAuthorPrefs()
        self.cache = {}
        self.inFlight = {}
        self.failedKeys = set()
        self.ageSampler = AgeSampler()
        self.longestRendered = LongestRendered()

    def makeKey(self, path: str) -> LineAuthoringKey | None:
        return self.source.makeKey(path)

    def cached(self, key: LineAuthoringKey | None) -> LineAuthoringResult | None:
        if key is None:
            return None
        return self.cache.get(key)

    def isPending(self, key: LineAuthoringKey) -> bool:
        return key in self.inFlight

    def request(self, path: str) -> LineAuthoringKey | None:
        """
        Start computing line authoring for a file without blocking.

        Returns the key that lineAuthoringReady/lineAuthoringFailed will be
        emitted with, or None if the file has no key (unborn HEAD, unreadable
        file). If the result is already cached, lineAuthoringReady is emitted
        right away.
        """
        key = self.makeKey(path)
        if key is None:
            logger.debug(f"No line authoring key for {path}")
            return None

        if key in self.cache:
            self.lineAuthoringReady.emit(key, self.cache[key])
            return key

        if key in self.inFlight:
            return key

        self.failedKeys.discard(key)

        if not self.source.isTracked(path):
            self._store(key, UNTRACKED)
            return key

        process = self.source.blameProcess(path, parent=self)
        self.inFlight[key] = process
        process.finished.connect(lambda code, status: self._onProcessDone(key, process))
        process.errorOccurred.connect(lambda error: self._onProcessError(key, process, error))
        logger.debug(f"Starting: {process.commandLine()}")
        process.start()
        return key

    def compute(self, path: str) -> LineAuthoringResult | None:
        """
        Compute line authoring for a file, blocking until git is done.
        Returns None if the file has no key or if authorship couldn't be computed.
        """
        key = self.makeKey(path)
        if key is None:
            return None

        with suppress(KeyError):
            return self.cache[key]

        if key in self.inFlight:
            return self._waitForProcess(key)

        try:
            with Benchmark("blame"):
                transcript = self.source.blame(path)
        except BlameProcessError as exc:
            self._fail(key, exc)
            return None

        if transcript is UNTRACKED:
            return self._store(key, UNTRACKED)

        return self._parseAndStore(key, transcript)

    def display(self, key: LineAuthoringKey | None, start: int, end: int) -> LineAuthorDisplay:
        """
        Gutter contents for lines start..end of the file identified by key.
        Placeholders stand in while the result is pending or after a failure.
        """
        result = self.cached(key)

        if result is None:
            if key is not None and key in self.failedKeys:
                return placeholderDisplay(Placeholder.Unavailable, self.prefs)
            return placeholderDisplay(Placeholder.Waiting, self.prefs, self.ageSampler)

        authorDisplay = resolveLineAuthor(result, start, end, self.prefs, self.ageSampler)
        self.longestRendered.update(authorDisplay.text, self.prefs)
        return authorDisplay

    def spacerText(self) -> str:
        return spacerText(self.prefs, self.longestRendered)

    def clear(self):
        """ Forget everything: cached results, pending processes, age samples, and gutter width. """
        for process in self.inFlight.values():
            with suppress(TypeError, RuntimeError):
                process.finished.disconnect()
            with suppress(TypeError, RuntimeError):
                process.errorOccurred.disconnect()
            process.kill()
            process.waitForFinished(1000)
            process.deleteLater()

        self.cache.clear()
        self.inFlight.clear()
        self.failedKeys.clear()
        self.ageSampler.clear()
        self.longestRendered.clear()

    def _store(self, key: LineAuthoringKey, result: LineAuthoringResult) -> LineAuthoringResult:
        self.cache[key] = result
        self.failedKeys.discard(key)
        self.lineAuthoringReady.emit(key, result)
        return result

    def _fail(self, key: LineAuthoringKey, exc: Exception):
        logger.warning(f"Line authoring unavailable for {key.path}: {exc}")
        self.failedKeys.add(key)
        self.lineAuthoringFailed.emit(key, str(exc))

    def _parseAndStore(self, key: LineAuthoringKey, transcript: str) -> LineAuthoringResult | None:
        try:
            with Benchmark("parseGitBlamePorcelain"):
                lineAuthoring = parseGitBlamePorcelain(transcript)
        except BlameParseError as exc:
            self._fail(key, exc)
            return None
        return self._store(key, lineAuthoring)

    def _takeProcess(self, key: LineAuthoringKey, process: GitDriver) -> bool:
        # Ignore processes that clear() abandoned
        if self.inFlight.get(key) is not process:
            return False
        del self.inFlight[key]
        process.deleteLater()
        return True

    def _onProcessDone(self, key: LineAuthoringKey, process: GitDriver):
        if not self._takeProcess(key, process):
            return

        if key in self.cache:
            return

        failure = process.failure()
        if failure is not None:
            self._fail(key, failure)
            return

        self._parseAndStore(key, process.stdoutScrollback())

    def _waitForProcess(self, key: LineAuthoringKey) -> LineAuthoringResult | None:
        process = self.inFlight[key]
        with Benchmark("blame (joining pending request)"):
            process.waitForFinished(-1)

        # Still pending if finished() wasn't emitted (process failed to start)
        if self.inFlight.get(key) is process:
            self._onProcessDone(key, process)

        return self.cache.get(key)

    def _onProcessError(self, key: LineAuthoringKey, process: GitDriver, error: QProcess.ProcessError):
        # Crashes also emit finished; only FailedToStart needs handling here
        if error != QProcess.ProcessError.FailedToStart:
            return
        if not self._takeProcess(key, process):
            return
        self._fail(key, BlameProcessError(f"{process.program()} failed to start: {process.errorString()}"))
