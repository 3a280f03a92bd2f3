# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import json
import logging
import os

from gitlineauthor.qt import *

logger = logging.getLogger(__name__)


class PrefsFile:
    """
    Mixin for dataclasses that persist themselves as a JSON file.

    Field defaults in the dataclass are the defaults. Fields whose names
    start with an underscore are never saved. Enum fields are stored as
    their values and converted back on load.
    """

    _filename = ""
    _parentDir = ""
    _allowMakeDirs = True
    _dirty = False

    def getParentDir(self) -> str:
        if self._parentDir:
            return self._parentDir
        return QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppConfigLocation)

    def _getFullPath(self, forWriting: bool) -> str:
        assert self._filename, "PrefsFile subclass must define _filename"

        prefsDir = self.getParentDir()
        if not prefsDir:
            return ""

        if forWriting:
            if not os.path.isdir(prefsDir):
                if not self._allowMakeDirs:
                    return ""
                os.makedirs(prefsDir, exist_ok=True)

        fullPath = os.path.join(prefsDir, self._filename)

        if not forWriting and not os.path.isfile(fullPath):
            return ""

        return fullPath

    def setDirty(self):
        self._dirty = True

    def isDirty(self) -> bool:
        return self._dirty

    def asDict(self) -> dict:
        obj = {}
        for field in dataclasses.fields(self):
            if field.name.startswith("_"):
                continue
            value = getattr(self, field.name)
            if isinstance(value, enum.Enum):
                value = value.value
            obj[field.name] = value
        return obj

    def write(self, force: bool = False) -> str:
        if not force and not self._dirty:
            return ""

        # Never write to the user's real config directory while testing
        if APP_TESTMODE and not self._parentDir:
            logger.info(f"Test mode: not writing {self._filename}")
            self._dirty = False
            return ""

        prefsPath = self._getFullPath(forWriting=True)
        if not prefsPath:
            logger.warning(f"Cannot write {self._filename}: no suitable config directory")
            return ""

        with open(prefsPath, "w", encoding="utf-8") as f:
            json.dump(self.asDict(), f, indent="\t")

        self._dirty = False
        logger.debug(f"Wrote {prefsPath}")
        return prefsPath

    def load(self) -> bool:
        prefsPath = self._getFullPath(forWriting=False)
        if not prefsPath:
            return False

        with open(prefsPath, encoding="utf-8") as f:
            try:
                obj = json.load(f)
            except ValueError as exc:
                logger.warning(f"{prefsPath}: not valid JSON, ignoring", exc_info=exc)
                return False

        if not isinstance(obj, dict):
            logger.warning(f"{prefsPath}: expected a JSON object, ignoring")
            return False

        self.applyDict(obj, origin=prefsPath)
        return True

    def applyDict(self, obj: dict, origin: str = ""):
        origin = origin or self._filename
        fieldTypes = {field.name: field for field in dataclasses.fields(self) if not field.name.startswith("_")}

        for key, value in obj.items():
            if key not in fieldTypes:
                logger.warning(f"{origin}: unknown setting '{key}', ignoring")
                continue

            currentValue = getattr(self, key)
            originalType = type(currentValue)

            if isinstance(currentValue, enum.Enum):
                try:
                    value = originalType(value)
                except ValueError:
                    logger.warning(f"{origin}: '{value}' isn't a valid value for '{key}', keeping {currentValue.value!r}")
                    continue
            elif isinstance(currentValue, bool) != isinstance(value, bool) or not isinstance(value, originalType):
                logger.warning(f"{origin}: wrong type for '{key}' ({type(value).__name__}), keeping {currentValue!r}")
                continue

            setattr(self, key, value)
