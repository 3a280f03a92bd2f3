# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from .initials import collectAuthors, computeUniqueInitials
from .model import (
    Commit,
    LineAuthoring,
    LineAuthoringKey,
    LineAuthoringResult,
    Person,
    PreviousFile,
    UNTRACKED,
    Untracked,
    ZERO_COMMIT,
    ZERO_HASH,
)
from .newest import GroupSpan, groupSpans, newestCommitInRange
from .porcelain import BlameParseError, parseGitBlamePorcelain
