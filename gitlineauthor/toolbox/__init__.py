# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from .benchmark import Benchmark, BENCHMARK_LOGGING_LEVEL
from .gitutils import (
    firstName,
    lastName,
    nonEmptyWords,
    parseTimeOffset,
    removeEmailBrackets,
    shortHash,
)
from .qtutils import ANSI_RESET, ansiBackground, lerp, mixColors, parseColor
