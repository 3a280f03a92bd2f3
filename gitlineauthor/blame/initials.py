# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Shortest collision-free initials for a set of author names.

Everybody starts out with the first letter of each word ("Jane Doe" -> "JD").
While two or more authors share an abbreviation, the colliding authors borrow
one more letter from one of their words, preferring the last word:

    Anna Lee, Anna Lu       ->  ALe, ALu
    Joe Smith, Jane Smith   ->  JoS, JaS
    Ann Smithers, Ann Smithson -> ASmithe, ASmiths

A word is never borrowed beyond its full length. If a collision survives
when every word is spelled out (two authors with the same name spelled
differently only by whitespace, for instance), it is left alone.
"""

from __future__ import annotations

from collections.abc import Iterable

from gitlineauthor.toolbox.gitutils import nonEmptyWords


def collectAuthors(commits: Iterable) -> frozenset[str]:
    return frozenset(
        commit.author.name for commit in commits
        if not commit.isZeroCommit
        and commit.author is not None
        and commit.author.name is not None)


def computeUniqueInitials(authors: Iterable[str]) -> dict[str, str]:
    # Sorting makes the outcome independent of set iteration order
    names = sorted(set(authors))
    table = _InitialsTable(names)

    while True:
        collisions = table.collisions()
        if not collisions:
            break

        progressed = False
        for group in collisions:
            progressed |= table.grow(group)

        if not progressed:
            break

    return {name: table.abbreviate(name) for name in names}


class _InitialsTable:
    words: dict[str, list[str]]
    lengths: dict[str, list[int]]

    def __init__(self, names: list[str]):
        self.names = names
        self.words = {name: nonEmptyWords(name) for name in names}
        self.lengths = {name: [1] * len(self.words[name]) for name in names}

    def abbreviate(self, name: str, lengths: list[int] | None = None) -> str:
        if lengths is None:
            lengths = self.lengths[name]
        return "".join(word[:n] for word, n in zip(self.words[name], lengths, strict=True))

    def collisions(self) -> list[list[str]]:
        byAbbreviation: dict[str, list[str]] = {}
        for name in self.names:
            byAbbreviation.setdefault(self.abbreviate(name), []).append(name)
        return [group for group in byAbbreviation.values() if len(group) >= 2]

    def canGrow(self, name: str, fromEnd: int) -> bool:
        words = self.words[name]
        return fromEnd <= len(words) and self.lengths[name][-fromEnd] < len(words[-fromEnd])

    def grownLengths(self, name: str, fromEnd: int) -> list[int]:
        lengths = list(self.lengths[name])
        if self.canGrow(name, fromEnd):
            lengths[-fromEnd] += 1
        return lengths

    def grow(self, group: list[str]) -> bool:
        """
        Lengthen one word position for every author in the group.
        Returns False if nobody in the group has any letters left to borrow.
        """
        depth = max(len(self.words[name]) for name in group)

        # Find the word position, last word first, that tells somebody apart in one step.
        for fromEnd in range(1, depth + 1):
            if not any(self.canGrow(name, fromEnd) for name in group):
                continue
            trial = {name: self.grownLengths(name, fromEnd) for name in group}
            if len({self.abbreviate(name, trial[name]) for name in group}) > 1:
                self.lengths.update(trial)
                return True

        # No single step helps: keep spelling out the last word that still has letters left.
        for fromEnd in range(1, depth + 1):
            growable = [name for name in group if self.canGrow(name, fromEnd)]
            if growable:
                for name in growable:
                    self.lengths[name][-fromEnd] += 1
                return True

        return False
