# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from gitlineauthor.blame import *
from .util import *


def assertUnique(initials: dict[str, str]):
    assert all(initials.values())
    assert len(set(initials.values())) == len(initials)


def testSingleAuthor():
    assert computeUniqueInitials({"Joe Smith"}) == {"Joe Smith": "JS"}


def testNoCollisions():
    assert computeUniqueInitials({"Jane Doe", "John Smith", "Ann"}) == {
        "Jane Doe": "JD",
        "John Smith": "JS",
        "Ann": "A",
    }


def testSameSurname():
    initials = computeUniqueInitials({"Joe Smith", "Jane Smith"})
    assertUnique(initials)
    assert initials == {"Joe Smith": "JoS", "Jane Smith": "JaS"}


def testSameFirstName():
    initials = computeUniqueInitials({"Anna Lee", "Anna Lu"})
    assertUnique(initials)
    assert initials == {"Anna Lee": "ALe", "Anna Lu": "ALu"}


def testLongCommonSurnamePrefix():
    initials = computeUniqueInitials({"Ann Smithers", "Ann Smithson"})
    assertUnique(initials)
    assert initials == {"Ann Smithers": "ASmithe", "Ann Smithson": "ASmiths"}


def testOnlyCollidingAuthorsGrow():
    initials = computeUniqueInitials({"Anna Lee", "Anna Lu", "Bob Barker"})
    assert initials["Bob Barker"] == "BB"
    assertUnique(initials)


def testThreeWayCollision():
    initials = computeUniqueInitials({"Mary Jones", "Mike Jackson", "Max Johnson"})
    assertUnique(initials)
    # "MJ" everywhere; surnames tell everyone apart after a few letters
    assert initials["Mike Jackson"] == "MJa"
    assert initials["Mary Jones"] == "MJon"
    assert initials["Max Johnson"] == "MJoh"


def testIndistinguishableNamesAreBestEffort():
    initials = computeUniqueInitials({"Al B", "Al  B"})
    assert set(initials) == {"Al B", "Al  B"}
    assert initials["Al B"] == initials["Al  B"] == "AlB"


def testDeterministic():
    names = ["Zoe Quinn", "Zack Quinn", "Zara Quill", "Ann Lee"]
    expected = computeUniqueInitials(names)
    for _attempt in range(5):
        assert computeUniqueInitials(reversed(names)) == expected
        assert computeUniqueInitials(set(names)) == expected


def testCollectAuthorsSkipsZeroCommitAndAnonymous():
    commits = [
        Commit(HASH_A, "a", Person("Jane Doe", time=1)),
        Commit(HASH_B, "b", Person("Jane Doe", time=2)),
        Commit(HASH_C, "c", None),
        Commit(HASH_ZERO, "wip", Person("Not Committed Yet")),
    ]
    assert collectAuthors(commits) == {"Jane Doe"}


def testLineAuthoringInitials():
    transcript = makeTranscript(
        commitRecord(HASH_A, 1, 1, 1, author="Joe Smith", authorTime=1, summary="a"),
        commitRecord(HASH_B, 2, 2, 1, author="Jane Smith", authorTime=2, summary="b"),
        commitRecord(HASH_ZERO, 3, 3, 1, author="Not Committed Yet", authorTime=3, summary="c"),
    )
    la = parseGitBlamePorcelain(transcript)
    assert la.authors == {"Joe Smith", "Jane Smith"}
    assert dict(la.uniqueInitials) == {"Joe Smith": "JoS", "Jane Smith": "JaS"}
    assert la.uniqueInitials is la.uniqueInitials
