# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitLineAuthor, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os

import pygit2

from . import *

TEST_SIGNATURE = pygit2.Signature("Test Person", "toto@example.com", 1672600000, 0)

HASH_A = "a" * 40
HASH_B = "b" * 40
HASH_C = "c" * 40
HASH_ZERO = "0" * 40


def writeFile(path, text):
    # Prevent accidental littering of current working directory
    assert os.path.isabs(path), "pass me an absolute path"

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(text.encode("utf-8"))


def readTextFile(path):
    with open(path, encoding="utf-8") as f:
        return f.read()


def makeSignature(name: str, time: int, offset: int = 0, email: str = ""):
    email = email or name.lower().replace(" ", ".") + "@example.com"
    return pygit2.Signature(name, email, time, offset)


def makeRepo(tempDir) -> pygit2.Repository:
    wd = os.path.join(tempDir.name, "repo")
    return pygit2.init_repository(wd, initial_head="main")


def commitFile(repo: pygit2.Repository, relPath: str, text: str, message: str,
               author: pygit2.Signature = TEST_SIGNATURE) -> str:
    writeFile(os.path.join(repo.workdir, relPath), text)

    repo.index.add(relPath)
    repo.index.write()
    tree = repo.index.write_tree()

    parents = [] if repo.head_is_unborn else [repo.head.target]
    oid = repo.create_commit("HEAD", author, author, message, tree, parents)
    return str(oid)


def commitRecord(commitHash: str, origLine: int, finalLine: int, groupSize: int | None = None,
                 author: str = "", authorTime: int = 0, authorTz: str = "+0000",
                 summary: str | None = "", filename: str = "hello.txt", content: str = "") -> list[str]:
    """
    Transcript lines for one file line, as "git blame --porcelain" would print them.
    Commit details are only included if author is given (i.e. first time the commit shows up).
    """
    header = f"{commitHash} {origLine} {finalLine}"
    if groupSize is not None:
        header += f" {groupSize}"

    lines = [header]

    if author:
        email = author.lower().replace(" ", ".") + "@example.com"
        lines += [
            f"author {author}",
            f"author-mail <{email}>",
            f"author-time {authorTime}",
            f"author-tz {authorTz}",
            f"committer {author}",
            f"committer-mail <{email}>",
            f"committer-time {authorTime}",
            f"committer-tz {authorTz}",
        ]
        if summary is not None:
            lines.append(f"summary {summary}")

    if groupSize is not None:
        lines.append(f"filename {filename}")

    lines.append("\t" + content)
    return lines


def makeTranscript(*records: list[str]) -> str:
    return "".join(line + "\n" for record in records for line in record)
