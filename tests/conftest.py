"""
Shared fixtures for git-wrapped tests.
"""

import itertools
import shutil
from datetime import datetime, timezone

import pytest
from git import Actor, Repo

from shared.models import CommitRecord, FileChangeStat


@pytest.fixture
def make_commit():
    """Factory for in-memory commit records with fixed change statistics."""
    counter = itertools.count(1)

    def factory(
        when: datetime,
        email: str = "alice@example.com",
        additions: int = 0,
        deletions: int = 0,
        message: str = None,
        loader=None,
    ) -> CommitRecord:
        n = next(counter)
        files = [FileChangeStat(path=f"src/file_{n}.py", additions=additions, deletions=deletions)]
        return CommitRecord(
            hash=f"{n:040x}",
            author_name="Alice",
            author_email=email,
            authored_at=when,
            message=message if message is not None else f"commit {n}\n",
            stats_loader=loader or (lambda: files),
        )

    return factory


class RepoBuilder:
    """Builds a throwaway Git repository with explicit author dates."""

    def __init__(self, root):
        self.root = root
        self.repo = Repo.init(root)

    def commit(self, filename: str, lines, email: str, when: datetime, message: str = "update"):
        (self.root / filename).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        self.repo.index.add([filename])
        actor = Actor(email.split("@")[0], email)
        date = f"{int(when.timestamp())} {when.strftime('%z')}"
        return self.repo.index.commit(
            message, author=actor, committer=actor, author_date=date, commit_date=date
        )


@pytest.fixture
def repo_builder(tmp_path):
    """An empty Git repository; skipped when no git binary is installed."""
    if shutil.which("git") is None:
        pytest.skip("git binary not available")
    builder = RepoBuilder(tmp_path / "repo")
    yield builder
    builder.repo.close()


@pytest.fixture
def sample_repo(repo_builder):
    """
    Repository with three commits by alice in 2023 (UTC), one by bob in 2023
    and one by alice in 2022.
    """
    utc = timezone.utc
    repo_builder.commit("a.txt", ["1", "2", "3"], "alice@example.com",
                        datetime(2023, 3, 10, 9, 0, 0, tzinfo=utc), "first change")
    repo_builder.commit("b.txt", ["x"], "bob@example.com",
                        datetime(2023, 3, 11, 8, 0, 0, tzinfo=utc), "bob's change")
    repo_builder.commit("a.txt", ["1", "2"], "alice@example.com",
                        datetime(2023, 3, 10, 23, 30, 0, tzinfo=utc), "late fix")
    repo_builder.commit("c.txt", ["c1", "c2", "c3", "c4", "c5"], "alice@example.com",
                        datetime(2023, 7, 4, 6, 15, 0, tzinfo=utc), "early bird")
    repo_builder.commit("d.txt", ["old"], "alice@example.com",
                        datetime(2022, 6, 1, 12, 0, 0, tzinfo=utc), "last year")
    return repo_builder
