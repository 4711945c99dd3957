"""
Commit source backed by GitPython.

Opens a local repository and exposes its history as ``CommitRecord``s. The
repository handle is scoped by ``commit_log`` and released on every exit path.
"""

import logging
import os
from contextlib import contextmanager
from functools import partial
from typing import Iterator, List

from git import Repo, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.objects.commit import Commit

from shared.errors import RepositoryError, StatisticsError
from shared.models import CommitRecord, FileChangeStat

logger = logging.getLogger(__name__)


def open_repository(path: str) -> Repo:
    """Open the Git repository rooted at ``path``."""
    if not os.path.exists(path):
        raise RepositoryError(f"Repository path does not exist: {path}", path=path)
    try:
        repo = Repo(path)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise RepositoryError(f"Invalid Git repository: {path}", path=path)
    logger.debug(f"Opened repository {repo.git_dir}")
    return repo


def load_file_stats(commit: Commit) -> List[FileChangeStat]:
    """Compute per-file line changes of ``commit`` against its first parent."""
    try:
        files = commit.stats.files
    except (GitCommandError, ValueError) as e:
        raise StatisticsError(commit.hexsha, str(e)) from e

    return [
        FileChangeStat(
            path=str(path),
            additions=int(stat.get("insertions", 0)),
            deletions=int(stat.get("deletions", 0)),
        )
        for path, stat in files.items()
    ]


def to_record(commit: Commit) -> CommitRecord:
    """Convert a GitPython commit to a ``CommitRecord`` with lazy statistics."""
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")

    return CommitRecord(
        hash=commit.hexsha,
        author_name=commit.author.name or "",
        author_email=commit.author.email or "",
        authored_at=commit.authored_datetime,
        message=message,
        stats_loader=partial(load_file_stats, commit),
    )


def iter_commit_records(repo: Repo, rev: str = "--all") -> Iterator[CommitRecord]:
    """Yield every commit reachable from ``rev`` in ``git rev-list`` order."""
    count = 0
    try:
        for commit in repo.iter_commits(rev):
            count += 1
            yield to_record(commit)
    except (GitCommandError, ValueError) as e:
        raise RepositoryError(f"Unable to read commit history ({rev}): {e}", path=repo.working_dir)
    logger.debug(f"Walked {count} commits from {rev}")


@contextmanager
def commit_log(path: str, rev: str = "--all") -> Iterator[Iterator[CommitRecord]]:
    """
    Scoped access to the commit history of the repository at ``path``.

    Example:
        >>> with commit_log("/path/to/repo") as commits:
        ...     hashes = [c.hash for c in commits]
    """
    repo = open_repository(path)
    try:
        yield iter_commit_records(repo, rev)
    finally:
        repo.close()
        logger.debug(f"Closed repository {path}")
