"""
Wrapped generation pipeline.

Ties the stages together: open the repository, filter its history by author
and year, then aggregate the matches into a ``WrappedSummary``.
"""

import logging
from datetime import tzinfo
from typing import List, Optional

from shared.errors import NoCommitsFoundError
from shared.models import AuthorSet, CommitRecord, WindowMode, WrappedSummary
from services.wrapped.aggregator import analyze
from services.wrapped.commit_filter import filter_commits, year_window
from services.wrapped.source import commit_log

logger = logging.getLogger(__name__)


def find_relevant_commits(
    commits,
    year: int,
    authors: AuthorSet,
    mode: WindowMode = WindowMode.CALENDAR,
    tz: Optional[tzinfo] = None,
) -> List[CommitRecord]:
    """Materialize the commits of ``authors`` made during ``year``."""
    window = year_window(year, mode, tz)
    logger.debug(
        f"Year window {window.start.isoformat()} .. {window.end.isoformat()} ({WindowMode(mode).value})"
    )
    return list(filter_commits(commits, authors, window))


def generate_wrapped(
    path: str,
    year: int,
    authors: AuthorSet,
    mode: WindowMode = WindowMode.CALENDAR,
    rev: str = "--all",
    tz: Optional[tzinfo] = None,
) -> WrappedSummary:
    """
    Build the wrapped summary of ``authors`` for ``year`` in the repository at ``path``.

    The repository stays open until aggregation is done, since change
    statistics are computed lazily from it.

    Raises:
        RepositoryError: the repository cannot be opened or walked.
        NoCommitsFoundError: no commit matched the author/year criteria.
        StatisticsError: change statistics of a matching commit failed.
    """
    with commit_log(path, rev) as commits:
        relevant = find_relevant_commits(commits, year, authors, mode, tz)
        if not relevant:
            raise NoCommitsFoundError()

        logger.info(f"Found {len(relevant)} commits for {len(authors)} author(s) in {year}")
        return analyze(relevant)
