"""
Aggregation pass producing the wrapped summary.

A single traversal of the filtered commits computes every statistic at once:
count, earliest/latest commit by time of day, largest/smallest commit, line
totals and averages, and the per-day grouping.
"""

import logging
from typing import Dict, List, Sequence

from shared.errors import NoCommitsFoundError
from shared.models import CommitRecord, WrappedSummary

logger = logging.getLogger(__name__)


def analyze(commits: Sequence[CommitRecord]) -> WrappedSummary:
    """
    Reduce ``commits`` to a ``WrappedSummary``.

    Ties on time of day and on commit size go to the commit encountered first.
    A failure loading the statistics of any commit aborts the whole pass.

    Raises:
        NoCommitsFoundError: ``commits`` is empty.
        StatisticsError: change statistics of a commit could not be computed.
    """
    if not commits:
        raise NoCommitsFoundError()

    first = commits[0]
    earliest = latest = first
    earliest_time = latest_time = first.time_of_day

    largest = smallest = first
    largest_changes = smallest_changes = None

    addition_count = 0
    deletion_count = 0
    by_day: Dict[int, List[CommitRecord]] = {}

    for commit in commits:
        when = commit.time_of_day
        if when < earliest_time:
            earliest_time = when
            earliest = commit
        if when > latest_time:
            latest_time = when
            latest = commit

        additions, deletions = commit.change_totals()
        addition_count += additions
        deletion_count += deletions

        size = additions + deletions
        if largest_changes is None or size > sum(largest_changes):
            largest = commit
            largest_changes = (additions, deletions)
        if smallest_changes is None or size < sum(smallest_changes):
            smallest = commit
            smallest_changes = (additions, deletions)

        by_day.setdefault(commit.year_day, []).append(commit)

    total = len(commits)
    logger.debug(
        f"Aggregated {total} commits: +{addition_count}/-{deletion_count} over {len(by_day)} days"
    )

    return WrappedSummary(
        total_commits=total,
        earliest=earliest,
        latest=latest,
        largest=largest,
        smallest=smallest,
        largest_changes=largest_changes,
        smallest_changes=smallest_changes,
        total_additions=addition_count,
        total_deletions=deletion_count,
        average_additions=addition_count // total,
        average_deletions=deletion_count // total,
        by_day=by_day,
    )
