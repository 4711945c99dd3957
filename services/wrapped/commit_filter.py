"""
Commit filter: keeps the commits of the requested authors within one year.
"""

import logging
from datetime import datetime, tzinfo
from typing import Iterable, Iterator, Optional

from shared.errors import ConfigurationError
from shared.models import AuthorSet, CommitRecord, TimeWindow, WindowMode

logger = logging.getLogger(__name__)


def parse_author_set(raw: Optional[str]) -> AuthorSet:
    """Build the author allow-set from a comma separated list of emails."""
    authors = AuthorSet(emails=(raw or "").split(","))
    if not authors:
        raise ConfigurationError("No valid author emails were provided")
    return authors


def _local(year: int, month: int, day: int, hour: int, minute: int, tz: Optional[tzinfo]) -> datetime:
    if tz is not None:
        return datetime(year, month, day, hour, minute, tzinfo=tz)
    # astimezone() on a naive datetime resolves the system local offset for that date
    return datetime(year, month, day, hour, minute).astimezone()


def year_window(
    year: int,
    mode: WindowMode = WindowMode.CALENDAR,
    tz: Optional[tzinfo] = None,
) -> TimeWindow:
    """
    Time window covering ``year``.

    ``calendar`` is ``[Jan 1 00:00, next Jan 1 00:00)``. ``legacy`` keeps the
    historical boundaries ``(Jan 1 00:01, Dec 31 00:01)``, which leave out the
    first minute of the year and nearly all of Dec 31.
    """
    mode = WindowMode(mode)
    if mode is WindowMode.LEGACY:
        return TimeWindow(
            start=_local(year, 1, 1, 0, 1, tz),
            end=_local(year, 12, 31, 0, 1, tz),
            include_start=False,
        )
    return TimeWindow(
        start=_local(year, 1, 1, 0, 0, tz),
        end=_local(year + 1, 1, 1, 0, 0, tz),
        include_start=True,
    )


def filter_commits(
    commits: Iterable[CommitRecord],
    authors: AuthorSet,
    window: TimeWindow,
) -> Iterator[CommitRecord]:
    """Lazily yield, in source order, the commits by ``authors`` inside ``window``."""
    seen = 0
    matched = 0
    for commit in commits:
        seen += 1
        if window.contains(commit.authored_at) and commit.author_email in authors:
            matched += 1
            yield commit
    logger.debug(f"Filter kept {matched} of {seen} commits")
