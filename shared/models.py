"""
Data models for git-wrapped.

This module provides the typed records passed between the pipeline stages:
- Commit records with lazily loaded per-file change statistics
- The author allow-set and the year time window used for filtering
- The wrapped summary produced by the aggregation pass
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class WindowMode(str, Enum):
    """Year window semantics."""
    CALENDAR = "calendar"
    LEGACY = "legacy"


class FileChangeStat(BaseModel):
    """Line changes of one file touched by a commit."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path of the changed file")
    additions: int = Field(default=0, ge=0, description="Lines added")
    deletions: int = Field(default=0, ge=0, description="Lines deleted")


class CommitRecord(BaseModel):
    """Immutable view of one commit of the analyzed history."""

    model_config = ConfigDict(frozen=True)

    hash: str = Field(..., min_length=4, max_length=64, description="Git commit hash")
    author_name: str = Field(default="", description="Author name")
    author_email: str = Field(..., description="Author email")
    authored_at: datetime = Field(..., description="Author timestamp in the author's UTC offset")
    message: str = Field(default="", description="Raw commit message")
    stats_loader: Callable[[], List[FileChangeStat]] = Field(
        ..., exclude=True, repr=False, description="Loads per-file change statistics"
    )

    @field_validator("authored_at")
    @classmethod
    def validate_authored_at(cls, v):
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("Commit timestamp must be timezone-aware")
        return v

    @computed_field
    @property
    def time_of_day(self) -> int:
        """Wall-clock time packed as HHMMSS, ignoring the date."""
        t = self.authored_at
        return t.hour * 10000 + t.minute * 100 + t.second

    @computed_field
    @property
    def year_day(self) -> int:
        """Day of the year (1-366) in the author's offset."""
        return self.authored_at.timetuple().tm_yday

    def file_stats(self) -> List[FileChangeStat]:
        """Per-file statistics; raises ``StatisticsError`` when they cannot be computed."""
        return list(self.stats_loader())

    def change_totals(self) -> Tuple[int, int]:
        """Additions and deletions summed over every file touched by the commit."""
        additions = 0
        deletions = 0
        for stat in self.file_stats():
            additions += stat.additions
            deletions += stat.deletions
        return additions, deletions


class AuthorSet(BaseModel):
    """Normalized author emails a commit must match."""

    model_config = ConfigDict(frozen=True)

    emails: FrozenSet[str] = Field(default_factory=frozenset, description="Trimmed author emails")

    @field_validator("emails", mode="before")
    @classmethod
    def normalize_emails(cls, v):
        return frozenset(e.strip() for e in v if e and e.strip())

    def __contains__(self, email: object) -> bool:
        return email in self.emails

    def __len__(self) -> int:
        return len(self.emails)


class TimeWindow(BaseModel):
    """Time range a commit timestamp must fall in; the end is always exclusive."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    include_start: bool = True

    def contains(self, when: datetime) -> bool:
        if self.include_start:
            after_start = when >= self.start
        else:
            after_start = when > self.start
        return after_start and when < self.end

    def __contains__(self, when: object) -> bool:
        return isinstance(when, datetime) and self.contains(when)


class WrappedSummary(BaseModel):
    """Statistics of one author-year, built by a single aggregation pass."""

    model_config = ConfigDict(frozen=True)

    total_commits: int = Field(..., gt=0)
    earliest: CommitRecord = Field(..., description="Commit made earliest in the day")
    latest: CommitRecord = Field(..., description="Commit made latest in the day")
    largest: CommitRecord = Field(..., description="Commit with the most changed lines")
    smallest: CommitRecord = Field(..., description="Commit with the fewest changed lines")
    largest_changes: Tuple[int, int] = (0, 0)
    smallest_changes: Tuple[int, int] = (0, 0)
    total_additions: int = Field(default=0, ge=0)
    total_deletions: int = Field(default=0, ge=0)
    average_additions: int = Field(default=0, ge=0)
    average_deletions: int = Field(default=0, ge=0)
    by_day: Dict[int, List[CommitRecord]] = Field(default_factory=dict)

    @property
    def busiest_day(self) -> Optional[Tuple[int, List[CommitRecord]]]:
        """Day bucket with the most commits; ties go to the lowest day of the year."""
        if not self.by_day:
            return None
        day = min(self.by_day, key=lambda d: (-len(self.by_day[d]), d))
        return day, self.by_day[day]
