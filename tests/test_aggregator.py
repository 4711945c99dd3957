"""
Unit tests for the aggregation pass.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

from shared.errors import NoCommitsFoundError, StatisticsError
from services.wrapped.aggregator import analyze

UTC = timezone.utc


class TestAnalyze:
    """Test cases for analyze."""

    @pytest.fixture
    def same_day_commits(self, make_commit):
        """Three commits on one day at 09:00:00, 23:59:00 and 09:00:00."""
        day = datetime(2023, 5, 17, tzinfo=UTC)
        return [
            make_commit(day.replace(hour=9), additions=10, deletions=1),
            make_commit(day.replace(hour=23, minute=59), additions=20, deletions=2),
            make_commit(day.replace(hour=9), additions=30, deletions=3),
        ]

    def test_same_day_scenario(self, same_day_commits):
        summary = analyze(same_day_commits)

        assert summary.total_commits == 3
        assert summary.earliest is same_day_commits[0]
        assert summary.latest is same_day_commits[1]
        assert summary.average_additions == 20
        assert summary.average_deletions == 2
        assert summary.total_additions == 60
        assert summary.total_deletions == 6

        day, commits = summary.busiest_day
        assert day == same_day_commits[0].year_day
        assert len(commits) == 3

    def test_empty_input_rejected(self):
        with pytest.raises(NoCommitsFoundError, match="no commits were found"):
            analyze([])

    def test_earliest_and_latest_rank_by_time_of_day(self, make_commit):
        # The January commit is oldest, but it was made late in the day
        january_night = make_commit(datetime(2023, 1, 5, 22, 0, tzinfo=UTC))
        june_morning = make_commit(datetime(2023, 6, 5, 6, 30, tzinfo=UTC))
        december_noon = make_commit(datetime(2023, 12, 5, 12, 0, tzinfo=UTC))

        summary = analyze([january_night, june_morning, december_noon])

        assert summary.earliest is june_morning
        assert summary.latest is january_night

    def test_time_of_day_ties_keep_first(self, make_commit):
        first = make_commit(datetime(2023, 2, 1, 10, 0, tzinfo=UTC))
        second = make_commit(datetime(2023, 3, 1, 10, 0, tzinfo=UTC))

        summary = analyze([first, second])

        assert summary.earliest is first
        assert summary.latest is first

    def test_single_commit(self, make_commit):
        commit = make_commit(datetime(2023, 8, 8, 8, 8, tzinfo=UTC), additions=7, deletions=3)

        summary = analyze([commit])

        assert summary.earliest is commit
        assert summary.latest is commit
        assert summary.largest is commit
        assert summary.smallest is commit
        assert summary.largest_changes == (7, 3)
        assert summary.average_additions == 7
        assert summary.average_deletions == 3

    @pytest.mark.parametrize(
        "additions, deletions, expected_additions, expected_deletions",
        [
            ([1, 1, 1, 0], [0, 0, 0, 1], 0, 0),
            ([5, 5, 6], [2, 2, 3], 5, 2),
            ([10, 0], [9, 0], 5, 4),
            ([0, 0, 0], [0, 0, 0], 0, 0),
        ],
    )
    def test_averages_truncate(
        self, make_commit, additions, deletions, expected_additions, expected_deletions
    ):
        base = datetime(2023, 4, 1, tzinfo=UTC)
        commits = [
            make_commit(base + timedelta(hours=i), additions=a, deletions=d)
            for i, (a, d) in enumerate(zip(additions, deletions))
        ]

        summary = analyze(commits)

        assert summary.average_additions == sum(additions) // len(commits)
        assert summary.average_additions == expected_additions
        assert summary.average_deletions == expected_deletions

    def test_largest_and_smallest(self, make_commit):
        base = datetime(2023, 4, 1, tzinfo=UTC)
        small = make_commit(base, additions=1, deletions=0)
        big = make_commit(base + timedelta(days=1), additions=50, deletions=50)
        bigger_adds_only = make_commit(base + timedelta(days=2), additions=99, deletions=0)
        tie_small = make_commit(base + timedelta(days=3), additions=0, deletions=1)

        summary = analyze([small, big, bigger_adds_only, tie_small])

        assert summary.largest is big
        assert summary.largest_changes == (50, 50)
        assert summary.smallest is small
        assert summary.smallest_changes == (1, 0)

    def test_by_day_partitions_every_commit(self, make_commit):
        base = datetime(2023, 1, 1, 12, tzinfo=UTC)
        offsets = [0, 0, 3, 45, 3, 0, 364]
        commits = [make_commit(base + timedelta(days=o)) for o in offsets]

        summary = analyze(commits)

        assert sum(len(bucket) for bucket in summary.by_day.values()) == summary.total_commits
        assert list(summary.by_day) == [1, 4, 46, 365]
        assert summary.by_day[1] == [commits[0], commits[1], commits[5]]
        assert summary.by_day[4] == [commits[2], commits[4]]

        day, bucket = summary.busiest_day
        assert day == 1
        assert len(bucket) == max(len(b) for b in summary.by_day.values())

    def test_busiest_day_tie_goes_to_lowest_day(self, make_commit):
        later = make_commit(datetime(2023, 9, 1, 10, tzinfo=UTC))
        earlier = make_commit(datetime(2023, 2, 1, 10, tzinfo=UTC))

        summary = analyze([later, earlier])

        day, bucket = summary.busiest_day
        assert day == earlier.year_day
        assert bucket == [earlier]

    def test_is_deterministic(self, same_day_commits, make_commit):
        commits = same_day_commits + [make_commit(datetime(2023, 11, 2, 4, tzinfo=UTC), additions=3)]

        assert analyze(commits) == analyze(commits)

    def test_statistics_failure_aborts(self, make_commit):
        failing = Mock(side_effect=StatisticsError("deadbeef", "object not found"))
        commits = [
            make_commit(datetime(2023, 1, 2, tzinfo=UTC), additions=1),
            make_commit(datetime(2023, 1, 3, tzinfo=UTC), loader=failing),
            make_commit(datetime(2023, 1, 4, tzinfo=UTC), additions=1),
        ]

        with pytest.raises(StatisticsError, match="deadbeef"):
            analyze(commits)

        failing.assert_called_once_with()
