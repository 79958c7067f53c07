"""Unit tests for hour-of-day and day-of-week buckets."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from tests.factories.transaction import TransactionRecordFactory
from wallet_analyzer.core.analysis.time_patterns import analyze
from wallet_analyzer.core.exceptions import EmptyTransactionSetError


def _at(*timestamps: datetime):
    return [TransactionRecordFactory(block_time=ts) for ts in timestamps]


class TestAnalyzeTimePatterns:
    def test_bucket_sizes(self) -> None:
        patterns = analyze(_at(datetime(2024, 1, 1, 9, tzinfo=UTC)))

        assert len(patterns.hour_counts) == 24
        assert len(patterns.day_counts) == 7
        assert sum(patterns.hour_counts) == 1
        assert sum(patterns.day_counts) == 1

    def test_sunday_is_day_zero(self) -> None:
        """
        Given: Transactions on Sunday 2024-01-07
        When: analyze() is called
        Then: They land in bucket 0 and the day is reported as Sunday
        """
        patterns = analyze(_at(datetime(2024, 1, 7, 10, tzinfo=UTC), datetime(2024, 1, 7, 11, tzinfo=UTC)))

        assert patterns.day_counts[0] == 2
        assert patterns.most_active_day == "Sunday"

    def test_saturday_is_day_six(self) -> None:
        patterns = analyze(_at(datetime(2024, 1, 6, 10, tzinfo=UTC)))
        assert patterns.day_counts[6] == 1
        assert patterns.most_active_day == "Saturday"

    def test_most_active_hour(self) -> None:
        base = datetime(2024, 1, 1, tzinfo=UTC)
        patterns = analyze(_at(base + timedelta(hours=14), base + timedelta(days=1, hours=14), base))

        assert patterns.most_active_hour == 14
        assert patterns.hour_counts[14] == 2

    def test_ties_resolve_to_lowest_index(self) -> None:
        """Monday 18:00 and Tuesday 03:00 tie; hour 3 and Monday win."""
        patterns = analyze(_at(datetime(2024, 1, 2, 3, tzinfo=UTC), datetime(2024, 1, 1, 18, tzinfo=UTC)))

        assert patterns.most_active_hour == 3
        assert patterns.most_active_day == "Monday"

    def test_hours_are_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        patterns = analyze(_at(datetime(2024, 1, 1, 1, tzinfo=plus_two)))

        # 01:00+02:00 on Monday is 23:00 UTC on Sunday
        assert patterns.most_active_hour == 23
        assert patterns.most_active_day == "Sunday"

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptyTransactionSetError):
            analyze([])
