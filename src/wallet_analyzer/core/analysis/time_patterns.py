"""Hour-of-day and day-of-week activity buckets."""

from collections.abc import Sequence

from wallet_analyzer.core.exceptions import EmptyTransactionSetError
from wallet_analyzer.data.models.analytics import DAY_NAMES, TimePatterns
from wallet_analyzer.data.models.transaction import TransactionRecord


def _first_max_index(counts: list[int]) -> int:
    # Ties resolve to the lowest index
    return counts.index(max(counts))


def analyze(transactions: Sequence[TransactionRecord]) -> TimePatterns:
    """Bucket transactions by UTC hour (0-23) and weekday (Sunday = 0).

    The most active hour and day are the buckets with the highest count.
    When several buckets share the highest count, the lowest index wins:
    hour 0 before hour 1, Sunday before Monday.

    Raises:
        EmptyTransactionSetError: If transactions is empty.
    """
    if not transactions:
        raise EmptyTransactionSetError()

    hour_counts = [0] * 24
    day_counts = [0] * len(DAY_NAMES)

    for tx in transactions:
        hour_counts[tx.block_time.hour] += 1
        # datetime.weekday() is Monday = 0; shift to Sunday = 0
        day_counts[(tx.block_time.weekday() + 1) % 7] += 1

    return TimePatterns(
        hour_counts=tuple(hour_counts),
        day_counts=tuple(day_counts),
        most_active_hour=_first_max_index(hour_counts),
        most_active_day=DAY_NAMES[_first_max_index(day_counts)],
    )
