"""Aggregate statistics over a wallet's transaction history.

All functions are pure: they never mutate the input list and recompute
every figure from scratch.
"""

import math
from collections.abc import Sequence
from datetime import datetime, timedelta
from decimal import Decimal

import structlog

from wallet_analyzer.core.exceptions import EmptyTransactionSetError
from wallet_analyzer.data.models.analytics import GasStats, StatsSummary
from wallet_analyzer.data.models.transaction import TransactionRecord

log = structlog.get_logger(__name__)

SECONDS_PER_DAY = timedelta(days=1).total_seconds()


def _require_transactions(transactions: Sequence[TransactionRecord]) -> None:
    if not transactions:
        raise EmptyTransactionSetError()


def success_rate(successful: int, total: int) -> str:
    """Format successful / total as a percentage with one decimal.

    Example:
        >>> success_rate(7, 10)
        '70.0'
    """
    if total <= 0:
        raise EmptyTransactionSetError()
    return f"{Decimal(successful) * 100 / Decimal(total):.1f}"


def summarize(transactions: Sequence[TransactionRecord]) -> StatsSummary:
    """Compute aggregate statistics for a newest-first transaction list.

    Args:
        transactions: Records ordered newest-first.

    Returns:
        StatsSummary with counts, ETH volumes and gas totals.

    Raises:
        EmptyTransactionSetError: If transactions is empty.
    """
    _require_transactions(transactions)

    total = len(transactions)
    successful = sum(1 for tx in transactions if tx.success)
    outgoing = [tx for tx in transactions if tx.is_outgoing]
    incoming = [tx for tx in transactions if not tx.is_outgoing]

    total_sent = sum((tx.eth_amount for tx in outgoing), Decimal(0))
    total_received = sum((tx.eth_amount for tx in incoming), Decimal(0))
    total_gas_fees = sum((tx.total_fee_eth for tx in transactions), Decimal(0))
    total_gas_used = sum(tx.gas_used for tx in transactions)
    avg_gas_price = sum((tx.gas_price_gwei for tx in transactions), Decimal(0)) / total

    summary = StatsSummary(
        total_txns=total,
        successful_txns=successful,
        outgoing_count=len(outgoing),
        incoming_count=len(incoming),
        success_rate=success_rate(successful, total),
        total_sent=total_sent,
        total_received=total_received,
        # Fees are reported separately and never netted against transfers
        net_balance=total_received - total_sent,
        total_gas_fees=total_gas_fees,
        total_gas_used=total_gas_used,
        avg_gas_price=avg_gas_price,
        latest_tx=transactions[0].block_time,
        first_tx=transactions[-1].block_time,
    )

    log.debug(
        "stats_summarized",
        total_txns=total,
        success_rate=summary.success_rate,
        avg_gas_price=f"{avg_gas_price:.2f}",
    )
    return summary


def median(values: Sequence[Decimal]) -> Decimal:
    """Median of an already sorted, non-empty sequence."""
    mid = len(values) // 2
    if len(values) % 2:
        return values[mid]
    return (values[mid - 1] + values[mid]) / 2


def gas_stats(transactions: Sequence[TransactionRecord]) -> GasStats:
    """Compute the gas price distribution (Gwei).

    Uses a sorted copy of the gas prices; the input is left untouched.

    Raises:
        EmptyTransactionSetError: If transactions is empty.
    """
    _require_transactions(transactions)

    prices = sorted(tx.gas_price_gwei for tx in transactions)
    return GasStats(
        avg=sum(prices, Decimal(0)) / len(prices),
        median=median(prices),
        min=prices[0],
        max=prices[-1],
    )


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two timestamps, rounded up."""
    return math.ceil(abs((end - start).total_seconds()) / SECONDS_PER_DAY)


def daily_average(transactions: Sequence[TransactionRecord]) -> float:
    """Average transactions per day over the covered period.

    The period runs from the oldest (last) to the newest (first) record and
    is at least one day. Returns 0 for fewer than two records.

    Example:
        10 records spanning exactly 5 days -> 2.0
    """
    if len(transactions) < 2:
        return 0.0

    span_days = max(1, days_between(transactions[-1].block_time, transactions[0].block_time))
    return len(transactions) / span_days
