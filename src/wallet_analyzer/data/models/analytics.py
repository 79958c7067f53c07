"""Derived analytics models.

All models here are immutable and recomputed from the transaction list on
every call; nothing is cached or updated incrementally.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


class StatsSummary(BaseModel):
    """Aggregate statistics over a wallet's transactions.

    Attributes:
        total_txns: Number of transactions.
        successful_txns: Number of successful transactions.
        outgoing_count: Transactions sent by the wallet.
        incoming_count: Transactions received by the wallet.
        success_rate: successful / total as a percentage, one decimal ("70.0").
        total_sent: ETH sent in outgoing transactions.
        total_received: ETH received in incoming transactions.
        net_balance: total_received - total_sent (fees are not netted).
        total_gas_fees: Sum of fees in ETH.
        total_gas_used: Sum of gas units.
        avg_gas_price: Mean gas price in Gwei.
        latest_tx: Timestamp of the newest transaction (index 0).
        first_tx: Timestamp of the oldest transaction (last index).
    """

    model_config = ConfigDict(frozen=True)

    total_txns: int
    successful_txns: int
    outgoing_count: int
    incoming_count: int
    success_rate: str
    total_sent: Decimal
    total_received: Decimal
    net_balance: Decimal
    total_gas_fees: Decimal
    total_gas_used: int
    avg_gas_price: Decimal
    latest_tx: datetime
    first_tx: datetime

    @property
    def failed_txns(self) -> int:
        """Number of failed transactions."""
        return self.total_txns - self.successful_txns

    @property
    def failure_rate(self) -> str:
        """Failed share as a percentage, one decimal."""
        return f"{Decimal(100) - Decimal(self.success_rate):.1f}"

    @property
    def avg_gas_per_tx(self) -> Decimal:
        """Mean gas units per transaction."""
        return Decimal(self.total_gas_used) / Decimal(self.total_txns)


class GasStats(BaseModel):
    """Gas price distribution in Gwei."""

    model_config = ConfigDict(frozen=True)

    avg: Decimal
    median: Decimal
    min: Decimal
    max: Decimal


class TimePatterns(BaseModel):
    """Transaction counts per UTC hour and per weekday (Sunday = 0)."""

    model_config = ConfigDict(frozen=True)

    hour_counts: tuple[int, ...] = Field(min_length=24, max_length=24)
    day_counts: tuple[int, ...] = Field(min_length=7, max_length=7)
    most_active_hour: int = Field(ge=0, le=23)
    most_active_day: str
