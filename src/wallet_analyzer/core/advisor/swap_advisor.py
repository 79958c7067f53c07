"""Swap and gas advisory heuristics.

Combines a live swap quote with the wallet's historical statistics. Swap
history is approximated from successful transactions since calldata is not
decoded.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

import structlog

from wallet_analyzer.constants.advisory import GWEI_PER_ETH
from wallet_analyzer.core.advisor.thresholds import AdvisoryThresholds
from wallet_analyzer.core.analysis.statistics import gas_stats as compute_gas_stats
from wallet_analyzer.core.analysis.statistics import summarize
from wallet_analyzer.core.exceptions import EmptyTransactionSetError
from wallet_analyzer.data.models.analytics import GasStats, StatsSummary
from wallet_analyzer.data.models.transaction import TransactionRecord
from wallet_analyzer.services.oneinch.models import SwapQuote

log = structlog.get_logger(__name__)

OFF_PEAK_TIP = "📊 Best times for low gas: Early morning UTC (2-8 AM) and weekends."
BATCHING_TIP = "🎯 Consider batching multiple operations to save on gas costs."


class QuoteProvider(Protocol):
    """Capability of a swap-quote backend."""

    async def get_quote(self, src: str, dst: str, amount: str) -> SwapQuote:
        """Quote swapping `amount` (smallest unit of src) into dst."""
        ...


def gas_cost_eth(gas_units: int, gas_price_gwei: Decimal) -> Decimal:
    """Linear gas cost: units * price (Gwei) / 1e9."""
    return Decimal(gas_units) * gas_price_gwei / GWEI_PER_ETH


@dataclass(frozen=True)
class HistoricalProfile:
    """Swap proxy built from successful transactions."""

    swap_count: int
    avg_gas_price: Decimal
    success_ratio_pct: Decimal


@dataclass(frozen=True)
class SwapRecommendation:
    """Advice for one quoted swap.

    Attributes:
        lines: Recommendation sentences, in display order.
        summary: Wallet statistics the advice was derived from.
        estimated_gas_cost_eth: Quote gas cost at the reference gas price.
        gas_cost_ratio_pct: Gas cost as a share of the placeholder swap value.
        favorable_gas: Historical average gas price is below the favorable band.
        caution_gas: Historical average gas price is above the caution band.
        high_cost_ratio: Gas cost ratio exceeds the threshold.
        high_confidence: Historical success rate exceeds the threshold.
    """

    from_token: str
    to_token: str
    amount: str
    lines: tuple[str, ...]
    summary: StatsSummary
    estimated_gas_cost_eth: Decimal
    gas_cost_ratio_pct: Decimal
    favorable_gas: bool = False
    caution_gas: bool = False
    high_cost_ratio: bool = False
    high_confidence: bool = False


@dataclass(frozen=True)
class GasSavingsEstimate:
    """Swap gas cost at the user's average price and at lower target prices."""

    estimated_gas: int
    avg_gas_price: Decimal
    cost_at_average: Decimal
    target_costs: tuple[tuple[Decimal, Decimal], ...] = field(default_factory=tuple)
    potential_savings: Decimal = Decimal(0)


class SwapAdvisor:
    """Heuristic swap and gas advisor.

    Stateless apart from its immutable thresholds; safe to share between
    concurrent tool calls.
    """

    def __init__(self, thresholds: AdvisoryThresholds | None = None) -> None:
        self.thresholds = thresholds or AdvisoryThresholds()

    def estimate_quote_gas_cost(self, quote: SwapQuote) -> Decimal:
        """Quote gas cost in ETH at the reference gas price."""
        return gas_cost_eth(quote.estimated_gas, self.thresholds.reference_gas_price_gwei)

    def gas_cost_ratio(self, gas_cost: Decimal) -> Decimal:
        """Gas cost in USD as a percentage of the placeholder swap value."""
        t = self.thresholds
        return gas_cost * t.eth_usd_price / t.tx_value_usd * 100

    def recommend(
        self,
        transactions: Sequence[TransactionRecord],
        quote: SwapQuote,
        from_token: str,
        to_token: str,
        amount: str,
    ) -> SwapRecommendation:
        """Build swap recommendations from history and a live quote.

        Raises:
            EmptyTransactionSetError: If transactions is empty.
        """
        t = self.thresholds
        summary = summarize(transactions)
        lines: list[str] = []

        favorable = summary.avg_gas_price < t.favorable_gas_price_gwei
        caution = summary.avg_gas_price > t.caution_gas_price_gwei
        if favorable:
            lines.append("✅ You typically use low gas prices. Current network conditions are favorable.")
        elif caution:
            lines.append("⚠️ You often pay high gas fees. Consider waiting for lower network congestion.")

        gas_cost = self.estimate_quote_gas_cost(quote)
        ratio = self.gas_cost_ratio(gas_cost)
        high_ratio = ratio > t.high_gas_cost_ratio_pct
        if high_ratio:
            lines.append(
                f"💰 Gas cost is {ratio:.1f}% of transaction value. "
                "Consider larger amounts or wait for lower gas."
            )
        else:
            lines.append(f"✅ Gas cost is {ratio:.1f}% of transaction value - reasonable for this swap.")

        high_confidence = Decimal(summary.success_rate) > t.high_confidence_success_rate_pct
        if high_confidence:
            lines.append("🎯 Your success rate is excellent! This swap should execute smoothly.")

        log.debug(
            "swap_recommendation_built",
            from_token=from_token,
            to_token=to_token,
            gas_cost_eth=f"{gas_cost:.6f}",
            gas_cost_ratio_pct=f"{ratio:.2f}",
        )

        return SwapRecommendation(
            from_token=from_token,
            to_token=to_token,
            amount=amount,
            lines=tuple(lines),
            summary=summary,
            estimated_gas_cost_eth=gas_cost,
            gas_cost_ratio_pct=ratio,
            favorable_gas=favorable,
            caution_gas=caution,
            high_cost_ratio=high_ratio,
            high_confidence=high_confidence,
        )

    def historical_profile(self, transactions: Sequence[TransactionRecord]) -> HistoricalProfile:
        """Summarize successful transactions as a stand-in for past swaps.

        Raises:
            EmptyTransactionSetError: If transactions is empty.
        """
        if not transactions:
            raise EmptyTransactionSetError()

        swaps = [tx for tx in transactions if tx.success]
        avg_gas_price = compute_gas_stats(swaps).avg if swaps else Decimal(0)
        return HistoricalProfile(
            swap_count=len(swaps),
            avg_gas_price=avg_gas_price,
            success_ratio_pct=Decimal(len(swaps)) * 100 / Decimal(len(transactions)),
        )

    def gas_recommendations(self, stats: GasStats) -> list[str]:
        """Gas habit advice; the timing and batching tips are always included."""
        t = self.thresholds
        lines = []

        if stats.avg > t.high_gas_habit_gwei:
            lines.append(
                "🔥 You typically use high gas prices. Consider using lower gas during off-peak hours."
            )

        if stats.max > stats.avg * t.gas_spike_multiplier:
            lines.append("⚠️ Some transactions used excessive gas. Check gas estimates before confirming.")

        lines.append(OFF_PEAK_TIP)
        lines.append(BATCHING_TIP)
        return lines

    def swap_gas_savings(
        self, transactions: Sequence[TransactionRecord], quote: SwapQuote
    ) -> GasSavingsEstimate:
        """Cost the quoted swap at the user's average gas price and at lower targets.

        Savings are measured against the lowest target and never negative.

        Raises:
            EmptyTransactionSetError: If transactions is empty.
        """
        avg_gas_price = compute_gas_stats(transactions).avg
        cost_at_average = gas_cost_eth(quote.estimated_gas, avg_gas_price)
        target_costs = tuple(
            (price, gas_cost_eth(quote.estimated_gas, price))
            for price in self.thresholds.target_gas_prices_gwei
        )
        baseline = target_costs[-1][1]

        return GasSavingsEstimate(
            estimated_gas=quote.estimated_gas,
            avg_gas_price=avg_gas_price,
            cost_at_average=cost_at_average,
            target_costs=target_costs,
            potential_savings=max(Decimal(0), cost_at_average - baseline),
        )
