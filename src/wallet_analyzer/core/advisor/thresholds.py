"""Tunable thresholds for the swap and gas heuristics."""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from wallet_analyzer.constants.advisory import (
    CAUTION_GAS_PRICE_GWEI,
    FAVORABLE_GAS_PRICE_GWEI,
    GAS_SPIKE_MULTIPLIER,
    HIGH_CONFIDENCE_SUCCESS_RATE_PCT,
    HIGH_GAS_COST_RATIO_PCT,
    HIGH_GAS_HABIT_GWEI,
    PLACEHOLDER_ETH_USD,
    PLACEHOLDER_TX_VALUE_USD,
    REFERENCE_GAS_PRICE_GWEI,
    TARGET_GAS_PRICES_GWEI,
)

if TYPE_CHECKING:
    from wallet_analyzer.config.settings import Settings


@dataclass(frozen=True)
class AdvisoryThresholds:
    """Threshold set used by SwapAdvisor.

    Attributes:
        favorable_gas_price_gwei: Historical average below this is favorable.
        caution_gas_price_gwei: Historical average above this warrants caution.
        high_gas_habit_gwei: Average above this is flagged as a high gas habit.
        gas_spike_multiplier: max > avg * multiplier flags excessive spikes.
        high_gas_cost_ratio_pct: Gas cost share of the swap value flagged as high.
        high_confidence_success_rate_pct: Success rate above this is excellent.
        reference_gas_price_gwei: Gas price used to cost the live quote.
        target_gas_prices_gwei: What-if prices for the savings estimate,
            highest first; the last one is the savings baseline.
        eth_usd_price: Placeholder ETH/USD rate.
        tx_value_usd: Placeholder swap value in USD.
    """

    favorable_gas_price_gwei: Decimal = FAVORABLE_GAS_PRICE_GWEI
    caution_gas_price_gwei: Decimal = CAUTION_GAS_PRICE_GWEI
    high_gas_habit_gwei: Decimal = HIGH_GAS_HABIT_GWEI
    gas_spike_multiplier: Decimal = GAS_SPIKE_MULTIPLIER
    high_gas_cost_ratio_pct: Decimal = HIGH_GAS_COST_RATIO_PCT
    high_confidence_success_rate_pct: Decimal = HIGH_CONFIDENCE_SUCCESS_RATE_PCT
    reference_gas_price_gwei: Decimal = REFERENCE_GAS_PRICE_GWEI
    target_gas_prices_gwei: tuple[Decimal, ...] = TARGET_GAS_PRICES_GWEI
    eth_usd_price: Decimal = PLACEHOLDER_ETH_USD
    tx_value_usd: Decimal = PLACEHOLDER_TX_VALUE_USD

    def __post_init__(self) -> None:
        if not self.target_gas_prices_gwei:
            raise ValueError("target_gas_prices_gwei must not be empty")
        if self.tx_value_usd <= 0:
            raise ValueError("tx_value_usd must be positive")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AdvisoryThresholds":
        """Build thresholds with the price placeholders taken from settings."""
        return cls(
            eth_usd_price=settings.eth_usd_price,
            tx_value_usd=settings.reference_tx_value_usd,
        )
