"""Heuristic thresholds for swap and gas recommendations."""

from decimal import Decimal
from typing import Final

# Historical average gas price bands (Gwei)
FAVORABLE_GAS_PRICE_GWEI: Final[Decimal] = Decimal("20")
CAUTION_GAS_PRICE_GWEI: Final[Decimal] = Decimal("50")
HIGH_GAS_HABIT_GWEI: Final[Decimal] = Decimal("30")
GAS_SPIKE_MULTIPLIER: Final[Decimal] = Decimal("2")

# Gas cost relative to the swapped value (percent)
HIGH_GAS_COST_RATIO_PCT: Final[Decimal] = Decimal("5")

# Historical success rate considered excellent (percent)
HIGH_CONFIDENCE_SUCCESS_RATE_PCT: Final[Decimal] = Decimal("95")

# Gas price used to cost the live quote (Gwei)
REFERENCE_GAS_PRICE_GWEI: Final[Decimal] = Decimal("20")

# What-if gas prices for the savings estimate (Gwei)
TARGET_GAS_PRICES_GWEI: Final[tuple[Decimal, ...]] = (Decimal("15"), Decimal("10"))

# Price placeholders until a price feed is wired in
PLACEHOLDER_ETH_USD: Final[Decimal] = Decimal("2000")
PLACEHOLDER_TX_VALUE_USD: Final[Decimal] = Decimal("1000")

GWEI_PER_ETH: Final[Decimal] = Decimal("1000000000")
