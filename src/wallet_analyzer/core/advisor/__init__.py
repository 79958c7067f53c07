"""Swap and gas advisory heuristics."""

from wallet_analyzer.core.advisor.swap_advisor import (
    GasSavingsEstimate,
    HistoricalProfile,
    QuoteProvider,
    SwapAdvisor,
    SwapRecommendation,
)
from wallet_analyzer.core.advisor.thresholds import AdvisoryThresholds

__all__ = [
    "AdvisoryThresholds",
    "GasSavingsEstimate",
    "HistoricalProfile",
    "QuoteProvider",
    "SwapAdvisor",
    "SwapRecommendation",
]
