"""Transaction statistics and activity pattern analysis."""

from wallet_analyzer.core.analysis.statistics import (
    daily_average,
    days_between,
    gas_stats,
    summarize,
)
from wallet_analyzer.core.analysis.time_patterns import analyze as analyze_time_patterns

__all__ = [
    "analyze_time_patterns",
    "daily_average",
    "days_between",
    "gas_stats",
    "summarize",
]
