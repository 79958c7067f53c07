"""Analytics query execution."""

from wallet_analyzer.core.query.executor import AnalyticsProvider, QueryExecutionClient

__all__ = ["AnalyticsProvider", "QueryExecutionClient"]
