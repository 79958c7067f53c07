"""Data models shared across the analyzer."""

from wallet_analyzer.data.models.analytics import DAY_NAMES, GasStats, StatsSummary, TimePatterns
from wallet_analyzer.data.models.query import JobStatus, QueryJob, QueryState
from wallet_analyzer.data.models.token import TokenInfo
from wallet_analyzer.data.models.transaction import Direction, TransactionRecord

__all__ = [
    "DAY_NAMES",
    "Direction",
    "GasStats",
    "JobStatus",
    "QueryJob",
    "QueryState",
    "StatsSummary",
    "TimePatterns",
    "TokenInfo",
    "TransactionRecord",
]
