"""Text report rendering."""

from wallet_analyzer.core.reports.formatter import ReportFormatter

__all__ = ["ReportFormatter"]
