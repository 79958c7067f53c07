"""Tool-call surface."""

from wallet_analyzer.tools.wallet_tools import TOOL_DEFINITIONS, ToolResult, WalletAnalyzerTools

__all__ = ["TOOL_DEFINITIONS", "ToolResult", "WalletAnalyzerTools"]
