"""Wallet analytics tools exposed over the tool-call protocol.

Each tool validates its input locally, fetches the wallet's transactions
through the query executor, and renders a text report. Errors never cross
the tool boundary: they are returned as a ToolResult with is_error set.
"""

import functools
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel

from wallet_analyzer.core.advisor.swap_advisor import QuoteProvider, SwapAdvisor
from wallet_analyzer.core.analysis import gas_stats
from wallet_analyzer.core.exceptions import (
    UnknownToolError,
    ValidationError,
    WalletAnalyzerError,
)
from wallet_analyzer.core.query.executor import QueryExecutionClient
from wallet_analyzer.core.reports.formatter import ReportFormatter
from wallet_analyzer.core.tokens.resolver import TokenResolver
from wallet_analyzer.core.wallet.validator import normalize_wallet_address, shorten
from wallet_analyzer.data.models.token import TokenInfo

log = structlog.get_logger(__name__)

REPORT_FORMATS = ("summary", "detailed", "raw")
DEFAULT_RECENT_LIMIT = 10
MAX_RECENT_LIMIT = 50

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "analyze_wallet",
        "description": "Analyze Ethereum wallet transactions using Dune Analytics",
        "inputSchema": {
            "type": "object",
            "properties": {
                "wallet_address": {
                    "type": "string",
                    "description": "Ethereum wallet address to analyze (0x...)",
                },
                "format": {
                    "type": "string",
                    "enum": list(REPORT_FORMATS),
                    "description": "Output format for the analysis",
                    "default": "summary",
                },
            },
            "required": ["wallet_address"],
        },
    },
    {
        "name": "recent_transactions",
        "description": "Get recent transactions for a wallet",
        "inputSchema": {
            "type": "object",
            "properties": {
                "wallet_address": {
                    "type": "string",
                    "description": "Ethereum wallet address (0x...)",
                },
                "limit": {
                    "type": "number",
                    "description": "Number of recent transactions to show (max 50)",
                    "default": DEFAULT_RECENT_LIMIT,
                },
            },
            "required": ["wallet_address"],
        },
    },
    {
        "name": "smart_swap_analyzer",
        "description": (
            "Analyze best swap opportunities based on wallet history and current market conditions"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "wallet_address": {"type": "string", "description": "Ethereum wallet address (0x...)"},
                "from_token": {"type": "string", "description": "Source token (symbol or address)"},
                "to_token": {"type": "string", "description": "Destination token (symbol or address)"},
                "amount": {"type": "string", "description": "Amount to swap (in source token units)"},
            },
            "required": ["wallet_address", "from_token", "to_token", "amount"],
        },
    },
    {
        "name": "gas_optimization_assistant",
        "description": (
            "Optimize gas usage based on historical patterns and current network conditions"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "wallet_address": {"type": "string", "description": "Ethereum wallet address (0x...)"},
                "from_token": {"type": "string", "description": "Source token for swap (optional)"},
                "to_token": {"type": "string", "description": "Destination token for swap (optional)"},
                "amount": {"type": "string", "description": "Amount to swap (optional)"},
            },
            "required": ["wallet_address"],
        },
    },
]

_TOOL_SCHEMAS = {tool["name"]: tool["inputSchema"] for tool in TOOL_DEFINITIONS}


class ToolResult(BaseModel):
    """Text payload returned to the tool caller."""

    text: str
    is_error: bool = False

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)


def no_transactions_message(wallet_address: str) -> str:
    return f"No transactions found for wallet: {wallet_address}"


def tool_boundary(
    name: str,
) -> Callable[[Callable[..., Awaitable[str]]], Callable[..., Awaitable[ToolResult]]]:
    """Turn a report-producing coroutine into one returning a ToolResult.

    Known errors become their message; anything else is logged with its
    traceback and reported by message as well.
    """

    def decorator(func: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[ToolResult]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
            try:
                text = await func(*args, **kwargs)
            except WalletAnalyzerError as e:
                log.warning("tool_failed", tool=name, error_type=type(e).__name__, error=str(e))
                return ToolResult.error(str(e))
            except Exception as e:
                log.exception("tool_crashed", tool=name, error_type=type(e).__name__)
                return ToolResult.error(str(e) or type(e).__name__)

            log.info("tool_completed", tool=name, length=len(text))
            return ToolResult(text=text)

        return wrapper

    return decorator


def coerce_limit(limit: Any) -> int:
    """Clamp a requested row count to [1, 50]; missing or zero means 10."""
    if limit is None or limit == 0:
        return DEFAULT_RECENT_LIMIT
    if isinstance(limit, bool):
        raise ValidationError("limit must be a number")
    try:
        value = int(limit)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"limit must be a number, got {limit!r}") from e
    return max(1, min(value, MAX_RECENT_LIMIT))


class WalletAnalyzerTools:
    """The four wallet tools plus name-based dispatch.

    Example:
        tools = WalletAnalyzerTools(executor, oneinch_client)
        result = await tools.call_tool("analyze_wallet", {"wallet_address": "0x..."})
    """

    def __init__(
        self,
        executor: QueryExecutionClient,
        quote_provider: QuoteProvider,
        resolver: TokenResolver | None = None,
        advisor: SwapAdvisor | None = None,
        formatter: ReportFormatter | None = None,
    ) -> None:
        self.executor = executor
        self.quote_provider = quote_provider
        self.resolver = resolver or TokenResolver()
        self.advisor = advisor or SwapAdvisor()
        self.formatter = formatter or ReportFormatter()

        self._handlers: dict[str, Callable[..., Awaitable[ToolResult]]] = {
            "analyze_wallet": self.analyze_wallet,
            "recent_transactions": self.recent_transactions,
            "smart_swap_analyzer": self.smart_swap_analyzer,
            "gas_optimization_assistant": self.gas_optimization_assistant,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Dispatch a tool call by name.

        Unknown names and missing required arguments are reported as
        error results, like any other tool failure.
        """
        handler = self._handlers.get(name)
        if handler is None:
            log.warning("unknown_tool", tool=name)
            return ToolResult.error(str(UnknownToolError(f"Unknown tool: {name}")))

        schema = _TOOL_SCHEMAS[name]
        arguments = dict(arguments or {})
        missing = [arg for arg in schema["required"] if arguments.get(arg) in (None, "")]
        if missing:
            return ToolResult.error(f"Missing required argument(s): {', '.join(missing)}")

        known = {key: value for key, value in arguments.items() if key in schema["properties"]}
        return await handler(**known)

    @tool_boundary("analyze_wallet")
    async def analyze_wallet(self, wallet_address: str, format: str | None = "summary") -> str:
        address = normalize_wallet_address(wallet_address)
        log.info("analyze_wallet_started", wallet_address=shorten(address), format=format)

        transactions = await self.executor.execute(address)
        if not transactions:
            return no_transactions_message(address)

        match format:
            case "detailed":
                return self.formatter.detailed(transactions, address)
            case "raw":
                return self.formatter.raw(transactions)
            case _:
                return self.formatter.summary(transactions, address)

    @tool_boundary("recent_transactions")
    async def recent_transactions(self, wallet_address: str, limit: Any = DEFAULT_RECENT_LIMIT) -> str:
        address = normalize_wallet_address(wallet_address)
        count = coerce_limit(limit)
        log.info("recent_transactions_started", wallet_address=shorten(address), limit=count)

        transactions = await self.executor.execute(address)
        return self.formatter.recent_transactions(transactions[:count])

    @tool_boundary("smart_swap_analyzer")
    async def smart_swap_analyzer(
        self, wallet_address: str, from_token: str, to_token: str, amount: str
    ) -> str:
        address = normalize_wallet_address(wallet_address)
        src, dst, smallest_amount = self._resolve_swap(from_token, to_token, amount)
        log.info(
            "smart_swap_started",
            wallet_address=shorten(address),
            from_token=from_token,
            to_token=to_token,
        )

        transactions = await self.executor.execute(address)
        if not transactions:
            return no_transactions_message(address)

        quote = await self.quote_provider.get_quote(src.address, dst.address, smallest_amount)
        recommendation = self.advisor.recommend(transactions, quote, from_token, to_token, str(amount))
        profile = self.advisor.historical_profile(transactions)
        output_amount = self.resolver.from_smallest_unit(quote.dst_amount, dst.decimals)

        return self.formatter.swap_analysis(recommendation, quote, output_amount, profile)

    @tool_boundary("gas_optimization_assistant")
    async def gas_optimization_assistant(
        self,
        wallet_address: str,
        from_token: str | None = None,
        to_token: str | None = None,
        amount: str | None = None,
    ) -> str:
        address = normalize_wallet_address(wallet_address)
        log.info("gas_optimization_started", wallet_address=shorten(address))

        transactions = await self.executor.execute(address)
        if not transactions:
            return no_transactions_message(address)

        recommendations = self.advisor.gas_recommendations(gas_stats(transactions))
        report = self.formatter.gas_analysis(transactions, recommendations)

        if from_token and to_token and amount:
            try:
                src, dst, smallest_amount = self._resolve_swap(from_token, to_token, amount)
                quote = await self.quote_provider.get_quote(src.address, dst.address, smallest_amount)
                estimate = self.advisor.swap_gas_savings(transactions, quote)
                report += self.formatter.swap_gas_section(estimate, from_token, to_token)
            except WalletAnalyzerError as e:
                log.warning("swap_gas_analysis_skipped", error=str(e))
                report += f"\n\n⚠️ Could not analyze swap gas: {e}"

        return report

    def _resolve_swap(self, from_token: str, to_token: str, amount: str) -> tuple[TokenInfo, TokenInfo, str]:
        src = self.resolver.resolve(from_token)
        dst = self.resolver.resolve(to_token)
        return src, dst, self.resolver.to_smallest_unit(str(amount), src.decimals)
