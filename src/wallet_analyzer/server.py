"""Wallet analyzer MCP server entry point.

Wires settings -> provider clients -> tools and serves them over stdio.
"""

import asyncio
from dataclasses import dataclass

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError as PydanticValidationError

from wallet_analyzer import __version__
from wallet_analyzer.config import Settings, get_settings
from wallet_analyzer.config.logging import configure_logging
from wallet_analyzer.core.advisor import AdvisoryThresholds, SwapAdvisor
from wallet_analyzer.core.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    WalletAnalyzerError,
)
from wallet_analyzer.core.query import QueryExecutionClient
from wallet_analyzer.core.tokens.resolver import TokenResolver
from wallet_analyzer.services.dune import DuneClient
from wallet_analyzer.services.oneinch import OneInchClient
from wallet_analyzer.tools.wallet_tools import TOOL_DEFINITIONS, WalletAnalyzerTools

log = structlog.get_logger(__name__)


@dataclass
class AppContext:
    """Everything a running server owns."""

    tools: WalletAnalyzerTools
    dune_client: DuneClient
    oneinch_client: OneInchClient

    async def close(self) -> None:
        await self.dune_client.close()
        await self.oneinch_client.close()


def load_settings() -> Settings:
    """Load settings, reporting missing credentials as ConfigurationError."""
    try:
        return get_settings()
    except PydanticValidationError as e:
        missing = [".".join(str(loc) for loc in err["loc"]).upper() for err in e.errors()]
        raise ConfigurationError(f"Invalid or missing configuration: {', '.join(missing)}") from e


async def load_token_metadata(client: OneInchClient) -> dict[str, int]:
    """Fetch address -> decimals from the quote provider; empty on failure."""
    try:
        metadata = await client.get_token_decimals()
    except ExternalServiceError as e:
        log.warning("token_metadata_preload_failed", error=str(e))
        return {}
    log.info("token_metadata_preloaded", token_count=len(metadata))
    return metadata


async def build_context(settings: Settings) -> AppContext:
    """Create provider clients and the tool set from settings."""
    dune_client = DuneClient(
        api_key=settings.dune_api_key.get_secret_value(),
        query_id=settings.dune_query_id,
        base_url=settings.dune_api_url,
        timeout=settings.request_timeout_seconds,
    )
    oneinch_client = OneInchClient(
        api_key=settings.oneinch_api_key.get_secret_value(),
        chain_id=settings.chain_id,
        base_url=settings.oneinch_api_url,
        timeout=settings.request_timeout_seconds,
    )

    metadata: dict[str, int] = {}
    if settings.preload_token_metadata:
        metadata = await load_token_metadata(oneinch_client)

    tools = WalletAnalyzerTools(
        executor=QueryExecutionClient(
            dune_client,
            poll_interval=settings.poll_interval_seconds,
            max_attempts=settings.max_poll_attempts,
        ),
        quote_provider=oneinch_client,
        resolver=TokenResolver(metadata=metadata),
        advisor=SwapAdvisor(AdvisoryThresholds.from_settings(settings)),
    )
    return AppContext(tools=tools, dune_client=dune_client, oneinch_client=oneinch_client)


def create_server(tools: WalletAnalyzerTools, settings: Settings) -> Server:
    """Register the tool catalogue and dispatcher on an MCP server."""
    server = Server(settings.app_name, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["inputSchema"],
            )
            for tool in TOOL_DEFINITIONS
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        result = await tools.call_tool(name, arguments or {})
        if result.is_error:
            # The server reports raised errors as isError results carrying the message
            raise WalletAnalyzerError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def serve(settings: Settings) -> None:
    context = await build_context(settings)
    server = create_server(context.tools, settings)

    log.info("server_starting", app=settings.app_name, version=__version__, tools=context.tools.tool_names)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await context.close()
        log.info("server_stopped")


def main() -> None:
    """Console entry point: ``wallet-analyzer``."""
    settings = load_settings()
    configure_logging()
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
