"""Unit tests for server wiring."""

import os
from unittest.mock import AsyncMock, patch

import mcp.types as types
import pytest

from wallet_analyzer.config.settings import Settings
from wallet_analyzer.core.exceptions import ConfigurationError, ExternalServiceError
from wallet_analyzer.server import build_context, create_server, load_settings, load_token_metadata
from wallet_analyzer.services.oneinch.client import OneInchClient

RANDOM_TOKEN = "0x1f9840a85d5af5bf1d1762f925bdaddc4201f984"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        dune_api_key="test-dune-key",  # type: ignore[arg-type]
        poll_interval_seconds=0.5,
        max_poll_attempts=4,
    )


class TestLoadSettings:
    def test_missing_dune_key_is_configuration_error(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch(
            "wallet_analyzer.server.get_settings", lambda: Settings(_env_file=None)  # type: ignore[call-arg]
        ):
            with pytest.raises(ConfigurationError) as exc_info:
                load_settings()

        assert "DUNE_API_KEY" in str(exc_info.value)


class TestBuildContext:
    async def test_wires_settings_into_components(self, settings: Settings) -> None:
        context = await build_context(settings)

        executor = context.tools.executor
        assert executor.poll_interval == 0.5
        assert executor.max_attempts == 4
        assert context.dune_client.query_id == 5267326
        assert context.oneinch_client.chain_id == 1
        assert "Authorization" not in context.oneinch_client.headers

        await context.close()

    async def test_preloads_token_metadata_when_enabled(self, settings: Settings) -> None:
        settings = settings.model_copy(update={"preload_token_metadata": True})

        with patch.object(
            OneInchClient, "get_token_decimals", new_callable=AsyncMock, return_value={RANDOM_TOKEN: 8}
        ) as mock_fetch:
            context = await build_context(settings)

        mock_fetch.assert_awaited_once()
        assert context.tools.resolver.resolve(RANDOM_TOKEN).decimals == 8
        await context.close()


class TestLoadTokenMetadata:
    async def test_failure_returns_empty_map(self) -> None:
        client = AsyncMock()
        client.get_token_decimals.side_effect = ExternalServiceError("1inch", "HTTP 401: Unauthorized", 401)

        assert await load_token_metadata(client) == {}


class TestCreateServer:
    async def test_lists_all_tools(self, settings: Settings) -> None:
        context = await build_context(settings)
        server = create_server(context.tools, settings)

        handler = server.request_handlers[types.ListToolsRequest]
        result = await handler(types.ListToolsRequest(method="tools/list"))

        names = [tool.name for tool in result.root.tools]
        assert names == [
            "analyze_wallet",
            "recent_transactions",
            "smart_swap_analyzer",
            "gas_optimization_assistant",
        ]
        await context.close()

    async def test_tool_errors_become_is_error_results(self, settings: Settings) -> None:
        context = await build_context(settings)
        server = create_server(context.tools, settings)

        handler = server.request_handlers[types.CallToolRequest]
        result = await handler(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(name="track_nft_floor", arguments={}),
            )
        )

        assert result.root.isError is True
        assert result.root.content[0].text == "Error: Unknown tool: track_nft_floor"
        await context.close()
