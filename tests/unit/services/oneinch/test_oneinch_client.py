"""Unit tests for OneInchClient and its response models."""

import pytest
import respx
from httpx import Response

from wallet_analyzer.core.exceptions import QuoteError
from wallet_analyzer.services.oneinch.client import OneInchClient
from wallet_analyzer.services.oneinch.models import SwapQuote

BASE_URL = "https://api.1inch.dev"
ETH = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


@pytest.fixture
async def oneinch_client():
    client = OneInchClient(api_key="test-1inch-key")
    yield client
    await client.close()


class TestSwapQuoteModel:
    def test_estimated_gas_aliases(self) -> None:
        assert SwapQuote.model_validate({"dstAmount": "10", "estimatedGas": 5}).estimated_gas == 5
        assert SwapQuote.model_validate({"dstAmount": "10", "gas": 7}).estimated_gas == 7

    def test_dst_amount_string_to_int(self) -> None:
        quote = SwapQuote.model_validate({"dstAmount": "3000123456789012345678", "gas": 1})
        assert quote.dst_amount == 3000123456789012345678

    def test_protocol_names_flattened_and_unique(self) -> None:
        quote = SwapQuote.model_validate(
            {
                "dstAmount": "1",
                "gas": 1,
                "protocols": [
                    [[{"name": "UNISWAP_V3", "part": 50}, {"name": "CURVE", "part": 50}]],
                    [[{"name": "CURVE", "part": 100}], [{"name": "SUSHI", "part": 100}]],
                ],
            }
        )
        assert quote.protocol_names == ["UNISWAP_V3", "CURVE", "SUSHI"]

    def test_missing_gas_rejected(self) -> None:
        with pytest.raises(ValueError):
            SwapQuote.model_validate({"dstAmount": "1"})


class TestGetQuote:
    @pytest.mark.asyncio
    @respx.mock
    async def test_quote_success(self, oneinch_client: OneInchClient) -> None:
        """
        Given: 1inch answers a quote request
        When: get_quote() is called
        Then: Params include protocols and gas, bearer auth is sent, quote is parsed
        """
        route = respx.get(f"{BASE_URL}/swap/v6.0/1/quote").mock(
            return_value=Response(
                200,
                json={
                    "dstAmount": "3000123456",
                    "gas": 182000,
                    "protocols": [[[{"name": "UNISWAP_V3", "part": 100}]]],
                },
            )
        )

        quote = await oneinch_client.get_quote(ETH, USDC, "1000000000000000000")

        assert quote.dst_amount == 3_000_123_456
        assert quote.estimated_gas == 182_000
        assert quote.protocol_names == ["UNISWAP_V3"]
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer test-1inch-key"
        assert request.url.params["src"] == ETH
        assert request.url.params["dst"] == USDC
        assert request.url.params["amount"] == "1000000000000000000"
        assert request.url.params["includeProtocols"] == "true"
        assert request.url.params["includeGas"] == "true"

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_authorization_header_without_key(self) -> None:
        route = respx.get(f"{BASE_URL}/swap/v6.0/1/quote").mock(
            return_value=Response(200, json={"dstAmount": "1", "gas": 1})
        )
        client = OneInchClient()

        await client.get_quote(ETH, USDC, "1")

        assert "Authorization" not in route.calls.last.request.headers
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_chain_id_in_path(self) -> None:
        route = respx.get(f"{BASE_URL}/swap/v6.0/137/quote").mock(
            return_value=Response(200, json={"dstAmount": "1", "gas": 1})
        )
        client = OneInchClient(chain_id=137)

        await client.get_quote(ETH, USDC, "1")

        assert route.called
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_becomes_quote_error(self, oneinch_client: OneInchClient) -> None:
        respx.get(f"{BASE_URL}/swap/v6.0/1/quote").mock(
            return_value=Response(400, json={"description": "insufficient liquidity"})
        )

        with pytest.raises(QuoteError) as exc_info:
            await oneinch_client.get_quote(ETH, USDC, "1")

        assert "Failed to get quote" in str(exc_info.value)
        assert "insufficient liquidity" in str(exc_info.value)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_quote(self, oneinch_client: OneInchClient) -> None:
        respx.get(f"{BASE_URL}/swap/v6.0/1/quote").mock(return_value=Response(200, json={"unexpected": True}))

        with pytest.raises(QuoteError, match="Malformed quote response"):
            await oneinch_client.get_quote(ETH, USDC, "1")


class TestGetTokenDecimals:
    @pytest.mark.asyncio
    @respx.mock
    async def test_builds_lowercase_address_map(self, oneinch_client: OneInchClient) -> None:
        respx.get(f"{BASE_URL}/swap/v6.0/1/tokens").mock(
            return_value=Response(
                200,
                json={
                    "tokens": {
                        USDC.lower(): {"address": USDC, "symbol": "USDC", "decimals": 6, "name": "USD Coin"},
                        "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599": {
                            "address": "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599",
                            "symbol": "WBTC",
                            "decimals": 8,
                            "name": "Wrapped BTC",
                        },
                        "broken": {"symbol": "???"},
                    }
                },
            )
        )

        decimals = await oneinch_client.get_token_decimals()

        assert decimals == {
            USDC.lower(): 6,
            "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599": 8,
        }
