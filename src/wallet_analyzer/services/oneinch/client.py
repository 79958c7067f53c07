"""1inch swap API client for live swap quotes.

Only read-only endpoints are wrapped: quotes and the token list. Transactions are never
built or submitted, so the swap calldata endpoint is not wrapped.

API Documentation: https://portal.1inch.dev/documentation/apis/swap
"""

import structlog
from pydantic import ValidationError as PydanticValidationError

from wallet_analyzer.core.exceptions import ExternalServiceError, QuoteError
from wallet_analyzer.services.base import BaseAPIClient
from wallet_analyzer.services.oneinch.models import SwapQuote, TokenListing

log = structlog.get_logger(__name__)

SERVICE_NAME = "1inch"


class OneInchClient(BaseAPIClient):
    """Async client for the 1inch swap API.

    Example:
        client = OneInchClient(api_key="...")
        quote = await client.get_quote(eth_address, usdc_address, "1000000000000000000")
        print(quote.dst_amount, quote.estimated_gas)
        await client.close()
    """

    DEFAULT_BASE_URL = "https://api.1inch.dev"

    def __init__(
        self,
        api_key: str = "",
        chain_id: int = 1,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize OneInchClient.

        Args:
            api_key: Bearer token; omitted from requests when empty.
            chain_id: EVM chain id (default: 1, Ethereum mainnet).
            base_url: 1inch API base URL.
            timeout: Request timeout in seconds.
        """
        headers = {"accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self.chain_id = chain_id
        super().__init__(base_url=base_url, service=SERVICE_NAME, timeout=timeout, headers=headers)
        log.info("oneinch_client_initialized", base_url=base_url, chain_id=chain_id, authenticated=bool(api_key))

    async def get_quote(self, src_token: str, dst_token: str, amount: str) -> SwapQuote:
        """Get a swap quote.

        Args:
            src_token: Source token address.
            dst_token: Destination token address.
            amount: Input amount in the source token's smallest unit.

        Returns:
            SwapQuote with output amount, gas estimate and route.

        Raises:
            QuoteError: If the request fails or the response is malformed.
        """
        params = {
            "src": src_token,
            "dst": dst_token,
            "amount": amount,
            "includeProtocols": "true",
            "includeGas": "true",
        }
        log.info("oneinch_quote_requested", src=src_token, dst=dst_token, amount=amount)

        try:
            response = await self.get(f"/swap/v6.0/{self.chain_id}/quote", params=params)
            payload = await self._json(response)
        except ExternalServiceError as e:
            log.error("oneinch_quote_failed", error=str(e), status_code=e.status_code)
            raise QuoteError(
                service=SERVICE_NAME,
                message=f"Failed to get quote: {e}",
                status_code=e.status_code,
            ) from e

        try:
            quote = SwapQuote.model_validate(payload)
        except PydanticValidationError as e:
            log.error("oneinch_quote_malformed", error_count=e.error_count())
            raise QuoteError(service=SERVICE_NAME, message="Malformed quote response") from e

        log.info(
            "oneinch_quote_received",
            dst_amount=str(quote.dst_amount),
            estimated_gas=quote.estimated_gas,
            protocols=quote.protocol_names[:3],
        )
        return quote

    async def get_token_decimals(self) -> dict[str, int]:
        """Fetch the chain's token list as an address -> decimals map.

        Entries that fail validation are skipped.

        Raises:
            ExternalServiceError: If the request fails.
        """
        response = await self.get(f"/swap/v6.0/{self.chain_id}/tokens")
        payload = await self._json(response)

        tokens = payload.get("tokens", {}) if isinstance(payload, dict) else {}
        decimals: dict[str, int] = {}
        for item in tokens.values():
            try:
                listing = TokenListing.model_validate(item)
            except PydanticValidationError as e:
                log.warning("token_listing_parse_error", error=str(e))
                continue
            decimals[listing.address.lower()] = listing.decimals

        log.info("token_metadata_fetched", token_count=len(decimals))
        return decimals
