"""Application settings using pydantic-settings."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Wallet analyzer configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="wallet-analyzer", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    # Analytics provider - Dune
    dune_api_key: SecretStr = Field(description="Dune Analytics API key")
    dune_api_url: str = Field(
        default="https://api.dune.com/api/v1", description="Dune API base URL"
    )
    dune_query_id: int = Field(
        default=5267326, ge=1, description="Saved Dune query returning wallet transactions"
    )

    # Swap-quote provider - 1inch
    oneinch_api_key: SecretStr = Field(
        default=SecretStr(""), description="1inch API key (requests are unauthenticated when empty)"
    )
    oneinch_api_url: str = Field(default="https://api.1inch.dev", description="1inch API base URL")
    chain_id: int = Field(default=1, ge=1, description="EVM chain id (1 = Ethereum mainnet)")
    preload_token_metadata: bool = Field(
        default=False, description="Fetch the 1inch token list at startup for decimals lookup"
    )

    # HTTP behavior
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP request timeout")

    # Query polling
    poll_interval_seconds: float = Field(
        default=2.0, gt=0, description="Seconds between job status checks"
    )
    max_poll_attempts: int = Field(
        default=30, ge=1, description="Status checks before the job is considered timed out"
    )

    # Advisory placeholders (no live price feed)
    eth_usd_price: Decimal = Field(
        default=Decimal("2000"), gt=0, description="Placeholder ETH/USD rate"
    )
    reference_tx_value_usd: Decimal = Field(
        default=Decimal("1000"), gt=0, description="Placeholder swap value in USD"
    )

    @field_validator("dune_api_url", "oneinch_api_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate provider URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Provider URL must start with http:// or https://")
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]  # Values from env
