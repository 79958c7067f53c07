"""Token metadata model."""

from pydantic import BaseModel, ConfigDict, Field


class TokenInfo(BaseModel):
    """A resolved token: canonical address plus unit-conversion factor."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(description="Token contract address (or native ETH pseudo-address)")
    decimals: int = Field(ge=0, le=36, description="Decimal places of the smallest unit")
    symbol: str | None = Field(default=None, description="Registry symbol, if resolved by symbol")
