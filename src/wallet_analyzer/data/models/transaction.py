"""Transaction-related Pydantic models.

This module defines the immutable record returned by the analytics
provider for every on-chain transaction of the analyzed wallet.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Direction(str, Enum):
    """Transfer direction relative to the analyzed wallet."""

    OUTGOING = "Outgoing"
    INCOMING = "Incoming"


class TransactionRecord(BaseModel):
    """One on-chain transaction of the analyzed wallet.

    Field names match the provider's result columns, so a result row can be
    validated directly with ``TransactionRecord.model_validate(row)``.

    Records for a wallet arrive ordered newest-first: index 0 is the most
    recent transaction and the last index is the oldest.

    Example:
        tx = TransactionRecord(
            block_time=datetime(2024, 1, 1, tzinfo=UTC),
            block_number=18_908_000,
            transaction_hash="0xabc...",
            from_address="0x1111...",
            to_address="0x2222...",
            eth_amount=Decimal("0.5"),
            gas_used=21_000,
            gas_price_gwei=Decimal("18.2"),
            total_fee_eth=Decimal("0.0003822"),
            success=True,
            nonce=42,
            direction=Direction.OUTGOING,
        )
    """

    model_config = ConfigDict(frozen=True)

    block_time: datetime = Field(description="Block timestamp (UTC)")
    block_number: int = Field(ge=0, description="Block height")
    transaction_hash: str = Field(description="Transaction hash")
    from_address: str = Field(description="Sender address")
    to_address: str | None = Field(default=None, description="Recipient (None for contract creation)")
    eth_amount: Decimal = Field(default=Decimal(0), description="ETH value transferred")
    gas_used: int = Field(default=0, ge=0, description="Gas units consumed")
    gas_price_gwei: Decimal = Field(default=Decimal(0), description="Effective gas price in Gwei")
    total_fee_eth: Decimal = Field(default=Decimal(0), description="gas_used * gas_price in ETH")
    success: bool = Field(description="Whether the transaction succeeded")
    nonce: int = Field(default=0, ge=0, description="Sender nonce")
    direction: Direction = Field(description="Outgoing or Incoming")

    @field_validator("block_time", mode="before")
    @classmethod
    def parse_block_time(cls, v: Any) -> Any:
        """Accept provider timestamps such as ``2024-01-01 12:00:00.000 UTC``."""
        if isinstance(v, str):
            text = v.strip()
            if text.endswith(" UTC"):
                text = text[: -len(" UTC")] + "+00:00"
            return text
        return v

    @field_validator("block_time")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as UTC and normalize aware ones to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)

    @field_serializer("eth_amount", "gas_price_gwei", "total_fee_eth", when_used="json")
    def decimal_as_number(self, v: Decimal) -> float:
        """Emit amounts as JSON numbers, as the provider returns them."""
        return float(v)

    @field_validator("eth_amount", "gas_price_gwei", "total_fee_eth", "gas_used", "nonce", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        """Treat null numeric columns as zero."""
        return 0 if v is None else v

    @property
    def is_outgoing(self) -> bool:
        """Check if the wallet sent this transaction."""
        return self.direction == Direction.OUTGOING
