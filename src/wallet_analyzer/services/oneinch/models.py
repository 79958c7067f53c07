"""Pydantic models for 1inch swap API responses."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SwapQuote(BaseModel):
    """Quote returned by ``GET /swap/v6.0/{chain}/quote``.

    Amounts are integers in the token's smallest unit.

    Attributes:
        dst_amount: Estimated output amount.
        src_amount: Input amount, when echoed by the provider.
        estimated_gas: Estimated gas units for the swap.
        protocols: Nested route structure (route -> hop -> part).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    dst_amount: int = Field(alias="dstAmount")
    src_amount: int | None = Field(default=None, alias="srcAmount")
    estimated_gas: int = Field(ge=0, validation_alias=AliasChoices("estimatedGas", "gas", "estimated_gas"))
    protocols: list[Any] = Field(default_factory=list)

    @property
    def protocol_names(self) -> list[str]:
        """Protocol names in route order, without duplicates."""
        names: list[str] = []

        def walk(node: Any) -> None:
            if isinstance(node, dict):
                name = node.get("name")
                if name and name not in names:
                    names.append(str(name))
            elif isinstance(node, list):
                for child in node:
                    walk(child)

        walk(self.protocols)
        return names


class TokenListing(BaseModel):
    """One entry of ``GET /swap/v6.0/{chain}/tokens``."""

    model_config = ConfigDict(extra="ignore")

    address: str
    symbol: str
    decimals: int = Field(ge=0)
    name: str | None = None
