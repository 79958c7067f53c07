"""Unit tests for TokenResolver."""

from decimal import Decimal
from types import MappingProxyType

import pytest

from wallet_analyzer.constants.token import NATIVE_ETH_ADDRESS
from wallet_analyzer.core.exceptions import InvalidAmountError, UnknownTokenError
from wallet_analyzer.core.tokens.resolver import DEFAULT_TOKEN_REGISTRY, TokenResolver
from wallet_analyzer.data.models.token import TokenInfo

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
RANDOM_TOKEN = "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984"


@pytest.fixture
def resolver() -> TokenResolver:
    return TokenResolver()


class TestResolve:
    """Tests for TokenResolver.resolve()."""

    def test_symbol_is_case_insensitive(self, resolver: TokenResolver) -> None:
        assert resolver.resolve("eth") == resolver.resolve("ETH")
        assert resolver.resolve("Usdc") == resolver.resolve("USDC")

    def test_eth_resolves_to_native_address(self, resolver: TokenResolver) -> None:
        info = resolver.resolve("ETH")
        assert info.address == NATIVE_ETH_ADDRESS
        assert info.decimals == 18

    @pytest.mark.parametrize(
        ("symbol", "decimals"),
        [("ETH", 18), ("WETH", 18), ("DAI", 18), ("WBTC", 18), ("USDT", 6), ("USDC", 6)],
    )
    def test_registry_decimals(self, resolver: TokenResolver, symbol: str, decimals: int) -> None:
        assert resolver.resolve(symbol).decimals == decimals

    def test_address_returned_unchanged(self, resolver: TokenResolver) -> None:
        """
        Given: A 42-character hex address
        When: resolve() is called
        Then: The address is returned exactly as given
        """
        info = resolver.resolve(RANDOM_TOKEN)
        assert info.address == RANDOM_TOKEN
        assert info.decimals == 18

    def test_known_address_uses_registry_decimals(self, resolver: TokenResolver) -> None:
        info = resolver.resolve(USDC.lower())
        assert info.address == USDC.lower()
        assert info.decimals == 6

    def test_metadata_overrides_decimals_for_addresses(self) -> None:
        resolver = TokenResolver(metadata={RANDOM_TOKEN.lower(): 8})
        assert resolver.resolve(RANDOM_TOKEN).decimals == 8

    def test_unknown_symbol_lists_supported(self, resolver: TokenResolver) -> None:
        with pytest.raises(UnknownTokenError) as exc_info:
            resolver.resolve("FOO")

        assert exc_info.value.token == "FOO"
        assert exc_info.value.supported == ["ETH", "USDT", "USDC", "DAI", "WETH", "WBTC"]
        assert "Unknown token: FOO" in str(exc_info.value)

    def test_short_hex_is_not_an_address(self, resolver: TokenResolver) -> None:
        with pytest.raises(UnknownTokenError):
            resolver.resolve("0x1234")

    def test_custom_registry(self) -> None:
        registry = MappingProxyType({"abc": TokenInfo(address=RANDOM_TOKEN, decimals=9, symbol="ABC")})
        resolver = TokenResolver(registry=registry)

        assert resolver.resolve("ABC").decimals == 9
        assert resolver.supported_symbols == ["ABC"]
        with pytest.raises(UnknownTokenError):
            resolver.resolve("ETH")

    def test_default_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_TOKEN_REGISTRY["NEW"] = TokenInfo(address=RANDOM_TOKEN, decimals=18)  # type: ignore[index]


class TestUnitConversion:
    """Tests for to_smallest_unit() / from_smallest_unit()."""

    def test_exact_decimal_scaling(self) -> None:
        assert TokenResolver.to_smallest_unit("0.1", 18) == "100000000000000000"
        assert TokenResolver.to_smallest_unit("1.5", 6) == "1500000"
        assert TokenResolver.to_smallest_unit("1", 18) == "1000000000000000000"

    def test_truncates_toward_zero(self) -> None:
        assert TokenResolver.to_smallest_unit("1.2345678", 6) == "1234567"

    def test_large_amount_keeps_precision(self) -> None:
        assert TokenResolver.to_smallest_unit("123456789.123456789123456789", 18) == (
            "123456789123456789123456789"
        )

    @pytest.mark.parametrize("amount", ["abc", "", "0", "-1", "NaN", "Infinity"])
    def test_invalid_amounts(self, amount: str) -> None:
        with pytest.raises(InvalidAmountError):
            TokenResolver.to_smallest_unit(amount, 18)

    def test_below_smallest_unit(self) -> None:
        with pytest.raises(InvalidAmountError) as exc_info:
            TokenResolver.to_smallest_unit("0.0000001", 6)
        assert "smallest unit" in str(exc_info.value)

    def test_from_smallest_unit(self) -> None:
        assert TokenResolver.from_smallest_unit(3_000_123_456, 6) == Decimal("3000.123456")
        assert TokenResolver.from_smallest_unit("1000000000000000000", 18) == Decimal(1)
