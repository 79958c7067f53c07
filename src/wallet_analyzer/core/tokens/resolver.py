"""Token symbol/address resolution and unit conversion.

Amounts are scaled with Decimal arithmetic so that values such as
``0.1`` ETH become exactly ``100000000000000000`` wei.
"""

from collections.abc import Mapping
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from types import MappingProxyType

import structlog

from wallet_analyzer.constants.token import COMMON_TOKENS, DEFAULT_TOKEN_DECIMALS
from wallet_analyzer.core.exceptions import InvalidAmountError, UnknownTokenError
from wallet_analyzer.core.wallet.validator import is_valid_ethereum_address
from wallet_analyzer.data.models.token import TokenInfo

log = structlog.get_logger(__name__)

DEFAULT_TOKEN_REGISTRY: Mapping[str, TokenInfo] = MappingProxyType(
    {
        symbol: TokenInfo(address=address, decimals=decimals, symbol=symbol)
        for symbol, (address, decimals) in COMMON_TOKENS.items()
    }
)


class TokenResolver:
    """Resolve token symbols or addresses to a TokenInfo.

    The registry and the optional metadata map are copied into read-only
    views at construction and never mutated, so one resolver can be shared
    by concurrent tool calls.

    Attributes:
        registry: Symbol (uppercase) -> TokenInfo.
        supported_symbols: Registry symbols in declaration order.

    Example:
        resolver = TokenResolver()
        usdc = resolver.resolve("usdc")
        resolver.to_smallest_unit("1.5", usdc.decimals)  # "1500000"
    """

    def __init__(
        self,
        registry: Mapping[str, TokenInfo] | None = None,
        metadata: Mapping[str, int] | None = None,
    ) -> None:
        """Initialize TokenResolver.

        Args:
            registry: Symbol -> TokenInfo (default: DEFAULT_TOKEN_REGISTRY).
            metadata: Extra address -> decimals entries, e.g. from the quote
                provider's token list. Consulted for raw-address inputs.
        """
        source = DEFAULT_TOKEN_REGISTRY if registry is None else registry
        self.registry: Mapping[str, TokenInfo] = MappingProxyType(
            {symbol.upper(): info for symbol, info in source.items()}
        )
        decimals_by_address = {info.address.lower(): info.decimals for info in self.registry.values()}
        for address, decimals in (metadata or {}).items():
            decimals_by_address[address.lower()] = decimals
        self._decimals_by_address: Mapping[str, int] = MappingProxyType(decimals_by_address)

    @property
    def supported_symbols(self) -> list[str]:
        return list(self.registry)

    def resolve(self, token: str) -> TokenInfo:
        """Resolve a symbol (case-insensitive) or a raw address.

        Args:
            token: Symbol such as "eth" or a 0x-prefixed 40-hex address.

        Returns:
            TokenInfo; raw addresses are returned unchanged.

        Raises:
            UnknownTokenError: If the token is neither an address nor a known symbol.
        """
        candidate = (token or "").strip()

        if is_valid_ethereum_address(candidate):
            return TokenInfo(address=candidate, decimals=self.decimals_for(candidate))

        info = self.registry.get(candidate.upper())
        if info is None:
            log.info("unknown_token", token=candidate)
            raise UnknownTokenError(candidate, self.supported_symbols)
        return info

    def decimals_for(self, address: str) -> int:
        """Look up decimals for an address, defaulting to 18."""
        return self._decimals_by_address.get(address.lower(), DEFAULT_TOKEN_DECIMALS)

    @staticmethod
    def to_smallest_unit(amount: str, decimals: int) -> str:
        """Convert a human amount into an integer smallest-unit string.

        Args:
            amount: Decimal string such as "1.5".
            decimals: Token decimals.

        Returns:
            ``amount * 10**decimals`` truncated toward zero, e.g. "1500000".

        Raises:
            InvalidAmountError: If amount is not a finite positive number, or
                is smaller than one smallest unit.
        """
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(f"Invalid amount: {amount!r}") from e

        if not value.is_finite() or value <= 0:
            raise InvalidAmountError(f"Amount must be a positive number, got {amount!r}")

        # uint256 amounts need up to 78 significant digits
        with localcontext() as ctx:
            ctx.prec = 80
            try:
                scaled = value.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_DOWN)
            except InvalidOperation as e:
                raise InvalidAmountError(f"Amount {amount!r} is too large") from e
        if scaled == 0:
            raise InvalidAmountError(
                f"Amount {amount!r} is below the token's smallest unit ({decimals} decimals)"
            )
        return str(int(scaled))

    @staticmethod
    def from_smallest_unit(value: int | str, decimals: int) -> Decimal:
        """Convert an integer smallest-unit amount to human units."""
        return Decimal(int(value)).scaleb(-decimals)
