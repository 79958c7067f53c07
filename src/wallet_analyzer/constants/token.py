"""Token registry constants for Ethereum mainnet."""

from typing import Final

# Pseudo-address the aggregator uses for native ETH
NATIVE_ETH_ADDRESS: Final[str] = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# Decimals assumed when a raw address is not in the registry or metadata cache
DEFAULT_TOKEN_DECIMALS: Final[int] = 18

# symbol -> (canonical address, decimals)
COMMON_TOKENS: Final[dict[str, tuple[str, int]]] = {
    "ETH": (NATIVE_ETH_ADDRESS, 18),
    "USDT": ("0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
    "USDC": ("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
    "DAI": ("0x6B175474E89094C44Da98b954EedeAC495271d0F", 18),
    "WETH": ("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
    "WBTC": ("0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 18),
}
