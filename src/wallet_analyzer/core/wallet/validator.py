"""Wallet address validation logic.

Addresses are checked locally, before any provider is contacted.
"""

import re

import structlog

from wallet_analyzer.core.exceptions import InvalidAddressError

log = structlog.get_logger(__name__)

ETHEREUM_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_ethereum_address(address: object) -> bool:
    """Validate Ethereum address format.

    Args:
        address: Potential wallet address.

    Returns:
        True if address is ``0x`` followed by exactly 40 hex characters.

    Example:
        >>> is_valid_ethereum_address("0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045")
        True
        >>> is_valid_ethereum_address("0x123")
        False
    """
    return isinstance(address, str) and ETHEREUM_ADDRESS_PATTERN.fullmatch(address) is not None


def normalize_wallet_address(address: object) -> str:
    """Validate a wallet address and return its lowercase form.

    Raises:
        InvalidAddressError: If the address fails the format check.
    """
    if not is_valid_ethereum_address(address):
        log.warning("invalid_wallet_address", address=str(address)[:12])
        raise InvalidAddressError(address=address if isinstance(address, str) else None)
    return address.lower()  # type: ignore[union-attr]


def shorten(address: str) -> str:
    """Truncate an address for log output."""
    return address[:10] + "..." if len(address) > 10 else address
