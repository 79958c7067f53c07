"""Shared pytest fixtures for wallet analyzer tests.

This module provides fixtures for:
- Environment defaults so Settings can be built without a real .env
- Test data factories
- Mocked analytics and quote providers

Usage:
    def test_something(transaction_factory):
        tx = transaction_factory(success=False)
        assert not tx.success
"""

import os
from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest

from tests.factories.quote import SwapQuoteFactory
from tests.factories.transaction import TransactionRecordFactory, newest_first_history
from wallet_analyzer.config.settings import get_settings

# =============================================================================
# Environment Configuration
# =============================================================================

VALID_WALLET = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Loads .env file first, then sets defaults for any missing variables.
    """
    from dotenv import load_dotenv

    original_env = os.environ.copy()

    # Load .env file if it exists (won't override existing env vars)
    load_dotenv()

    os.environ.setdefault("DUNE_API_KEY", "test-dune-key")

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop the cached Settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def transaction_factory() -> type[TransactionRecordFactory]:
    """Factory for TransactionRecord instances."""
    return TransactionRecordFactory


@pytest.fixture
def quote_factory() -> type[SwapQuoteFactory]:
    """Factory for SwapQuote instances."""
    return SwapQuoteFactory


@pytest.fixture
def wallet_address() -> str:
    return VALID_WALLET


@pytest.fixture
def transactions():
    """Ten newest-first transactions spread over five days."""
    return newest_first_history(count=10, span_days=5)


# =============================================================================
# Provider mocks
# =============================================================================


@pytest.fixture
def mock_executor(transactions) -> AsyncMock:
    """Query executor returning the `transactions` fixture."""
    executor = AsyncMock()
    executor.execute.return_value = transactions
    return executor


@pytest.fixture
def mock_quote_provider() -> AsyncMock:
    """Quote provider returning a 1 ETH -> USDC quote."""
    provider = AsyncMock()
    provider.get_quote.return_value = SwapQuoteFactory()
    return provider
