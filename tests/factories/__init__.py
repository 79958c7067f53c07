"""Test data factories."""

from tests.factories.quote import SwapQuoteFactory
from tests.factories.transaction import TransactionRecordFactory, newest_first_history

__all__ = ["SwapQuoteFactory", "TransactionRecordFactory", "newest_first_history"]
