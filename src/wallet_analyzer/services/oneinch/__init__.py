"""1inch swap API adapter."""

from wallet_analyzer.services.oneinch.client import OneInchClient
from wallet_analyzer.services.oneinch.models import SwapQuote

__all__ = ["OneInchClient", "SwapQuote"]
