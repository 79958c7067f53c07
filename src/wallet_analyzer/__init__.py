"""Wallet analyzer: Ethereum wallet analytics and swap advisory tools."""

__version__ = "2.0.0"
