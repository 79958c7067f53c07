"""Dune Analytics adapter."""

from wallet_analyzer.services.dune.client import DuneClient

__all__ = ["DuneClient"]
