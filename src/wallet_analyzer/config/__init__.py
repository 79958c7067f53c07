"""Configuration module for the wallet analyzer.

Usage:
    from wallet_analyzer.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.dune_query_id)

Note:
    There is no module-level `settings` instance: building one fails
    when DUNE_API_KEY is not set.
    Use `get_settings()` to get the cached instance at runtime.
"""

from wallet_analyzer.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
