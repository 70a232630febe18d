"""
Configuration package.

Exports the singleton settings instance for easy importing.

Usage:
    from storefront.config import settings

    print(settings.database_url)
"""

from storefront.config.settings import settings, get_settings

__all__ = [
    "settings",
    "get_settings",
]
