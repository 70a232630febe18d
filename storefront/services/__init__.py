"""
Services Package
================

Business logic layer on top of the repositories.

Available services:
- UserManager: user lookups
"""

from storefront.services.user_manager import UserManager

__all__ = [
    "UserManager",
]
