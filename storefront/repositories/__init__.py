"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating business logic from SQL.
"""

from storefront.repositories.interfaces import Page, RepositoryInterface
from storefront.repositories.generic import GenericRepository

__all__ = [
    "Page",
    "RepositoryInterface",
    "GenericRepository",
]
