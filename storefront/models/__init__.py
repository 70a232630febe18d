"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from storefront.models.base import Base
from storefront.models.user import User
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.user_product import UserProduct

__all__ = [
    "Base",
    "User",
    "Category",
    "Product",
    "UserProduct",
]
