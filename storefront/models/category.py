"""
Category model.

A Category groups Products; it owns its Products one-to-many.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base, SerializationMixin

if TYPE_CHECKING:
    from storefront.models.product import Product


class Category(SerializationMixin, Base):
    """
    Product category.

    Attributes:
        id_category: Auto-incrementing primary key
        name: Display name
        products: Products in this category (loaded by the ORM)
    """

    __tablename__ = "categories"

    id_category: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    products: Mapped[List["Product"]] = relationship(
        back_populates="category",
        passive_deletes=True
    )

    __table_args__ = {'comment': 'Product categories'}

    def __repr__(self) -> str:
        return f"<Category(id_category={self.id_category}, name='{self.name}')>"
