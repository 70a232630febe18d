"""
Product model.

A Product belongs to exactly one Category and is linked to users through
UserProduct rows.
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base, CreationDateMixin, SerializationMixin

if TYPE_CHECKING:
    from storefront.models.category import Category
    from storefront.models.user_product import UserProduct


class Product(CreationDateMixin, SerializationMixin, Base):
    """
    Catalog product.

    Attributes:
        id_product: Auto-incrementing primary key
        name: Display name
        image: Image reference (path or URL)
        creation_date: When the product was created (defaults to now)
        order: Display order
        id_category: Foreign key to categories
        category: Owning category
        user_products: Associations to users

    Example:
        product = Product(name="Widget", id_category=category.id_category)
        repository.create(product)
    """

    __tablename__ = "products"

    # ========================================
    # Primary Key
    # ========================================

    id_product: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    # ========================================
    # Catalog Data
    # ========================================

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Image path or URL"
    )

    order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order"
    )

    id_category: Mapped[int] = mapped_column(
        ForeignKey("categories.id_category"),
        nullable=False,
        index=True
    )

    # ========================================
    # Relationships
    # ========================================

    category: Mapped["Category"] = relationship(back_populates="products")

    user_products: Mapped[List["UserProduct"]] = relationship(
        back_populates="product",
        passive_deletes=True
    )

    __table_args__ = (
        Index('ix_products_category_order', 'id_category', 'order'),
        {'comment': 'Catalog products'}
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id_product={self.id_product}, name='{self.name}', "
            f"id_category={self.id_category})>"
        )
