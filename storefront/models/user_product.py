"""
UserProduct model.

Join entity encoding the many-to-many relation between users and products.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base, CreationDateMixin, SerializationMixin

if TYPE_CHECKING:
    from storefront.models.product import Product
    from storefront.models.user import User


class UserProduct(CreationDateMixin, SerializationMixin, Base):
    """
    Link between a user and a product.

    Attributes:
        id_user_product: Auto-incrementing primary key
        id_user: Foreign key to users
        id_product: Foreign key to products
        creation_date: When the link was created (defaults to now)
    """

    __tablename__ = "user_products"

    id_user_product: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    id_user: Mapped[int] = mapped_column(
        ForeignKey("users.id_user"),
        nullable=False,
        index=True
    )

    id_product: Mapped[int] = mapped_column(
        ForeignKey("products.id_product"),
        nullable=False,
        index=True
    )

    user: Mapped["User"] = relationship(back_populates="user_products")
    product: Mapped["Product"] = relationship(back_populates="user_products")

    __table_args__ = (
        Index('ix_user_products_user_product', 'id_user', 'id_product'),
        {'comment': 'User to product associations'}
    )

    def __repr__(self) -> str:
        return (
            f"<UserProduct(id_user_product={self.id_user_product}, "
            f"id_user={self.id_user}, id_product={self.id_product})>"
        )
