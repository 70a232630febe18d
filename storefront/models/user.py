"""
User model.

A User owns a set of UserProduct associations: the products they are linked
to. The relationship is a back-reference only, a User never owns Products.
"""

from datetime import date
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base, SerializationMixin

if TYPE_CHECKING:
    from storefront.models.user_product import UserProduct


class User(SerializationMixin, Base):
    """
    Registered user.

    Attributes:
        id_user: Auto-incrementing primary key
        first_name, last_name: Person name
        email, phone: Contact details
        document: Identity document number
        address: Postal address
        birthday: Date of birth
        user_products: Associations to products (loaded by the ORM)

    Example:
        user = User(first_name="Ana", email="ana@example.com")
        repository.create(user)
    """

    __tablename__ = "users"

    # ========================================
    # Primary Key
    # ========================================

    id_user: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key"
    )

    # ========================================
    # Profile
    # ========================================

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    document: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Identity document number"
    )
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    birthday: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # ========================================
    # Relationships
    # ========================================

    user_products: Mapped[List["UserProduct"]] = relationship(
        back_populates="user",
        passive_deletes=True
    )

    __table_args__ = {'comment': 'Registered users'}

    def __repr__(self) -> str:
        return f"<User(id_user={self.id_user}, first_name='{self.first_name}', email='{self.email}')>"
