"""
Base Model
==========

Provides common functionality for all database models.
"""

from datetime import date, datetime, UTC
from typing import Any, Dict, Optional, Set, TypeVar

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# Any mapped model class
E = TypeVar("E", bound=Base)


class CreationDateMixin:
    """Mixin that adds a creation_date column, filled in on insert when unset."""

    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )


class SerializationMixin:
    """Mixin that adds to_dict() serialization method."""

    def to_dict(self, exclude: Optional[Set[str]] = None) -> Dict[str, Any]:
        """Convert model instance to dictionary, keyed by attribute name."""
        exclude = exclude or set()
        result = {}
        for attr in self.__mapper__.column_attrs:
            if attr.key in exclude:
                continue
            value = getattr(self, attr.key)
            if isinstance(value, (datetime, date)):
                result[attr.key] = value.isoformat()
            else:
                result[attr.key] = value
        return result
