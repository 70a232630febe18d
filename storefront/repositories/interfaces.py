"""
Repository Interface

Defines the generic data access contract. Services depend on this contract,
not on the SQLAlchemy implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Mapping, NamedTuple, Optional, Type, Union

from sqlalchemy import ColumnElement

from storefront.models.base import E

# Boolean SQL clause, or a callable building one from the entity class
Criteria = Union[ColumnElement[bool], Callable[[Any], ColumnElement[bool]]]

# Relationship attribute, relationship name, or dotted chain of names
IncludePath = Union[str, Any]


class Page(NamedTuple):
    """Result of a filter: the (lazy) rows of one page and the total match count."""

    items: Iterable[Any]
    total: int


class RepositoryInterface(ABC):
    """Generic Repository Interface"""

    @abstractmethod
    def create(self, entity: E) -> E:
        """
        Insert a new record and commit

        Args:
            entity: New record with its required fields set

        Returns:
            The same entity, with its store-assigned identity populated
        """
        pass

    @abstractmethod
    def read(self, entity_type: Type[E], criteria: Criteria) -> Optional[E]:
        """
        First record matching a condition

        Args:
            entity_type: Model class to query
            criteria: Query condition

        Returns:
            The first match, or None when nothing matches
        """
        pass

    @abstractmethod
    def read_by_id(self, entity_type: Type[E], id: Any) -> Optional[E]:
        """
        Record by primary key

        Returns:
            The record, or None when the key does not exist
        """
        pass

    @abstractmethod
    def filter(self, entity_type: Type[E], criteria: Optional[Criteria] = None,
               index: int = 0, size: int = 0, *includes: IncludePath) -> Page:
        """
        Filter records, count them, paginate and eager-load relations

        Args:
            entity_type: Model class to query
            criteria: Query condition, None for every record
            index: Number of records to skip; 0 means no offset
            size: Number of records to take; 0 means no limit
            includes: Related entities loaded in the same round trip

        Returns:
            Page whose ``total`` counts every match before pagination
        """
        pass

    @abstractmethod
    def update(self, entity: E) -> bool:
        """
        Replace a record identified by its primary key

        Returns:
            True if at least one row was written
        """
        pass

    @abstractmethod
    def delete(self, entity: E) -> bool:
        """
        Delete a record identified by its primary key

        Returns:
            True if at least one row was removed
        """
        pass

    @abstractmethod
    def sql_query(self, entity_type: Type[E], query: str,
                  params: Optional[Mapping[str, Any]] = None) -> List[E]:
        """Run a raw parametrized query and map the rows onto ``entity_type``."""
        pass

    @abstractmethod
    def execute_sql_command(self, query: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Run a raw parametrized statement and return the affected-row count."""
        pass

    @abstractmethod
    def dispose(self) -> None:
        """Release the underlying session. Calling it twice is a no-op."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
