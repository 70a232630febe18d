"""
Generic Repository SQLAlchemy Implementation

One repository for every model: CRUD, filtering with pagination and eager
loading, and raw SQL, on top of a single DataContext.

Usage:
    with GenericRepository() as repository:
        user = repository.create(User(first_name="Ana"))
        page = repository.filter(UserProduct, None, 0, 20, UserProduct.user)
        for link in page.items:
            print(link.user.first_name)
        print(f"{page.total} links in total")

Predicates are SQLAlchemy clauses, so filtering happens in the database.
"""

import logging
from contextlib import contextmanager
from typing import Any, Generator, Iterator, List, Mapping, Optional, Type

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, make_transient_to_detached
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.sql import ClauseElement

from storefront.core.errors import PersistenceError
from storefront.database.context import DataContext
from storefront.repositories.interfaces import Criteria, E, IncludePath, Page, RepositoryInterface

logger = logging.getLogger(__name__)


class PageItems:
    """
    Rows of one filtered page, fetched when iterated.

    Iteration goes through the owning repository, so it fails with
    PersistenceError once that repository is disposed.
    """

    def __init__(self, repository: "GenericRepository", entity_type: type, query: Query):
        self._repository = repository
        self._entity_type = entity_type
        self.query = query

    def __iter__(self) -> Iterator[Any]:
        self._repository.context  # raises once disposed
        with self._repository._persisting("filter", self._entity_type):
            yield from self.query

    def __repr__(self) -> str:
        return f"<PageItems {self._entity_type.__name__}>"


class GenericRepository(RepositoryInterface):
    """
    Generic Repository SQLAlchemy Implementation

    Owns exactly one DataContext, created on first use unless one is passed
    in. Not safe to share between concurrent callers: scope one repository
    per unit of work and dispose it (or use it as a context manager).
    """

    def __init__(self, context: Optional[DataContext] = None, database_url: Optional[str] = None):
        """
        Initialize Repository

        Args:
            context: Storage context to own; built lazily from database_url if None
            database_url: Connection URL for the lazily built context
        """
        self._context = context
        self._database_url = database_url
        self._disposed = False

    @property
    def context(self) -> DataContext:
        if self._disposed:
            raise PersistenceError("Repository has been disposed", code="repository_disposed")
        if self._context is None:
            self._context = DataContext(self._database_url)
        return self._context

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ========================================
    # CRUD
    # ========================================

    def create(self, entity: E) -> E:
        """Insert ``entity``. Entities that already have a stored row are rejected."""
        if inspect(entity).has_identity:
            raise PersistenceError(
                f"{type(entity).__name__} is already persisted; use update()",
                code="already_persisted",
                details={"operation": "create", "entity": type(entity).__name__},
            )
        with self._persisting("create", type(entity)):
            self.context.session.add(entity)
            self.context.save_changes()
        logger.debug("Created %r", entity)
        return entity

    def read(self, entity_type: Type[E], criteria: Criteria) -> Optional[E]:
        with self._persisting("read", entity_type):
            query = self.context.set(entity_type)
            if criteria is not None:
                query = query.filter(self._resolve_criteria(entity_type, criteria))
            return query.first()

    def read_by_id(self, entity_type: Type[E], id: Any) -> Optional[E]:
        with self._persisting("read_by_id", entity_type):
            return self.context.session.get(entity_type, id)

    def filter(self, entity_type: Type[E], criteria: Optional[Criteria] = None,
               index: int = 0, size: int = 0, *includes: IncludePath,
               order_by: Optional[Any] = None) -> Page:
        """
        Filter records, count them, paginate and eager-load relations.

        ``total`` is counted before ``index`` and ``size`` are applied. An
        ``index`` of 0 applies no offset and a ``size`` of 0 applies no
        limit, so a zero-sized page cannot be requested.

        Rows come back in primary-key order unless ``order_by`` is given.
        The returned ``items`` run their query when iterated. Store errors
        raised then come out as PersistenceError too, and iterating after the
        repository is disposed raises ``repository_disposed``.
        """
        with self._persisting("filter", entity_type):
            query = self.context.set(entity_type)
            if includes:
                query = query.options(*(self._eager_load(entity_type, path) for path in includes))
            if criteria is not None:
                query = query.filter(self._resolve_criteria(entity_type, criteria))

            total = query.enable_eagerloads(False).count()

            if order_by is None:
                query = query.order_by(*inspect(entity_type).primary_key)
            else:
                query = query.order_by(order_by)
            if index != 0:
                query = query.offset(index)
            if size != 0:
                query = query.limit(size)
        return Page(items=PageItems(self, entity_type, query), total=total)

    def update(self, entity: E) -> bool:
        """
        Replace the stored row with every column of ``entity``.

        Entities not tracked by this repository's session are attached first.
        Columns never set on a fresh instance are written as NULL.
        """
        entity_type = type(entity)
        with self._persisting("update", entity_type):
            tracked = self._attach(self.context.session, entity)
            if tracked is None:
                logger.warning("Update skipped: %s has no identity", entity_type.__name__)
                return False
            mapper = inspect(entity_type)
            identity_columns = set(mapper.primary_key)
            state = inspect(tracked)
            for attr in mapper.column_attrs:
                if not identity_columns.intersection(attr.columns):
                    value = getattr(tracked, attr.key)  # load expired values before flagging
                    if attr.key not in state.dict:
                        # None defaults are not stored in the instance dict
                        setattr(tracked, attr.key, value)
                    flag_modified(tracked, attr.key)
            affected = self.context.save_changes()
        logger.debug("Updated %r (%d rows)", tracked, affected)
        return affected > 0

    def delete(self, entity: E) -> bool:
        entity_type = type(entity)
        with self._persisting("delete", entity_type):
            tracked = self._attach(self.context.session, entity)
            if tracked is None:
                logger.warning("Delete skipped: %s has no identity", entity_type.__name__)
                return False
            self.context.session.delete(tracked)
            affected = self.context.save_changes()
        logger.debug("Deleted %r (%d rows)", tracked, affected)
        return affected > 0

    # ========================================
    # Raw SQL
    # ========================================

    def sql_query(self, entity_type: Type[E], query: str,
                  params: Optional[Mapping[str, Any]] = None) -> List[E]:
        """
        Example:
            repository.sql_query(User, "SELECT * FROM users WHERE first_name = :name", {"name": "Ana"})
        """
        with self._persisting("sql_query", entity_type):
            return self.context.sql_query(entity_type, query, params)

    def execute_sql_command(self, query: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """
        Example:
            repository.execute_sql_command("DELETE FROM user_products WHERE id_user = :id", {"id": 7})
        """
        with self._persisting("execute_sql_command"):
            affected = self.context.execute_sql_command(query, params)
        logger.debug("Raw command affected %d rows", affected)
        return affected

    # ========================================
    # Lifecycle
    # ========================================

    def dispose(self) -> None:
        if self._disposed:
            return
        try:
            if self._context is not None:
                self._context.close()
        finally:
            self._disposed = True

    # ========================================
    # Helpers
    # ========================================

    @contextmanager
    def _persisting(self, operation: str, entity_type: Optional[type] = None) -> Generator[None, None, None]:
        """Roll back and raise PersistenceError when the store rejects an operation."""
        try:
            yield
        except SQLAlchemyError as exc:
            target = entity_type.__name__ if entity_type is not None else "raw SQL"
            logger.error("%s on %s failed: %s", operation, target, exc)
            if self._context is not None:
                try:
                    self._context.rollback()
                except SQLAlchemyError:
                    logger.exception("Rollback after failed %s also failed", operation)
            raise PersistenceError(
                f"{operation} failed for {target}: {exc.__class__.__name__}",
                details={"operation": operation, "entity": target},
                original=exc,
            ) from exc

    @staticmethod
    def _resolve_criteria(entity_type: type, criteria: Criteria):
        if isinstance(criteria, ClauseElement):
            return criteria
        if callable(criteria):
            return criteria(entity_type)
        raise TypeError(f"Unsupported criteria: {criteria!r}")

    @staticmethod
    def _eager_load(entity_type: type, path: IncludePath):
        """Joined-load option for a relationship attribute or a dotted name path."""
        if not isinstance(path, str):
            return joinedload(path)

        option = None
        current = entity_type
        for name in path.split("."):
            relationships = inspect(current).relationships
            if name not in relationships:
                raise ValueError(f"{current.__name__} has no relationship '{name}'")
            attribute = getattr(current, name)
            option = joinedload(attribute) if option is None else option.joinedload(attribute)
            current = relationships[name].mapper.class_
        return option

    @staticmethod
    def _attach(session: Session, entity: E) -> Optional[E]:
        """
        Make ``entity`` tracked by ``session`` without loading it.

        Returns the tracked instance (which is a different object when the
        session already holds one with the same identity), or None when the
        entity has no primary key.
        """
        state = inspect(entity)
        if state.session is session:
            return entity

        mapper = state.mapper
        identity = mapper.identity_key_from_instance(entity)
        if any(value is None for value in identity[1]):
            return None

        if state.transient:
            for attr in mapper.column_attrs:
                if attr.key not in state.dict:
                    setattr(entity, attr.key, None)
            make_transient_to_detached(entity)

        if identity in session.identity_map:
            return session.merge(entity)
        session.add(entity)
        return entity
