"""
Storage Context
===============

One logical session against the backing store.

A DataContext is built from a database URL (or an existing engine) and opens
nothing until it is first used. It exposes one query accessor per entity,
a save operation reporting affected rows, and raw SQL pass-through.
"""

import logging
from typing import Any, List, Mapping, Optional, Type

from sqlalchemy import Engine, event, select, text
from sqlalchemy.orm import Query, Session

from storefront.database.session import get_engine, make_session_factory
from storefront.models import Category, Product, User, UserProduct
from storefront.models.base import E

logger = logging.getLogger(__name__)


class DataContext:
    """
    Lazily connected session owner.

    Example:
        context = DataContext("sqlite:///./data/storefront.db")
        active = context.users.filter(User.email.is_not(None)).all()
        context.close()
    """

    def __init__(self, database_url: Optional[str] = None, *, engine: Optional[Engine] = None):
        self._database_url = database_url
        self._engine = engine
        self._session: Optional[Session] = None
        self._closed = False

    # ========================================
    # Connection
    # ========================================

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = get_engine(self._database_url)
        return self._engine

    @property
    def session(self) -> Session:
        """The session, opened on first access."""
        if self._closed:
            raise RuntimeError("DataContext is closed")
        if self._session is None:
            self._session = make_session_factory(self.engine)()
            logger.debug("Opened session on %s", self.engine.url.render_as_string(hide_password=True))
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def closed(self) -> bool:
        return self._closed

    # ========================================
    # Collections
    # ========================================

    def set(self, entity_type: Type[E]) -> "Query[E]":
        """Lazy query over every row of ``entity_type``."""
        return self.session.query(entity_type)

    @property
    def users(self) -> "Query[User]":
        return self.set(User)

    @property
    def products(self) -> "Query[Product]":
        return self.set(Product)

    @property
    def categories(self) -> "Query[Category]":
        return self.set(Category)

    @property
    def user_products(self) -> "Query[UserProduct]":
        return self.set(UserProduct)

    # ========================================
    # Unit of work
    # ========================================

    def save_changes(self) -> int:
        """
        Flush and commit pending changes.

        Returns:
            Number of rows written by the flush (inserted, updated or deleted)
        """
        session = self.session
        connection = session.connection()
        # One row per pending insert; rowcount is unreliable under RETURNING
        affected = len(session.new)

        def count_rows(conn, cursor, statement, parameters, context, executemany):
            nonlocal affected
            if context.isupdate or context.isdelete:
                affected += max(cursor.rowcount, 0)

        event.listen(connection, "after_cursor_execute", count_rows)
        try:
            session.flush()
        finally:
            event.remove(connection, "after_cursor_execute", count_rows)
        session.commit()
        return affected

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()

    # ========================================
    # Raw SQL
    # ========================================

    def sql_query(self, entity_type: Type[E], query: str,
                  params: Optional[Mapping[str, Any]] = None) -> List[E]:
        """
        Run a raw SELECT and map its rows onto ``entity_type`` by column name.

        Values go through named bind parameters (``:name``), never string
        formatting.
        """
        statement = select(entity_type).from_statement(text(query))
        return list(self.session.scalars(statement, dict(params or {})))

    def execute_sql_command(self, query: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """
        Run a raw statement, commit, and return the affected-row count.

        Every instance already loaded by this session is expired afterwards,
        so later reads reload what the statement changed.
        """
        result = self.session.execute(text(query), dict(params or {}))
        self.session.commit()
        self.session.expire_all()
        return result.rowcount

    # ========================================
    # Lifecycle
    # ========================================

    def close(self) -> None:
        """Release the session. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug("Closed session")
