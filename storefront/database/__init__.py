"""Database package."""

from storefront.database.session import (
    create_db_engine,
    get_engine,
    make_session_factory,
    get_db_context,
    create_all_tables,
    drop_all_tables,
)
from storefront.database.context import DataContext

__all__ = [
    "create_db_engine",
    "get_engine",
    "make_session_factory",
    "get_db_context",
    "create_all_tables",
    "drop_all_tables",
    "DataContext",
]
