"""
Test Storage Context
"""

import pytest
from sqlalchemy.orm import Query

from storefront.database import DataContext, get_engine
from storefront.models import Category, Product, User, UserProduct


def test_session_opens_lazily(engine):
    context = DataContext(engine=engine)

    assert not context.is_open

    context.users.all()

    assert context.is_open
    context.close()


def test_session_created_once(engine):
    context = DataContext(engine=engine)

    assert context.session is context.session
    context.close()


def test_engine_resolved_from_url_on_first_use():
    context = DataContext("sqlite://")

    assert context.engine is get_engine("sqlite://")
    assert not context.is_open
    context.close()


def test_collection_accessors(engine):
    context = DataContext(engine=engine)

    accessors = {
        User: context.users,
        Product: context.products,
        Category: context.categories,
        UserProduct: context.user_products,
    }

    for entity_type, query in accessors.items():
        assert isinstance(query, Query)
        assert query.column_descriptions[0]["entity"] is entity_type
        assert query.count() == 0
    context.close()


def test_save_changes_reports_written_rows(engine):
    context = DataContext(engine=engine)
    context.session.add_all([Category(name="a"), Category(name="b")])

    assert context.save_changes() == 2
    assert context.categories.count() == 2
    assert context.save_changes() == 0
    context.close()


def test_raw_sql_pass_through(engine):
    context = DataContext(engine=engine)
    context.session.add(Category(name="Books"))
    context.save_changes()

    rows = context.sql_query(Category, "SELECT * FROM categories WHERE name = :name", {"name": "Books"})
    assert [c.name for c in rows] == ["Books"]

    assert context.execute_sql_command("DELETE FROM categories") == 1
    assert context.categories.count() == 0
    context.close()


def test_raw_command_expires_loaded_rows(engine):
    context = DataContext(engine=engine)
    books = Category(name="Books")
    context.session.add(books)
    context.save_changes()

    context.execute_sql_command("UPDATE categories SET name = :name", {"name": "Novels"})

    assert books.name == "Novels"
    assert context.categories.one().name == "Novels"
    context.close()


def test_close_is_idempotent(engine):
    context = DataContext(engine=engine)
    context.users.all()

    context.close()
    context.close()

    assert context.closed
    assert not context.is_open


def test_close_without_session(engine):
    context = DataContext(engine=engine)

    context.close()

    assert context.closed
    assert not context.is_open


def test_session_unavailable_after_close(engine):
    context = DataContext(engine=engine)
    context.close()

    with pytest.raises(RuntimeError):
        context.session
