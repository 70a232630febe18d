"""
Test Configuration Module
"""

from datetime import date

import pytest

from storefront.database import DataContext, create_all_tables, create_db_engine, drop_all_tables
from storefront.models import Category, Product, User, UserProduct
from storefront.repositories import GenericRepository


# Use in-memory database for testing
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    """In-memory engine with a fresh schema"""
    engine = create_db_engine(TEST_DATABASE_URL)
    create_all_tables(engine)

    yield engine

    drop_all_tables(engine)
    engine.dispose()


@pytest.fixture
def repository_factory(engine):
    """Build repositories on the test database; every one is disposed afterwards"""
    created = []

    def factory() -> GenericRepository:
        repository = GenericRepository(DataContext(engine=engine))
        created.append(repository)
        return repository

    yield factory

    for repository in created:
        repository.dispose()


@pytest.fixture
def repository(repository_factory) -> GenericRepository:
    return repository_factory()


@pytest.fixture
def category(repository) -> Category:
    return repository.create(Category(name="Hardware"))


@pytest.fixture
def make_user():
    def factory(first_name: str = "Ana", **fields) -> User:
        fields.setdefault("last_name", "García")
        fields.setdefault("email", f"{first_name.lower()}@example.com")
        fields.setdefault("birthday", date(1990, 5, 17))
        return User(first_name=first_name, **fields)

    return factory


@pytest.fixture
def seeded(repository, category, make_user):
    """Ana owns a Widget"""
    user = repository.create(make_user("Ana"))
    product = repository.create(Product(name="Widget", id_category=category.id_category))
    link = repository.create(UserProduct(id_user=user.id_user, id_product=product.id_product))
    return user, product, link
