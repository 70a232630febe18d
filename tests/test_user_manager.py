"""
Test User Manager
"""

from unittest import mock

from storefront.models import User
from storefront.services import UserManager


def test_get_user_by_id(repository, repository_factory, make_user):
    ana = repository.create(make_user("Ana"))
    manager = UserManager(repository_factory)

    user = manager.get_user_by_id(ana.id_user)

    assert user is not None
    assert user.first_name == "Ana"
    assert user.email == "ana@example.com"


def test_get_user_by_id_missing(repository_factory):
    assert UserManager(repository_factory).get_user_by_id(404) is None


def test_repository_released_after_call(repository_factory):
    opened = []

    def factory():
        repository = repository_factory()
        opened.append(repository)
        return repository

    UserManager(factory).get_user_by_id(1)
    UserManager(factory).get_user_by_id(2)

    assert len(opened) == 2
    assert all(repository.disposed for repository in opened)


def test_uses_read_by_id():
    repository = mock.MagicMock()
    repository.__enter__.return_value = repository
    repository.read_by_id.return_value = "user"

    assert UserManager(lambda: repository).get_user_by_id(7) == "user"
    repository.read_by_id.assert_called_once_with(User, 7)
    repository.__exit__.assert_called_once()
