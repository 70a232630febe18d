"""
User Manager
============

Business entry point for user lookups. Each call opens its own repository
and releases it before returning.
"""

from typing import Callable, Optional

from storefront.models import User
from storefront.repositories import GenericRepository, RepositoryInterface


class UserManager:
    """
    Service for reading users.

    Example:
        manager = UserManager()
        user = manager.get_user_by_id(42)
        if user is None:
            print("No such user")
    """

    def __init__(self, repository_factory: Callable[[], RepositoryInterface] = GenericRepository):
        """
        Args:
            repository_factory: Builds a fresh repository per call
        """
        self.repository_factory = repository_factory

    def get_user_by_id(self, id_user: int) -> Optional[User]:
        """User with the given identifier, or None."""
        with self.repository_factory() as repository:
            return repository.read_by_id(User, id_user)
