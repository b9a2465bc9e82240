"""Unit of Work dependencies shared by every API version."""

from functools import lru_cache
from typing import Callable

from domain.services.profile_service import ProfileService
from infrastructure.memory.database import database
from infrastructure.memory.memory_uow import InMemoryUnitOfWork


def get_uow_factory() -> Callable[[], InMemoryUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(database)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())
