"""Dependency injection factories for API v1."""

from functools import lru_cache

from api.dependencies.uow import get_uow_factory
from domain.services.sharing_service import SharingService
from domain.services.tag_service import TagService


@lru_cache
def get_tag_service() -> TagService:
    """Get Tag service instance."""
    return TagService(get_uow_factory())


@lru_cache
def get_sharing_service() -> SharingService:
    """Get Sharing service instance."""
    return SharingService(get_uow_factory())
