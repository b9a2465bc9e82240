"""Profile service: keeps local profiles in step with the auth provider."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Registers verified users so they can be found as share recipients."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def sync(
        self,
        user_id: UUID,
        email: str,
        display_name: str | None = None,
        email_confirmed_at: datetime | None = None,
    ) -> Profile:
        """Create or refresh the profile of an authenticated user.

        The auth provider is the source of truth for email and display name.
        A confirmation is never withdrawn once recorded. Nothing is written
        when the stored profile is already current.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)

            if profile is None:
                profile = Profile(
                    id=user_id,
                    email=email,
                    display_name=display_name,
                    email_confirmed_at=email_confirmed_at,
                )
                await uow.profiles.add(profile)
                await uow.commit()
                logger.info("profile_created", user_id=str(user_id))
                return profile

            changed = False
            normalized = email.strip().lower()
            if profile.email != normalized:
                profile.email = normalized
                changed = True
            if display_name is not None and profile.display_name != display_name:
                profile.display_name = display_name
                changed = True
            if email_confirmed_at is not None and profile.email_confirmed_at is None:
                profile.email_confirmed_at = email_confirmed_at
                changed = True

            if changed:
                await uow.profiles.save(profile)
                await uow.commit()
                logger.info("profile_updated", user_id=str(user_id))
            return profile
