"""Sharing service: grant, revoke and list access to a tag."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    TagNotFoundError,
    TagNotOwnedError,
    UserEmailNotConfirmedError,
    UserNotFoundError,
)
from domain.entities.recipient_email import RecipientEmail
from domain.entities.tag import Tag
from domain.entities.tag_access import TagAccess
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class SharingService:
    """Application service wrapping the Tag aggregate's sharing rules."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_access_list(self, tag_id: UUID, user_id: UUID) -> tuple[TagAccess, ...]:
        """Get everyone a tag is shared with. Owner only.

        Raises:
            TagNotFoundError: If the tag does not exist.
            TagNotOwnedError: If the user is not the owner.
        """
        async with self._uow_factory() as uow:
            tag = await self._get_tag(uow, tag_id)
            return tag.get_access_list(user_id)

    async def grant_access(
        self,
        tag_id: UUID,
        user_id: UUID,
        recipient_email: str,
    ) -> TagAccess:
        """Share a tag with the registered user behind ``recipient_email``.

        Args:
            tag_id: The tag to share.
            user_id: The user performing the grant (must be the owner).
            recipient_email: Raw email address of the recipient.

        Returns:
            The new TagAccess grant.

        Raises:
            TagNotFoundError: If the tag does not exist.
            TagNotOwnedError: If the user is not the owner.
            InvalidEmailFormatError: If the email is malformed.
            UserNotFoundError: If no user is registered with that email.
            UserEmailNotConfirmedError: If the recipient has not confirmed their email.
            CannotShareWithSelfError: If the email belongs to the owner.
            DuplicateAccessError: If the recipient already has access.
        """
        async with self._uow_factory() as uow:
            tag = await self._get_tag(uow, tag_id)

            # Ownership before the email lookup: non-owners learn nothing about registered users.
            if not tag.is_owned_by(user_id):
                raise TagNotOwnedError("Only the tag owner can grant access")

            email = RecipientEmail(recipient_email)

            profile = await uow.profiles.get_by_email(email.value)
            if not profile:
                raise UserNotFoundError(email.value)
            if not profile.is_email_confirmed:
                raise UserEmailNotConfirmedError(email.value)

            access = tag.grant_access(profile.id, email, user_id)

            await uow.tags.save(tag)
            await uow.commit()

        logger.info(
            "tag_access_granted",
            tag_id=str(tag_id),
            owner_id=str(user_id),
            recipient_id=str(access.recipient_id),
        )
        return access

    async def revoke_access(self, tag_id: UUID, user_id: UUID, recipient_id: UUID) -> None:
        """Remove a recipient's access to a tag.

        Raises:
            TagNotFoundError: If the tag does not exist.
            TagNotOwnedError: If the user is not the owner.
            AccessNotFoundError: If the recipient has no access.
        """
        async with self._uow_factory() as uow:
            tag = await self._get_tag(uow, tag_id)
            tag.revoke_access(recipient_id, user_id)

            await uow.tags.save(tag)
            await uow.commit()

        logger.info(
            "tag_access_revoked",
            tag_id=str(tag_id),
            owner_id=str(user_id),
            recipient_id=str(recipient_id),
        )

    async def _get_tag(self, uow: IUnitOfWork, tag_id: UUID) -> Tag:
        tag = await uow.tags.get(tag_id)
        if not tag:
            raise TagNotFoundError(str(tag_id))
        return tag
