"""Tag service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    TagHasNotesError,
    TagNameAlreadyExistsError,
    TagNotFoundError,
    TagNotOwnedError,
)
from domain.entities.tag import Tag, TagWithStats
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class TagService:
    """Service layer for Tag business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_tags(self, user_id: UUID, include_shared: bool = True) -> list[TagWithStats]:
        """Get the user's own tags, then the tags shared with them, with counters.

        ``shared_recipients`` is only reported for tags the user owns.
        """
        async with self._uow_factory() as uow:
            owned = await uow.tags.get_all_for_user(user_id)
            owned_ids = {tag.id for tag in owned}

            shared: list[Tag] = []
            if include_shared:
                shared = [
                    tag
                    for tag in await uow.tags.get_shared_with_user(user_id)
                    if tag.id not in owned_ids
                ]

            tags = owned + shared
            if not tags:
                return []

            note_counts = await uow.notes.get_counts_batch([tag.id for tag in tags])

            return [
                TagWithStats(
                    tag=tag,
                    is_owner=tag.id in owned_ids,
                    note_count=note_counts.get(tag.id, 0),
                    shared_recipients=tag.get_access_count() if tag.id in owned_ids else None,
                )
                for tag in tags
            ]

    async def create(self, user_id: UUID, name: str) -> Tag:
        """Create a new tag. Names are unique per owner, ignoring case.

        Raises:
            TagNameAlreadyExistsError: If the owner already has a tag with this name.
        """
        async with self._uow_factory() as uow:
            if await uow.tags.get_by_name(user_id, name):
                raise TagNameAlreadyExistsError(name)

            created = await uow.tags.create(Tag(owner_id=user_id, name=name))
            await uow.commit()
            return created

    async def update(self, tag_id: UUID, user_id: UUID, name: str) -> Tag:
        """Rename a tag. Owner only.

        Raises:
            TagNotFoundError: If the tag does not exist.
            TagNotOwnedError: If the user is not the owner.
            TagNameAlreadyExistsError: If another of the owner's tags has this name.
        """
        async with self._uow_factory() as uow:
            tag = await uow.tags.get(tag_id)
            if not tag:
                raise TagNotFoundError(str(tag_id))

            if not tag.is_owned_by(user_id):
                raise TagNotOwnedError("Only the tag owner can update the tag")

            # A case-only rename cannot collide with another tag.
            if name.lower() != tag.name.lower():
                existing = await uow.tags.get_by_name(user_id, name)
                if existing and existing.id != tag.id:
                    raise TagNameAlreadyExistsError(name)

            tag.update_name(name, user_id)

            await uow.tags.save(tag)
            await uow.commit()
            return tag

    async def delete(self, tag_id: UUID, user_id: UUID) -> None:
        """Delete a tag that has no notes. Owner only.

        A tag owned by someone else is reported exactly like a missing one.

        Raises:
            TagNotFoundError: If the tag does not exist or is not owned by the user.
            TagHasNotesError: If notes are still assigned to the tag.
        """
        async with self._uow_factory() as uow:
            tag = await uow.tags.get(tag_id)
            if not tag or not tag.is_owned_by(user_id):
                raise TagNotFoundError(str(tag_id))

            note_count = await uow.notes.count_for_tag(tag_id)
            if note_count > 0:
                raise TagHasNotesError(str(tag_id), note_count)

            await uow.tags.delete(tag_id)
            await uow.commit()

        logger.info(
            "tag_deleted",
            tag_id=str(tag_id),
            owner_id=str(user_id),
            revoked_grants=tag.get_access_count(),
        )
