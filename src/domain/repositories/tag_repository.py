"""Tag repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.tag import Tag


class ITagRepository(Protocol):
    """Repository interface for Tag aggregates (loaded with their grants)."""

    async def get(self, id: UUID) -> Tag | None:
        """Get a tag by ID, including its access list."""
        ...

    async def get_by_name(self, owner_id: UUID, name: str) -> Tag | None:
        """Get an owner's tag by name (case-insensitive)."""
        ...

    async def get_all_for_user(self, owner_id: UUID) -> list[Tag]:
        """Get all tags owned by a user, ordered by name."""
        ...

    async def get_shared_with_user(self, user_id: UUID) -> list[Tag]:
        """Get all tags other users have shared with this user, ordered by name."""
        ...

    async def create(self, tag: Tag) -> Tag:
        """Persist a new tag."""
        ...

    async def save(self, tag: Tag) -> None:
        """Persist the complete aggregate state, grants included.

        Raises:
            ConcurrentModificationError: If the stored version moved on since load.
        """
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a tag and its grants, returning success status."""
        ...
