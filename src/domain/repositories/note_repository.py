"""Note repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.note import Note


class INoteRepository(Protocol):
    """Repository interface for the note counts the tag policies depend on."""

    async def add(self, note: Note) -> Note:
        """Persist a new note."""
        ...

    async def count_for_tag(self, tag_id: UUID) -> int:
        """Get the number of notes assigned to a tag."""
        ...

    async def get_counts_batch(self, tag_ids: list[UUID]) -> dict[UUID, int]:
        """Get note counts for multiple tags in a single call."""
        ...
