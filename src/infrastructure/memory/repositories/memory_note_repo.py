"""In-memory implementation of Note repository."""

from collections import Counter
from copy import deepcopy
from uuid import UUID

from domain.entities.note import Note
from infrastructure.memory.database import InMemoryDatabase, PendingWrite


class MemoryNoteRepository:
    """In-memory implementation of INoteRepository."""

    def __init__(self, database: InMemoryDatabase, pending: list[PendingWrite]) -> None:
        self._db = database
        self._pending = pending

    async def add(self, note: Note) -> Note:
        """Stage a new note."""
        snapshot = deepcopy(note)

        def apply() -> None:
            self._db.notes[snapshot.id] = snapshot

        self._pending.append(PendingWrite(apply=apply))
        return note

    async def count_for_tag(self, tag_id: UUID) -> int:
        """Get the number of notes assigned to a tag."""
        with self._db.lock:
            return sum(1 for note in self._db.notes.values() if note.tag_id == tag_id)

    async def get_counts_batch(self, tag_ids: list[UUID]) -> dict[UUID, int]:
        """Get note counts for multiple tags in one pass."""
        if not tag_ids:
            return {}
        wanted = set(tag_ids)
        with self._db.lock:
            counts = Counter(
                note.tag_id for note in self._db.notes.values() if note.tag_id in wanted
            )
        return dict(counts)
