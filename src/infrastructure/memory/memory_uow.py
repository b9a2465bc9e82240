"""In-memory Unit of Work implementation."""

from typing import Any, Optional

from infrastructure.memory.database import InMemoryDatabase, PendingWrite
from infrastructure.memory.repositories.memory_note_repo import MemoryNoteRepository
from infrastructure.memory.repositories.memory_profile_repo import MemoryProfileRepository
from infrastructure.memory.repositories.memory_tag_repo import MemoryTagRepository


class InMemoryUnitOfWork:
    """Unit of Work over an InMemoryDatabase.

    Repositories read committed state and stage their writes; ``commit``
    validates every staged write and then applies them all under the
    database lock.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database
        self._pending: Optional[list[PendingWrite]] = None

    @property
    def tags(self) -> MemoryTagRepository:
        """Get tag repository."""
        return MemoryTagRepository(self._database, self._require_pending())

    @property
    def notes(self) -> MemoryNoteRepository:
        """Get note repository."""
        return MemoryNoteRepository(self._database, self._require_pending())

    @property
    def profiles(self) -> MemoryProfileRepository:
        """Get profile repository."""
        return MemoryProfileRepository(self._database, self._require_pending())

    async def commit(self) -> None:
        """Apply all staged writes atomically."""
        pending = self._require_pending()
        try:
            with self._database.lock:
                for write in pending:
                    if write.check:
                        write.check()
                for write in pending:
                    write.apply()
        finally:
            pending.clear()

    async def rollback(self) -> None:
        """Discard all staged writes."""
        if self._pending is not None:
            self._pending.clear()

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        """Enter the context manager and start staging."""
        self._pending = []
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager, discarding anything left uncommitted."""
        await self.rollback()
        self._pending = None

    def _require_pending(self) -> list[PendingWrite]:
        if self._pending is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._pending
