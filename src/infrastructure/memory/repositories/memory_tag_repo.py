"""In-memory implementation of Tag repository."""

from copy import deepcopy
from uuid import UUID

from core.exceptions import ConcurrentModificationError, TagNotFoundError
from domain.entities.tag import Tag
from infrastructure.memory.database import InMemoryDatabase, PendingWrite


class MemoryTagRepository:
    """In-memory implementation of ITagRepository.

    Aggregates are copied on the way in and out, so a loaded Tag can be
    mutated freely until it is saved.
    """

    def __init__(self, database: InMemoryDatabase, pending: list[PendingWrite]) -> None:
        self._db = database
        self._pending = pending

    async def get(self, id: UUID) -> Tag | None:
        """Get a tag by ID."""
        with self._db.lock:
            tag = self._db.tags.get(id)
            return deepcopy(tag) if tag else None

    async def get_by_name(self, owner_id: UUID, name: str) -> Tag | None:
        """Get an owner's tag by name (case-insensitive)."""
        wanted = name.lower()
        with self._db.lock:
            for tag in self._db.tags.values():
                if tag.owner_id == owner_id and tag.name.lower() == wanted:
                    return deepcopy(tag)
        return None

    async def get_all_for_user(self, owner_id: UUID) -> list[Tag]:
        """Get all tags owned by a user."""
        with self._db.lock:
            tags = [deepcopy(t) for t in self._db.tags.values() if t.is_owned_by(owner_id)]
        return sorted(tags, key=lambda t: t.name.lower())

    async def get_shared_with_user(self, user_id: UUID) -> list[Tag]:
        """Get all tags shared with a user."""
        with self._db.lock:
            tags = [deepcopy(t) for t in self._db.tags.values() if t.has_access(user_id)]
        return sorted(tags, key=lambda t: t.name.lower())

    async def create(self, tag: Tag) -> Tag:
        """Stage a new tag."""
        snapshot = deepcopy(tag)

        def check() -> None:
            if snapshot.id in self._db.tags:
                raise ValueError(f"Tag {snapshot.id} already exists")

        def apply() -> None:
            self._db.tags[snapshot.id] = snapshot

        self._pending.append(PendingWrite(apply=apply, check=check))
        return tag

    async def save(self, tag: Tag) -> None:
        """Stage the full aggregate state, grants included."""
        snapshot = deepcopy(tag)
        expected_version = tag.version

        def check() -> None:
            stored = self._db.tags.get(tag.id)
            if stored is None:
                raise TagNotFoundError(str(tag.id))
            if stored.version != expected_version:
                raise ConcurrentModificationError("Tag", str(tag.id))

        def apply() -> None:
            snapshot.version = expected_version + 1
            self._db.tags[tag.id] = snapshot
            tag.version = expected_version + 1

        self._pending.append(PendingWrite(apply=apply, check=check))

    async def delete(self, id: UUID) -> bool:
        """Stage deletion of a tag (its grants go with it)."""
        with self._db.lock:
            if id not in self._db.tags:
                return False

        self._pending.append(PendingWrite(apply=lambda: self._db.tags.pop(id, None)))
        return True
