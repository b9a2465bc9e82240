"""In-memory implementation of Profile repository."""

from copy import deepcopy
from uuid import UUID

from domain.entities.profile import Profile
from infrastructure.memory.database import InMemoryDatabase, PendingWrite


class MemoryProfileRepository:
    """In-memory implementation of IProfileRepository."""

    def __init__(self, database: InMemoryDatabase, pending: list[PendingWrite]) -> None:
        self._db = database
        self._pending = pending

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        with self._db.lock:
            profile = self._db.profiles.get(id)
            return deepcopy(profile) if profile else None

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email address."""
        wanted = email.strip().lower()
        with self._db.lock:
            for profile in self._db.profiles.values():
                if profile.email == wanted:
                    return deepcopy(profile)
        return None

    async def add(self, profile: Profile) -> Profile:
        """Stage a new profile."""
        snapshot = deepcopy(profile)

        def apply() -> None:
            self._db.profiles[snapshot.id] = snapshot

        self._pending.append(PendingWrite(apply=apply))
        return profile

    async def save(self, profile: Profile) -> None:
        """Stage the updated profile."""
        snapshot = deepcopy(profile)

        def check() -> None:
            if snapshot.id not in self._db.profiles:
                raise ValueError(f"Profile {snapshot.id} does not exist")

        def apply() -> None:
            self._db.profiles[snapshot.id] = snapshot

        self._pending.append(PendingWrite(apply=apply, check=check))
