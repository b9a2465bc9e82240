"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for user profiles."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        ...

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email address (case-insensitive)."""
        ...

    async def add(self, profile: Profile) -> Profile:
        """Persist a new profile."""
        ...

    async def save(self, profile: Profile) -> None:
        """Persist changes to an existing profile."""
        ...
