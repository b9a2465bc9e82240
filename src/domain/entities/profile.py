"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass
class Profile:
    """Domain entity for a registered user (synced from the auth provider)."""

    email: str
    id: UUID = field(default_factory=uuid4)
    display_name: str | None = None
    email_confirmed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Store emails lower-cased so lookups are case-insensitive."""
        self.email = self.email.strip().lower()

    @property
    def is_email_confirmed(self) -> bool:
        """Only confirmed users can receive shared tags."""
        return self.email_confirmed_at is not None
