"""TagAccess entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from domain.entities.recipient_email import RecipientEmail


@dataclass(frozen=True, slots=True)
class TagAccess:
    """A single read grant on a tag, owned by the Tag aggregate."""

    recipient_id: UUID
    recipient_email: RecipientEmail
    granted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_for_recipient(self, recipient_id: UUID) -> bool:
        """Check if this grant belongs to the given user."""
        return self.recipient_id == recipient_id

    def is_for_email(self, email: RecipientEmail) -> bool:
        """Check if this grant was made to the given email."""
        return self.recipient_email == email
