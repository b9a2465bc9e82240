"""Note domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass
class Note:
    """Domain entity for a note. Every note belongs to exactly one tag."""

    user_id: UUID
    tag_id: UUID
    title: str = ""
    content: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
