"""In-process storage backing the in-memory repositories."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from domain.entities.note import Note
from domain.entities.profile import Profile
from domain.entities.tag import Tag


@dataclass
class PendingWrite:
    """A write staged by a repository until the unit of work commits.

    ``check`` runs for every staged write before any ``apply`` does, so a
    failed check leaves the database untouched.
    """

    apply: Callable[[], None]
    check: Callable[[], None] | None = None


@dataclass
class InMemoryDatabase:
    """Committed state, keyed by entity ID."""

    tags: dict[UUID, Tag] = field(default_factory=dict)
    notes: dict[UUID, Note] = field(default_factory=dict)
    profiles: dict[UUID, Profile] = field(default_factory=dict)
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    def clear(self) -> None:
        """Drop all data."""
        with self.lock:
            self.tags.clear()
            self.notes.clear()
            self.profiles.clear()


# Process-wide default database
database = InMemoryDatabase()
