"""Tag aggregate root."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4

from core.exceptions import (
    AccessNotFoundError,
    CannotShareWithSelfError,
    DuplicateAccessError,
    TagNotOwnedError,
)
from domain.entities.recipient_email import RecipientEmail
from domain.entities.tag_access import TagAccess


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tag:
    """Aggregate root for a tag and the users it is shared with.

    All sharing rules are enforced here from in-memory state:

    - Only the owner can grant, revoke, rename or list grants.
    - The owner never appears in their own access list.
    - A recipient appears at most once.

    Every successful mutation refreshes ``updated_at``. A failed one leaves
    the aggregate untouched. ``version`` belongs to the persistence layer
    (optimistic concurrency) and is never changed by domain methods.
    """

    def __init__(
        self,
        owner_id: UUID,
        name: str,
        id: UUID | None = None,
        access_list: Iterable[TagAccess] = (),
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
    ) -> None:
        self._id = id or uuid4()
        self._owner_id = owner_id
        self._name = name
        self._created_at = created_at or _utcnow()
        self._updated_at = updated_at or self._created_at
        self.version = version

        # Rehydrated grants are trusted for content but not for shape: a
        # duplicate recipient or a self-grant means corrupted storage.
        self._access_list: list[TagAccess] = []
        seen: set[UUID] = set()
        for access in access_list:
            if access.recipient_id == owner_id:
                raise ValueError(f"Tag {self._id} lists its owner as a recipient")
            if access.recipient_id in seen:
                raise ValueError(
                    f"Tag {self._id} has duplicate access for recipient {access.recipient_id}"
                )
            seen.add(access.recipient_id)
            self._access_list.append(access)

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def owner_id(self) -> UUID:
        return self._owner_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def access_list(self) -> tuple[TagAccess, ...]:
        """Snapshot of all grants in grant order (no ownership check)."""
        return tuple(self._access_list)

    def __repr__(self) -> str:
        return (
            f"Tag(id={self._id!r}, owner_id={self._owner_id!r}, name={self._name!r}, "
            f"access_count={len(self._access_list)})"
        )

    # Queries

    def is_owned_by(self, user_id: UUID) -> bool:
        """Check if the given user owns this tag."""
        return self._owner_id == user_id

    def has_access(self, user_id: UUID) -> bool:
        """Check if the given user has been granted access to this tag."""
        return any(access.is_for_recipient(user_id) for access in self._access_list)

    def get_access_count(self) -> int:
        """Number of users this tag is shared with."""
        return len(self._access_list)

    def get_access_list(self, requester_id: UUID) -> tuple[TagAccess, ...]:
        """Return the grants on this tag. Only the owner may see them.

        Raises:
            TagNotOwnedError: If the requester is not the owner.
        """
        if not self.is_owned_by(requester_id):
            raise TagNotOwnedError("Only the tag owner can view the access list")
        return tuple(self._access_list)

    # Commands

    def grant_access(
        self,
        recipient_id: UUID,
        recipient_email: RecipientEmail,
        requester_id: UUID,
    ) -> TagAccess:
        """Share this tag with another user.

        Checks run in a fixed order so the reported error is deterministic:
        ownership, then self-sharing, then duplicates.

        Returns:
            The newly appended grant.

        Raises:
            TagNotOwnedError: If the requester is not the owner.
            CannotShareWithSelfError: If the recipient is the owner.
            DuplicateAccessError: If the recipient already has access.
        """
        if not self.is_owned_by(requester_id):
            raise TagNotOwnedError("Only the tag owner can grant access")

        if recipient_id == self._owner_id:
            raise CannotShareWithSelfError()

        if self.has_access(recipient_id):
            raise DuplicateAccessError(str(recipient_id))

        now = _utcnow()
        access = TagAccess(
            recipient_id=recipient_id,
            recipient_email=recipient_email,
            granted_at=now,
        )
        self._access_list.append(access)
        self._updated_at = now
        return access

    def revoke_access(self, recipient_id: UUID, requester_id: UUID) -> None:
        """Remove a recipient's grant, keeping the order of the others.

        Raises:
            TagNotOwnedError: If the requester is not the owner.
            AccessNotFoundError: If the recipient has no grant.
        """
        if not self.is_owned_by(requester_id):
            raise TagNotOwnedError("Only the tag owner can revoke access")

        remaining = [a for a in self._access_list if not a.is_for_recipient(recipient_id)]
        if len(remaining) == len(self._access_list):
            raise AccessNotFoundError(str(recipient_id))

        self._access_list = remaining
        self._updated_at = _utcnow()

    def update_name(self, new_name: str, requester_id: UUID) -> None:
        """Rename the tag. Name uniqueness is checked by the caller.

        Raises:
            TagNotOwnedError: If the requester is not the owner.
        """
        if not self.is_owned_by(requester_id):
            raise TagNotOwnedError("Only the tag owner can update the tag")

        self._name = new_name
        self._updated_at = _utcnow()


@dataclass(frozen=True, slots=True)
class TagWithStats:
    """Read-only value object: a Tag as seen by one user, with counters."""

    tag: Tag
    is_owner: bool
    note_count: int
    shared_recipients: int | None = None
