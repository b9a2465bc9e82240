"""Pydantic schemas for the tag sharing API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities.tag_access import TagAccess


class GrantTagAccessRequest(BaseModel):
    """Schema for sharing a tag with another user.

    The address is validated by the domain, so malformed emails surface as
    INVALID_EMAIL (400) rather than a schema error.
    """

    recipient_email: str = Field(..., min_length=1, max_length=320)


class TagAccessResponse(BaseModel):
    """Schema for a single grant."""

    recipient_id: UUID
    email: str
    granted_at: datetime

    @classmethod
    def from_entity(cls, access: TagAccess) -> "TagAccessResponse":
        return cls(
            recipient_id=access.recipient_id,
            email=access.recipient_email.value,
            granted_at=access.granted_at,
        )


class TagAccessListResponse(BaseModel):
    """Schema for everyone a tag is shared with, in grant order."""

    data: list[TagAccessResponse]


class TagAccessDetailResponse(BaseModel):
    """Schema for a newly created grant."""

    data: TagAccessResponse
