"""Pydantic schemas for Tag API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.tag import Tag, TagWithStats


class TagNameBody(BaseModel):
    """Base schema carrying a tag name."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class TagCreate(TagNameBody):
    """Schema for creating a Tag."""


class TagUpdate(TagNameBody):
    """Schema for renaming a Tag."""


class TagResponse(BaseModel):
    """Schema for Tag response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "name": "recipes",
                "created_at": "2026-01-28T10:00:00Z",
                "updated_at": "2026-01-28T10:00:00Z",
            }
        },
    )

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, tag: Tag) -> "TagResponse":
        return cls(id=tag.id, name=tag.name, created_at=tag.created_at, updated_at=tag.updated_at)


class TagWithStatsResponse(TagResponse):
    """Schema for a Tag in the listing, with counters."""

    is_owner: bool
    note_count: int = 0
    shared_recipients: int | None = None

    @classmethod
    def from_stats(cls, item: TagWithStats) -> "TagWithStatsResponse":
        return cls(
            id=item.tag.id,
            name=item.tag.name,
            created_at=item.tag.created_at,
            updated_at=item.tag.updated_at,
            is_owner=item.is_owner,
            note_count=item.note_count,
            shared_recipients=item.shared_recipients,
        )


class TagListResponse(BaseModel):
    """Schema for list of Tags."""

    data: list[TagWithStatsResponse]


class TagDetailResponse(BaseModel):
    """Schema for single Tag."""

    data: TagResponse
