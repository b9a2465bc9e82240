"""Tag API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_tag_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.tag import (
    TagCreate,
    TagDetailResponse,
    TagListResponse,
    TagResponse,
    TagUpdate,
    TagWithStatsResponse,
)
from domain.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get(
    "",
    response_model=TagListResponse,
    summary="List tags",
)
async def list_tags(
    user: CurrentUser,
    include_shared: bool = Query(True, description="Also list tags shared with me"),
    service: TagService = Depends(get_tag_service),
) -> TagListResponse:
    """Get the user's tags (and optionally tags shared with them) with note counts."""
    tags = await service.get_tags(user.id, include_shared=include_shared)
    return TagListResponse(data=[TagWithStatsResponse.from_stats(item) for item in tags])


@router.post(
    "",
    response_model=TagDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tag",
    responses={
        409: {"model": ErrorResponse, "description": "Tag with this name already exists"},
    },
)
async def create_tag(
    body: TagCreate,
    user: CurrentUser,
    service: TagService = Depends(get_tag_service),
) -> TagDetailResponse:
    """Create a new tag. Names are unique per user, ignoring case."""
    tag = await service.create(user_id=user.id, name=body.name)
    return TagDetailResponse(data=TagResponse.from_entity(tag))


@router.patch(
    "/{tag_id}",
    response_model=TagDetailResponse,
    summary="Rename a tag",
    responses={
        403: {"model": ErrorResponse, "description": "Not the tag owner"},
        404: {"model": ErrorResponse, "description": "Tag not found"},
        409: {"model": ErrorResponse, "description": "Tag with this name already exists"},
    },
)
async def update_tag(
    tag_id: UUID,
    body: TagUpdate,
    user: CurrentUser,
    service: TagService = Depends(get_tag_service),
) -> TagDetailResponse:
    """Rename a tag. Owner only."""
    tag = await service.update(tag_id=tag_id, user_id=user.id, name=body.name)
    return TagDetailResponse(data=TagResponse.from_entity(tag))


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a tag",
    responses={
        404: {"model": ErrorResponse, "description": "Tag not found"},
        409: {"model": ErrorResponse, "description": "Tag still has notes"},
    },
)
async def delete_tag(
    tag_id: UUID,
    user: CurrentUser,
    service: TagService = Depends(get_tag_service),
) -> None:
    """Delete a tag with no notes. Its grants are removed with it."""
    await service.delete(tag_id, user.id)
    return None
