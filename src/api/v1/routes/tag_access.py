"""Tag sharing API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_sharing_service
from api.v1.schemas.common import ErrorResponse, RateLimitErrorResponse
from api.v1.schemas.tag_access import (
    GrantTagAccessRequest,
    TagAccessDetailResponse,
    TagAccessListResponse,
    TagAccessResponse,
)
from core.rate_limit import enforce_rate_limit
from domain.services.sharing_service import SharingService

router = APIRouter(prefix="/tags/{tag_id}/access", tags=["tag-access"])


@router.get(
    "",
    response_model=TagAccessListResponse,
    summary="List who a tag is shared with",
    responses={
        403: {"model": ErrorResponse, "description": "Not the tag owner"},
        404: {"model": ErrorResponse, "description": "Tag not found"},
    },
)
async def list_tag_access(
    tag_id: UUID,
    user: CurrentUser,
    service: SharingService = Depends(get_sharing_service),
) -> TagAccessListResponse:
    """Get every recipient of a tag in the order access was granted. Owner only."""
    access_list = await service.get_access_list(tag_id, user.id)
    return TagAccessListResponse(
        data=[TagAccessResponse.from_entity(access) for access in access_list]
    )


@router.post(
    "",
    response_model=TagAccessDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Share a tag with another user",
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or unconfirmed email"},
        403: {"model": ErrorResponse, "description": "Not the owner, or sharing with self"},
        404: {"model": ErrorResponse, "description": "Tag or user not found"},
        409: {"model": ErrorResponse, "description": "Recipient already has access"},
        429: {"model": RateLimitErrorResponse, "description": "Rate limit exceeded"},
    },
)
async def grant_tag_access(
    tag_id: UUID,
    body: GrantTagAccessRequest,
    user: CurrentUser,
    service: SharingService = Depends(get_sharing_service),
) -> TagAccessDetailResponse:
    """Grant read access to the registered user with the given email."""
    access = await service.grant_access(tag_id, user.id, body.recipient_email)
    return TagAccessDetailResponse(data=TagAccessResponse.from_entity(access))


@router.delete(
    "/{recipient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a recipient's access",
    responses={
        403: {"model": ErrorResponse, "description": "Not the tag owner"},
        404: {"model": ErrorResponse, "description": "Tag or grant not found"},
    },
)
async def revoke_tag_access(
    tag_id: UUID,
    recipient_id: UUID,
    user: CurrentUser,
    service: SharingService = Depends(get_sharing_service),
) -> None:
    """Revoke a recipient's access to a tag. Owner only."""
    await service.revoke_access(tag_id, user.id, recipient_id)
    return None
