"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    TAG_NOT_OWNED = "TAG_NOT_OWNED"
    CANNOT_SHARE_WITH_SELF = "CANNOT_SHARE_WITH_SELF"

    # Not found errors (404)
    TAG_NOT_FOUND = "TAG_NOT_FOUND"
    ACCESS_NOT_FOUND = "ACCESS_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    USER_EMAIL_NOT_CONFIRMED = "USER_EMAIL_NOT_CONFIRMED"

    # Conflict errors (409)
    DUPLICATE_ACCESS = "DUPLICATE_ACCESS"
    TAG_HAS_NOTES = "TAG_HAS_NOTES"
    TAG_NAME_ALREADY_EXISTS = "TAG_NAME_ALREADY_EXISTS"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class TagNotOwnedError(AppException):
    """The requester is not the owner of the tag."""

    def __init__(self, message: str = "Only the tag owner can perform this action") -> None:
        super().__init__(
            error_code=ErrorCode.TAG_NOT_OWNED,
            message=message,
            status_code=403,
        )


class CannotShareWithSelfError(AppException):
    """The owner tried to grant access to their own tag."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.CANNOT_SHARE_WITH_SELF,
            message="You cannot grant access to your own tag",
            status_code=403,
        )


class DuplicateAccessError(AppException):
    """The recipient already has access to the tag."""

    def __init__(self, recipient_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_ACCESS,
            message="This recipient already has access to this tag",
            status_code=409,
            details={"recipient_id": recipient_id},
        )


class AccessNotFoundError(AppException):
    """The recipient has no access entry on the tag."""

    def __init__(self, recipient_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ACCESS_NOT_FOUND,
            message="This recipient does not have access to this tag",
            status_code=404,
            details={"recipient_id": recipient_id},
        )


class TagNotFoundError(AppException):
    """Tag not found (or not visible to the requester)."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_NOT_FOUND,
            message=f"Tag not found: {tag_id}",
            status_code=404,
            details={"tag_id": tag_id},
        )


class TagHasNotesError(AppException):
    """Tag still has notes attached and cannot be deleted."""

    def __init__(self, tag_id: str, note_count: int) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_HAS_NOTES,
            message="Cannot delete a tag that still has notes assigned",
            status_code=409,
            details={"tag_id": tag_id, "note_count": note_count},
        )


class TagNameAlreadyExistsError(AppException):
    """The owner already has a tag with this name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_NAME_ALREADY_EXISTS,
            message=f"Tag '{name}' already exists",
            status_code=409,
            details={"name": name},
        )


class InvalidEmailFormatError(AppException):
    """A recipient email address failed validation."""

    def __init__(self, value: object) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_EMAIL,
            message=f'"{value}" is not a valid email address',
            status_code=400,
            details={"email": str(value)},
        )


class UserNotFoundError(AppException):
    """No registered user matches the recipient email."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message="User with this email not found",
            status_code=404,
            details={"email": email},
        )


class UserEmailNotConfirmedError(AppException):
    """The recipient has not confirmed their email address yet."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_EMAIL_NOT_CONFIRMED,
            message="Recipient email not confirmed",
            status_code=400,
            details={"email": email},
        )


class ConcurrentModificationError(AppException):
    """The aggregate was changed by another writer since it was loaded."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message=f"{entity} was modified concurrently, reload and retry",
            status_code=409,
            details={"entity": entity, "id": entity_id},
        )
