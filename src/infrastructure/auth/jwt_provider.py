"""JWT authentication provider implementation.

Tokens are issued by the external auth service and verified here with the
shared HS256 secret. Expected payload:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "user_metadata": { "display_name": "John" },
        "email_confirmed_at": "2026-01-28T10:00:00+00:00",
        "exp": 1234567890
    }

Providers that only send a boolean ``email_verified`` (top level or in
``user_metadata``) get the token's ``iat`` as the confirmation time.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

import structlog
from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """Verifies bearer JWTs into a TokenUser."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Decode and verify a JWT. Returns None when invalid or expired."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError as e:
            logger.info("token_rejected", reason=str(e))
            return None

        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not email:
            return None

        try:
            user_id = UUID(subject)
        except ValueError:
            return None

        user_metadata = payload.get("user_metadata") or {}
        return TokenUser(
            id=user_id,
            email=email,
            display_name=user_metadata.get("display_name"),
            email_confirmed_at=_email_confirmed_at(payload, user_metadata),
        )

    def create_token(self, user: TokenUser) -> str:
        """Create a signed token for a user (used by tests and local tooling)."""
        expire = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)
        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "exp": expire,
            "user_metadata": {"display_name": user.display_name},
        }
        if user.email_confirmed_at is not None:
            payload["email_confirmed_at"] = user.email_confirmed_at.isoformat()
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def _email_confirmed_at(payload: dict, user_metadata: dict) -> Optional[datetime]:
    """When the provider confirmed the user's email, or None if it has not."""
    confirmed_at = _to_datetime(payload.get("email_confirmed_at"))
    if confirmed_at is not None:
        return confirmed_at

    if payload.get("email_verified") is True or user_metadata.get("email_verified") is True:
        return _to_datetime(payload.get("iat")) or datetime.now(timezone.utc)
    return None
