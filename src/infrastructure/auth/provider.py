"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """A verified user extracted from a bearer token."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    email_confirmed_at: Optional[datetime] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a bearer token.

        Returns:
            TokenUser if valid, None if invalid
        """
        ...
