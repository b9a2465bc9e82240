"""RecipientEmail value object."""

import re
from dataclasses import dataclass

from core.exceptions import InvalidEmailFormatError

# local-part "@" domain "." suffix, no whitespace anywhere
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True, slots=True)
class RecipientEmail:
    """Email address identifying the recipient of a tag share.

    The raw value is trimmed and lower-cased before validation, so two
    instances built from ``" Bob@Example.com"`` and ``"bob@example.com"``
    compare equal.

    Raises:
        InvalidEmailFormatError: If the value is not a syntactically valid address.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidEmailFormatError(self.value)

        normalized = self.value.strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailFormatError(self.value)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
