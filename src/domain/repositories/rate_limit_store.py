"""Rate limit bucket store protocol."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RateLimitEntry:
    """Fixed-window bucket for one client key."""

    count: int
    window_start: float


class IRateLimitStore(Protocol):
    """Key/value storage for rate limit buckets.

    Backed by a process-local dict in tests and single-process deployments;
    a shared store can be dropped in for multi-process deployments without
    touching the limiter.
    """

    def get(self, key: str) -> RateLimitEntry | None:
        """Get the bucket for a key."""
        ...

    def set(self, key: str, entry: RateLimitEntry) -> None:
        """Create or replace the bucket for a key."""
        ...

    def delete(self, key: str) -> None:
        """Remove the bucket for a key, if present."""
        ...

    def items(self) -> Iterator[tuple[str, RateLimitEntry]]:
        """Iterate over all (key, bucket) pairs."""
        ...

    def __len__(self) -> int:
        """Number of buckets currently held."""
        ...
