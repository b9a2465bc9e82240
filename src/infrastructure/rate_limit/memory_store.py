"""Process-local rate limit bucket store."""

from collections.abc import Iterator

from domain.repositories.rate_limit_store import RateLimitEntry


class InMemoryRateLimitStore:
    """Dict-backed IRateLimitStore.

    Per-process only: with several workers each one enforces its own limits.
    Atomicity of read-modify-write is the limiter's job, not the store's.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def get(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def set(self, key: str, entry: RateLimitEntry) -> None:
        self._entries[key] = entry

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def items(self) -> Iterator[tuple[str, RateLimitEntry]]:
        # Snapshot so callers may delete while iterating
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)
