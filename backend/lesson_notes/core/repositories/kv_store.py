from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Sequence


class KVEntry(NamedTuple):
    key: str
    value: Any


class KVStore(ABC):
    """Abstract key-value store holding JSON documents.

    Contract used by the repositories. Implementations perform network I/O and
    therefore expose async methods.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:  # pragma: no cover - interface only
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:  # pragma: no cover
        """Insert or overwrite the value stored under key."""

    @abstractmethod
    async def delete(self, key: str) -> None:  # pragma: no cover
        """Remove key. Deleting a missing key is not an error."""

    @abstractmethod
    async def get_entries_by_prefix(self, prefix: str) -> Sequence[KVEntry]:  # pragma: no cover
        """Return every (key, value) pair whose key starts with prefix."""

    async def get_by_prefix(self, prefix: str) -> list[Any]:
        """Return the values of every key starting with prefix."""
        return [entry.value for entry in await self.get_entries_by_prefix(prefix)]
