from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lesson_notes.config import settings
from lesson_notes.core.repositories.kv_store import KVEntry, KVStore
from lesson_notes.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from supabase import Client


class SupabaseKVStore(KVStore):
    """Supabase implementation of the KVStore.

    Uses Supabase's PostgREST client against a table with a ``key`` text
    primary key and a ``value`` jsonb column.
    """

    def __init__(self, client: Client, table_name: str | None = None, page_size: int | None = None) -> None:
        self._client: Client = client
        self._table = table_name or settings.kv_table
        self._page_size = page_size or settings.kv_page_size

    async def get(self, key: str) -> Any | None:
        resp = await self._run(
            lambda: self._client.table(self._table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return items[0].get("value")

    async def set(self, key: str, value: Any) -> None:
        await self._run(
            lambda: self._client.table(self._table)
            .upsert({"key": key, "value": value})
            .execute()
        )

    async def delete(self, key: str) -> None:
        await self._run(
            lambda: self._client.table(self._table)
            .delete()
            .eq("key", key)
            .execute()
        )

    async def get_entries_by_prefix(self, prefix: str) -> list[KVEntry]:
        pattern = f"{self._escape_like(prefix)}%"
        entries: list[KVEntry] = []
        offset = 0

        while True:
            def _fetch_page(start: int, size: int) -> Any:
                return (
                    self._client.table(self._table)
                    .select("key, value")
                    .like("key", pattern)
                    .order("key")
                    .range(start, start + size - 1)
                    .execute()
                )

            resp = await self._run(lambda: _fetch_page(offset, self._page_size))
            rows: list[dict[str, Any]] = resp.data or []
            entries.extend(KVEntry(row["key"], row.get("value")) for row in rows)

            if len(rows) < self._page_size:
                break
            offset += self._page_size

        logger.debug("Prefix scan %r returned %d rows", prefix, len(entries))
        return entries

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        import asyncio
        return await asyncio.to_thread(func)

    @staticmethod
    def _escape_like(value: str) -> str:
        """Escape LIKE wildcards so the prefix is matched literally."""
        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
