from typing import ClassVar

import psycopg
from psycopg.types.json import Jsonb

from screensort.cache.base import BaseKeyValueStore
from screensort.cache.connection import get_connection
from screensort.cache.exceptions import CacheError


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key-value rows in the screensort_cache table."""

    TABLE: ClassVar[str] = "screensort_cache"

    def ensure_schema(self) -> None:
        self._execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.TABLE} (
                key TEXT PRIMARY KEY,
                value JSONB NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """,
            (),
        )

    def get(self, key: str) -> object | None:
        try:
            with get_connection() as conn:
                row = conn.execute(
                    f"SELECT value FROM {self.TABLE} WHERE key = %s",
                    (key,),
                ).fetchone()
        except psycopg.Error as exc:
            raise CacheError(f"Failed to read cache entry {key}: {exc}") from exc
        if row is None:
            return None
        return row[0]

    def set(self, key: str, value: object) -> None:
        self._execute(
            f"""
            INSERT INTO {self.TABLE} (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key) DO UPDATE
            SET value = EXCLUDED.value, updated_at = NOW()
            """,
            (key, Jsonb(value)),
        )

    def delete(self, key: str) -> None:
        self._execute(f"DELETE FROM {self.TABLE} WHERE key = %s", (key,))

    @staticmethod
    def _execute(query: str, params: tuple[object, ...]) -> None:
        try:
            with get_connection() as conn:
                conn.execute(query, params)
                conn.commit()
        except psycopg.Error as exc:
            raise CacheError(f"Cache write failed: {exc}") from exc
