from pathlib import Path

from screensort.cache.base import BaseKeyValueStore
from screensort.cache.json_file_store import JsonFileKeyValueStore
from screensort.cache.postgres_store import PostgresKeyValueStore
from screensort.config.settings import Settings


class KeyValueStoreFactory:
    """Creates the configured cache backend."""

    @staticmethod
    def create(settings: Settings) -> BaseKeyValueStore:
        backend = settings.cache_backend.lower()
        if backend == "file":
            return JsonFileKeyValueStore(Path(settings.cache_dir))
        if backend == "postgres":
            store = PostgresKeyValueStore()
            store.ensure_schema()
            return store
        supported = ["file", "postgres"]
        raise ValueError(f"Unknown cache backend '{settings.cache_backend}'. Choose from: {supported}")
