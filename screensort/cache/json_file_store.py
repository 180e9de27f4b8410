import json
import os
import tempfile
from pathlib import Path

from screensort.cache.base import BaseKeyValueStore
from screensort.cache.exceptions import CacheDecodeError, CacheError


class JsonFileKeyValueStore(BaseKeyValueStore):
    """One ``<key>.json`` file per key; writes replace the file atomically."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def get(self, key: str) -> object | None:
        path = self._path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheError(f"Failed to read {path}: {exc}") from exc
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheDecodeError(f"Corrupt cache entry {key}: {exc}") from exc

    def set(self, key: str, value: object) -> None:
        path = self._path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(value, handle)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise CacheError(f"Failed to write {path}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise CacheError(f"Failed to delete cache entry {key}: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"
