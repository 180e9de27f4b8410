"""User corrections kept in the key-value backend as one document keyed by item id."""

import threading
from dataclasses import replace

from screensort.cache.base import BaseKeyValueStore
from screensort.cache.exceptions import CacheError
from screensort.corrections.models import Correction
from screensort.logging.logger import Log


class CorrectionStore:
    def __init__(self, kv: BaseKeyValueStore, namespace: str = "ScreenSort") -> None:
        self._kv = kv
        self._key = f"{namespace}.UserCorrections"
        self._lock = threading.Lock()

    def save(self, correction: Correction) -> None:
        """Store ``correction``, replacing any earlier one for the same item."""
        with self._lock:
            corrections = self._read()
            corrections[correction.item_id] = correction
            self._write(corrections)

    def load(self, item_id: str) -> Correction | None:
        with self._lock:
            return self._read().get(item_id)

    def load_all(self) -> list[Correction]:
        """Return every stored correction, newest first."""
        with self._lock:
            corrections = list(self._read().values())
        return sorted(corrections, key=lambda correction: correction.created_at, reverse=True)

    def has_correction(self, item_id: str) -> bool:
        return self.load(item_id) is not None

    def delete(self, item_id: str) -> None:
        with self._lock:
            corrections = self._read()
            if corrections.pop(item_id, None) is not None:
                self._write(corrections)

    def delete_all(self) -> None:
        with self._lock:
            self._kv.delete(self._key)

    def mark_as_applied(self, item_id: str) -> None:
        with self._lock:
            corrections = self._read()
            correction = corrections.get(item_id)
            if correction is None or correction.is_applied:
                return
            corrections[item_id] = replace(correction, is_applied=True)
            self._write(corrections)

    def unapplied_count(self) -> int:
        return sum(1 for correction in self.load_all() if not correction.is_applied)

    def _read(self) -> dict[str, Correction]:
        try:
            value = self._kv.get(self._key)
        except CacheError as exc:
            Log.warning(f"Corrections unreadable, treating as empty: {exc}")
            return {}
        if value is None:
            return {}
        if not isinstance(value, dict):
            Log.warning("Ignoring corrections with unknown layout")
            return {}
        try:
            return {str(key): Correction.from_dict(raw) for key, raw in value.items()}
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            Log.warning(f"Ignoring undecodable corrections: {exc}")
            return {}

    def _write(self, corrections: dict[str, Correction]) -> None:
        self._kv.set(
            self._key,
            {item_id: correction.to_dict() for item_id, correction in corrections.items()},
        )
