"""Durable processed-item set and result history.

``mark_processed`` writes through on every call so a crash mid-batch never
re-processes items that were already handled. Results are persisted as one
versioned document per batch.
"""

import threading
from collections.abc import Iterable, Sequence
from typing import Any, ClassVar

from screensort.cache.base import BaseKeyValueStore
from screensort.cache.exceptions import CacheError
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import LibraryError
from screensort.logging.logger import Log
from screensort.pipeline.models import ResultRecord


class CacheStore:
    """Tracks processed item ids, cached results and optional fragment snapshots."""

    RESULTS_VERSION: ClassVar[int] = 1

    def __init__(self, kv: BaseKeyValueStore, namespace: str = "ScreenSort") -> None:
        self._kv = kv
        self._processed_key = f"{namespace}.ProcessedIDs"
        self._results_key = f"{namespace}.CachedResults"
        self._snapshots_key = f"{namespace}.FragmentSnapshots"
        self._lock = threading.Lock()

    def mark_processed(self, item_id: str) -> None:
        with self._lock:
            processed = self._read_processed()
            if item_id in processed:
                return
            processed.add(item_id)
            self._kv.set(self._processed_key, sorted(processed))

    def is_processed(self, item_id: str) -> bool:
        return item_id in self.load_processed_ids()

    def load_processed_ids(self) -> set[str]:
        with self._lock:
            return self._read_processed()

    def save_results(self, records: Sequence[ResultRecord]) -> None:
        with self._lock:
            self._write_results(records)

    def load_results(self) -> list[ResultRecord]:
        with self._lock:
            return self._read_results()

    def merge_results(self, records: Sequence[ResultRecord]) -> None:
        """Replace cached records of the same items and append ``records``.

        Read and write happen under one lock acquisition so a concurrent
        ``cleanup_stale`` cannot be undone by a stale read.
        """
        with self._lock:
            batch_ids = {record.item_id for record in records}
            previous = [
                record for record in self._read_results() if record.item_id not in batch_ids
            ]
            self._write_results(previous + list(records))

    def save_fragment_snapshot(self, item_id: str, lines: Sequence[str]) -> None:
        with self._lock:
            snapshots = self._read_snapshots()
            snapshots[item_id] = list(lines)
            self._kv.set(self._snapshots_key, snapshots)

    def load_fragment_snapshot(self, item_id: str) -> list[str] | None:
        with self._lock:
            return self._read_snapshots().get(item_id)

    def cleanup_stale(self, library: BaseLibrary) -> int:
        """Forget items the library no longer has. Returns how many were removed."""
        processed = self.load_processed_ids()
        if not processed:
            return 0
        try:
            existing = library.existing_ids(processed)
        except LibraryError as exc:
            Log.warning(f"Skipping stale cache cleanup: {exc}")
            return 0

        stale = processed - existing
        if not stale:
            return 0

        with self._lock:
            current = self._read_processed()
            self._kv.set(self._processed_key, sorted(current - stale))
            records = self._read_results()
            self._write_results([record for record in records if record.item_id not in stale])
            snapshots = self._read_snapshots()
            if any(item_id in snapshots for item_id in stale):
                self._kv.set(
                    self._snapshots_key,
                    {key: value for key, value in snapshots.items() if key not in stale},
                )
        Log.info("Removed stale cache entries", removed=len(stale))
        return len(stale)

    def start_cleanup(self, library: BaseLibrary) -> threading.Thread:
        """Run ``cleanup_stale`` on a daemon thread."""
        thread = threading.Thread(
            target=self._cleanup_in_background,
            args=(library,),
            name="screensort-cache-cleanup",
            daemon=True,
        )
        thread.start()
        return thread

    def _cleanup_in_background(self, library: BaseLibrary) -> None:
        try:
            self.cleanup_stale(library)
        except CacheError as exc:
            Log.warning(f"Stale cache cleanup failed: {exc}")

    def _read_processed(self) -> set[str]:
        value = self._safe_get(self._processed_key)
        if not isinstance(value, list):
            if value is not None:
                Log.warning("Ignoring malformed processed-id set")
            return set()
        return {str(item_id) for item_id in value}

    def _read_results(self) -> list[ResultRecord]:
        value = self._safe_get(self._results_key)
        if value is None:
            return []
        if isinstance(value, dict) and value.get("version") == self.RESULTS_VERSION:
            raw_records = value.get("records")
        elif isinstance(value, list):
            raw_records = value
        else:
            Log.warning("Ignoring cached results with unknown layout")
            return []
        if not isinstance(raw_records, list):
            Log.warning("Ignoring cached results with unknown layout")
            return []

        try:
            return [ResultRecord.from_dict(raw) for raw in raw_records]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            Log.warning(f"Ignoring undecodable cached results: {exc}")
            return []

    def _write_results(self, records: Iterable[ResultRecord]) -> None:
        self._kv.set(
            self._results_key,
            {
                "version": self.RESULTS_VERSION,
                "records": [record.to_dict() for record in records],
            },
        )

    def _read_snapshots(self) -> dict[str, list[str]]:
        value = self._safe_get(self._snapshots_key)
        if not isinstance(value, dict):
            return {}
        return {str(key): list(lines) for key, lines in value.items() if isinstance(lines, list)}

    def _safe_get(self, key: str) -> Any:
        try:
            return self._kv.get(key)
        except CacheError as exc:
            Log.warning(f"Cache entry {key} unreadable, treating as empty: {exc}")
            return None
