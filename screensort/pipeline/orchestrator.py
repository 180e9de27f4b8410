"""Batch orchestration: fetch, filter, route each item, persist."""

import threading
from concurrent.futures import ThreadPoolExecutor

from screensort.auth.base import BaseAuthService
from screensort.cache.cache_store import CacheStore
from screensort.cache.exceptions import CacheError
from screensort.classification.base import BaseClassifier
from screensort.domain.models import ContentType, Item
from screensort.enrichment.base import BaseVideoService
from screensort.enrichment.exceptions import EnrichmentError
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import LibraryError
from screensort.logging.logger import Log
from screensort.pipeline.cancellation import CancellationToken
from screensort.pipeline.captions import annotate_best_effort, build_caption, has_legacy_marker
from screensort.pipeline.models import (
    BatchResult,
    BatchStatus,
    ItemContext,
    ProgressCallback,
    ResultRecord,
    ResultStatus,
)
from screensort.pipeline.routes import BaseRoute
from screensort.transcription.base import BaseTranscriber
from screensort.transcription.exceptions import TranscriptionError


class Orchestrator:
    """Runs one batch over the library, strictly one item at a time.

    Each item is marked processed as soon as its record exists, whatever the
    outcome, so an interrupted batch resumes after the last handled item.
    Results are persisted once, after the loop.
    """

    def __init__(
        self,
        *,
        library: BaseLibrary,
        transcriber: BaseTranscriber,
        classifier: BaseClassifier,
        routes: dict[ContentType, BaseRoute],
        cache: CacheStore,
        video_service: BaseVideoService,
        auth: BaseAuthService,
        destinations: dict[ContentType, str],
        caption_prefix: str = "ScreenSort",
        playlist_name: str = "ScreenSort",
        destination_workers: int = 4,
        debug_snapshots: bool = False,
    ) -> None:
        self._library = library
        self._transcriber = transcriber
        self._classifier = classifier
        self._routes = routes
        self._cache = cache
        self._video_service = video_service
        self._auth = auth
        self._destinations = destinations
        self._caption_prefix = caption_prefix
        self._playlist_name = playlist_name
        self._destination_workers = destination_workers
        self._debug_snapshots = debug_snapshots

    def load_previous_results(self) -> list[ResultRecord]:
        return self._cache.load_results()

    def start_cache_cleanup(self) -> threading.Thread:
        return self._cache.start_cleanup(self._library)

    def run_batch(
        self,
        cancel: CancellationToken | None = None,
        progress: ProgressCallback | None = None,
    ) -> BatchResult:
        """Process every new item in the library.

        Never raises for a single item; batch-level problems are reported
        through the returned status.
        """
        cancel = cancel or CancellationToken()

        if not self._library.has_access():
            return BatchResult(BatchStatus.PRECONDITION_FAILED, message="Library access denied")
        if not self._auth.is_authenticated():
            return BatchResult(BatchStatus.PRECONDITION_FAILED, message="Account login required")

        try:
            candidates = self._library.fetch_items()
        except LibraryError as exc:
            Log.error(f"Failed to fetch items: {exc}")
            return BatchResult(BatchStatus.ERROR, message=str(exc))

        pending = self._filter_pending(candidates)
        total = len(pending)
        Log.info("Batch starting", candidates=len(candidates), pending=total)
        if not pending:
            return BatchResult(BatchStatus.NOTHING_TO_DO, message="No new items to process")

        try:
            playlist_id = self._video_service.get_or_create_playlist(self._playlist_name)
        except EnrichmentError as exc:
            Log.error(f"Failed to acquire playlist: {exc}")
            return BatchResult(BatchStatus.ERROR, message=str(exc), total=total)

        try:
            self._ensure_destinations()
        except LibraryError as exc:
            Log.error(f"Failed to create destinations: {exc}")
            return BatchResult(BatchStatus.ERROR, message=str(exc), total=total)

        records: list[ResultRecord] = []
        status = BatchStatus.COMPLETED
        for index, item in enumerate(pending, start=1):
            if cancel.is_cancelled:
                status = BatchStatus.CANCELLED
                Log.info("Batch cancelled", processed=len(records), total=total)
                break
            if progress is not None:
                progress(index, total)

            record = self._process_item(item, playlist_id)
            records.append(record)
            Log.info(
                f"Item {record.status.value}",
                item_id=item.id,
                content_type=record.content_type.value,
            )
            self._mark_processed(item.id)

        self._persist(records)
        Log.info("Batch finished", status=status.value, processed=len(records), total=total)
        return BatchResult(status, records=records, processed=len(records), total=total)

    def _filter_pending(self, candidates: list[Item]) -> list[Item]:
        processed = self._cache.load_processed_ids()
        return [
            item
            for item in candidates
            if item.id not in processed and not self._carries_legacy_marker(item)
        ]

    def _carries_legacy_marker(self, item: Item) -> bool:
        try:
            annotation = self._library.get_annotation(item)
        except LibraryError as exc:
            Log.warning(f"Could not read annotation: {exc}", item_id=item.id)
            return False
        return has_legacy_marker(annotation, self._caption_prefix)

    def _ensure_destinations(self) -> None:
        names = [self._destinations[content_type] for content_type in ContentType]
        with ThreadPoolExecutor(max_workers=self._destination_workers) as executor:
            list(executor.map(self._library.create_destination_if_needed, names))

    def _process_item(self, item: Item, playlist_id: str) -> ResultRecord:
        try:
            return self._run_item_pipeline(item, playlist_id)
        except TranscriptionError as exc:
            return self._fail_unclassified(item, exc)
        except Exception as exc:  # one item never aborts the batch
            Log.exception(f"Unexpected failure: {exc}", item_id=item.id)
            return self._fail_unclassified(item, exc)

    def _fail_unclassified(self, item: Item, exc: Exception) -> ResultRecord:
        annotate_best_effort(
            self._library,
            item,
            build_caption(self._caption_prefix, ContentType.UNKNOWN, f"Failed: {exc}"),
        )
        return ResultRecord(
            item_id=item.id,
            status=ResultStatus.FAILED,
            content_type=ContentType.UNKNOWN,
            message=str(exc),
        )

    def _run_item_pipeline(self, item: Item, playlist_id: str) -> ResultRecord:
        fragments = self._transcriber.transcribe(item)

        if self._debug_snapshots:
            self._snapshot(item, [fragment.text for fragment in fragments])

        content_type = self._classifier.classify(fragments)
        context = ItemContext(
            item=item,
            fragments=fragments,
            content_type=content_type,
            playlist_id=playlist_id,
        )
        try:
            return self._routes[content_type].handle(context)
        except Exception as exc:  # keep the classified type on the record
            Log.exception(f"Unexpected failure: {exc}", item_id=item.id)
            return ResultRecord(
                item_id=item.id,
                status=ResultStatus.FAILED,
                content_type=content_type,
                message=str(exc),
            )

    def _snapshot(self, item: Item, lines: list[str]) -> None:
        try:
            self._cache.save_fragment_snapshot(item.id, lines)
        except CacheError as exc:
            Log.warning(f"Could not save fragment snapshot: {exc}", item_id=item.id)

    def _mark_processed(self, item_id: str) -> None:
        try:
            self._cache.mark_processed(item_id)
        except CacheError as exc:
            Log.error(f"Could not mark item processed: {exc}", item_id=item_id)

    def _persist(self, records: list[ResultRecord]) -> None:
        try:
            self._cache.merge_results(records)
        except CacheError as exc:
            Log.error(f"Could not persist results: {exc}")
