import signal
import sys

from screensort.cache.connection import close_pool, init_pool
from screensort.config.settings import Settings
from screensort.logging.logger import Log
from screensort.pipeline.cancellation import CancellationToken
from screensort.pipeline.factory import build_orchestrator
from screensort.pipeline.models import BatchResult, BatchStatus

_SUCCESSFUL_STATUSES = (BatchStatus.COMPLETED, BatchStatus.CANCELLED, BatchStatus.NOTHING_TO_DO)


def main() -> None:
    """Entry point: build dependencies -> clean stale cache -> run one batch."""
    settings = Settings()
    Log.configure(settings.log_level)
    use_postgres = settings.cache_backend.lower() == "postgres"
    if use_postgres:
        init_pool(settings)

    try:
        orchestrator = build_orchestrator(settings)
        previous = orchestrator.load_previous_results()
        Log.info(f"Loaded {len(previous)} previously cached results")
        orchestrator.start_cache_cleanup()

        cancel = CancellationToken()
        signal.signal(signal.SIGINT, lambda _signum, _frame: _request_cancel(cancel))

        result = orchestrator.run_batch(cancel=cancel, progress=_log_progress)
        _report(result)
    finally:
        if use_postgres:
            close_pool()

    sys.exit(0 if result.status in _SUCCESSFUL_STATUSES else 1)


def _request_cancel(cancel: CancellationToken) -> None:
    Log.warning("Interrupt received, stopping after the current item")
    cancel.cancel()


def _log_progress(index: int, total: int) -> None:
    Log.info(f"Processing item {index}/{total}")


def _report(result: BatchResult) -> None:
    counts = result.counts
    summary = {status.value: count for status, count in counts.items()}
    if result.status in _SUCCESSFUL_STATUSES:
        Log.info(
            f"Batch {result.status.value}",
            processed=result.processed,
            total=result.total,
            **summary,
        )
    else:
        Log.error(f"Batch {result.status.value}: {result.message}")
    for record in result.records:
        Log.info(
            f"{record.status.value}: {record.title or record.item_id}",
            content_type=record.content_type.value,
            message=record.message,
            link=record.service_link,
        )


if __name__ == "__main__":
    main()
