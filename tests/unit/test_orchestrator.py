import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from screensort.auth.static_token_adapter import StaticTokenAuth
from screensort.cache.cache_store import CacheStore
from screensort.cache.json_file_store import JsonFileKeyValueStore
from screensort.classification.keyword_classifier import KeywordClassifier
from screensort.domain.models import ContentType, Item
from screensort.enrichment.base import BaseBookLookup, BaseMovieLookup, BaseVideoService
from screensort.enrichment.exceptions import EnrichmentError, NoMatchError
from screensort.extraction.book_extractor import BookExtractor
from screensort.extraction.movie_extractor import MovieExtractor
from screensort.extraction.music_extractor import MusicExtractor
from screensort.library.exceptions import DestinationError, LibraryError
from screensort.llm.client_base import BaseModelClient
from screensort.pipeline.cancellation import CancellationToken
from screensort.pipeline.factory import destination_names
from screensort.pipeline.models import BatchStatus, ResultStatus
from screensort.pipeline.orchestrator import Orchestrator
from screensort.pipeline.routes import BookRoute, MemeRoute, MovieRoute, MusicRoute, UnknownRoute
from screensort.transcription.exceptions import TranscriptionError


def _video_service() -> MagicMock:
    service = MagicMock(spec=BaseVideoService)
    service.get_or_create_playlist.return_value = "PL"
    service.search_song.return_value = "vid1"
    service.watch_url.side_effect = lambda video_id: f"https://youtube.com/watch?v={video_id}"
    return service


def _orchestrator(
    library,
    transcriber,
    cache_dir: Path,
    *,
    client: BaseModelClient | None = None,
    video_service: MagicMock | None = None,
    token: str = "token",
    debug_snapshots: bool = False,
) -> Orchestrator:
    classifier = KeywordClassifier()
    destinations = destination_names("ScreenSort")
    video_service = video_service or _video_service()
    extractor_args = {"client": client, "classifier": classifier, "model": "test-model"}
    movie_lookup = MagicMock(spec=BaseMovieLookup)
    movie_lookup.search_movie.side_effect = NoMatchError("movie")
    book_lookup = MagicMock(spec=BaseBookLookup)
    book_lookup.search_book.side_effect = NoMatchError("book")
    shared = {"library": library, "destinations": destinations, "caption_prefix": "ScreenSort"}
    routes = {
        ContentType.MUSIC: MusicRoute(
            extractor=MusicExtractor(**extractor_args), video_service=video_service, **shared
        ),
        ContentType.MOVIE: MovieRoute(
            extractor=MovieExtractor(**extractor_args), movie_lookup=movie_lookup, **shared
        ),
        ContentType.BOOK: BookRoute(
            extractor=BookExtractor(**extractor_args), book_lookup=book_lookup, **shared
        ),
        ContentType.MEME: MemeRoute(**shared),
        ContentType.UNKNOWN: UnknownRoute(**shared),
    }
    return Orchestrator(
        library=library,
        transcriber=transcriber,
        classifier=classifier,
        routes=routes,
        cache=CacheStore(JsonFileKeyValueStore(cache_dir)),
        video_service=video_service,
        auth=StaticTokenAuth(token),
        destinations=destinations,
        debug_snapshots=debug_snapshots,
    )


def _items(*ids: str) -> list[Item]:
    return [Item(id=item_id) for item_id in ids]


class TestPreconditions:
    def test_library_access_denied(self, library, make_transcriber, tmp_path: Path) -> None:
        library.access = False
        video = _video_service()
        result = _orchestrator(library, make_transcriber({}), tmp_path, video_service=video).run_batch()

        assert result.status == BatchStatus.PRECONDITION_FAILED
        assert result.message == "Library access denied"
        video.get_or_create_playlist.assert_not_called()

    def test_login_required(self, library, make_transcriber, tmp_path: Path) -> None:
        result = _orchestrator(library, make_transcriber({}), tmp_path, token="").run_batch()
        assert result.status == BatchStatus.PRECONDITION_FAILED
        assert result.message == "Account login required"


class TestBatchSetup:
    def test_nothing_to_do(self, library, make_transcriber, tmp_path: Path) -> None:
        video = _video_service()
        result = _orchestrator(library, make_transcriber({}), tmp_path, video_service=video).run_batch()

        assert result.status == BatchStatus.NOTHING_TO_DO
        video.get_or_create_playlist.assert_not_called()

    def test_fetch_failure(self, library, make_transcriber, tmp_path: Path) -> None:
        library.fetch_items = MagicMock(side_effect=LibraryError("unreadable"))
        result = _orchestrator(library, make_transcriber({}), tmp_path).run_batch()
        assert result.status == BatchStatus.ERROR
        assert result.message == "unreadable"

    def test_playlist_failure_aborts_before_items(
        self, library, make_transcriber, music_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        video = _video_service()
        video.get_or_create_playlist.side_effect = EnrichmentError("quota")
        transcriber = make_transcriber({"a": music_fragments})
        result = _orchestrator(library, transcriber, tmp_path, video_service=video).run_batch()

        assert result.status == BatchStatus.ERROR
        assert result.total == 1
        assert transcriber.calls == []

    def test_destination_failure_aborts(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        library.create_destination_if_needed = MagicMock(side_effect=DestinationError("read-only"))
        transcriber = make_transcriber({"a": meme_fragments})
        result = _orchestrator(library, transcriber, tmp_path).run_batch()

        assert result.status == BatchStatus.ERROR
        assert transcriber.calls == []

    def test_every_destination_is_created(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        _orchestrator(library, make_transcriber({"a": meme_fragments}), tmp_path).run_batch()
        assert library.destinations == {
            "ScreenSort - Music",
            "ScreenSort - Movies",
            "ScreenSort - Books",
            "ScreenSort - Memes",
            "ScreenSort - Flagged",
        }


class TestRunBatch:
    def test_mixed_outcomes_only_move_successes(
        self, library, make_transcriber, make_fragments, music_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b", "c")
        transcriber = make_transcriber({
            "a": music_fragments,
            "b": make_fragments("Grocery list", "Milk", "Eggs"),
            "c": TranscriptionError("unreadable image"),
        })
        result = _orchestrator(library, transcriber, tmp_path).run_batch()

        assert result.status == BatchStatus.COMPLETED
        assert [record.status for record in result.records] == [
            ResultStatus.SUCCESS,
            ResultStatus.FLAGGED,
            ResultStatus.FAILED,
        ]
        assert result.records[0].title == "Bohemian Rhapsody"
        assert result.records[0].creator == "Queen"
        assert result.records[2].content_type == ContentType.UNKNOWN
        assert library.moves == {"a": "ScreenSort - Music"}
        assert set(library.annotations) == {"a", "b", "c"}
        assert library.annotations["c"].startswith("ScreenSort: Unknown | Status: Failed:")

    def test_second_run_has_nothing_to_do(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b")
        transcriber = make_transcriber({"a": meme_fragments, "b": meme_fragments})
        _orchestrator(library, transcriber, tmp_path).run_batch()
        library.annotations.clear()

        result = _orchestrator(library, transcriber, tmp_path).run_batch()

        assert result.status == BatchStatus.NOTHING_TO_DO
        assert transcriber.calls == ["a", "b"]

    def test_items_with_existing_caption_are_skipped(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b")
        library.annotations["a"] = "ScreenSort: Meme | Status: Sorted"
        transcriber = make_transcriber({"a": meme_fragments, "b": meme_fragments})
        result = _orchestrator(library, transcriber, tmp_path).run_batch()

        assert transcriber.calls == ["b"]
        assert result.total == 1

    def test_progress_is_one_based(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b")
        calls: list[tuple[int, int]] = []
        transcriber = make_transcriber({"a": meme_fragments, "b": meme_fragments})
        _orchestrator(library, transcriber, tmp_path).run_batch(
            progress=lambda index, total: calls.append((index, total))
        )
        assert calls == [(1, 2), (2, 2)]

    def test_cancel_stops_before_next_item_and_resume_continues(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b", "c")
        transcriber = make_transcriber({
            "a": meme_fragments, "b": meme_fragments, "c": meme_fragments,
        })
        token = CancellationToken()

        def cancel_after_first(index: int, total: int) -> None:
            if index == 1:
                token.cancel()

        result = _orchestrator(library, transcriber, tmp_path).run_batch(token, cancel_after_first)

        assert result.status == BatchStatus.CANCELLED
        assert result.processed == 1
        assert result.total == 3
        assert transcriber.calls == ["a"]

        library.annotations.clear()
        resumed = _orchestrator(library, transcriber, tmp_path).run_batch()
        assert resumed.status == BatchStatus.COMPLETED
        assert transcriber.calls == ["a", "b", "c"]

    def test_items_are_marked_as_they_complete(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b")
        transcriber = make_transcriber({"a": meme_fragments, "b": meme_fragments})

        def crash_on_second(index: int, total: int) -> None:
            if index == 2:
                raise RuntimeError("process killed")

        with pytest.raises(RuntimeError):
            _orchestrator(library, transcriber, tmp_path).run_batch(progress=crash_on_second)

        assert CacheStore(JsonFileKeyValueStore(tmp_path)).load_processed_ids() == {"a"}

    def test_unexpected_route_error_fails_item(
        self, library, make_transcriber, music_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b")
        video = _video_service()
        video.search_song.side_effect = RuntimeError("boom")
        transcriber = make_transcriber({"a": music_fragments, "b": music_fragments})
        result = _orchestrator(library, transcriber, tmp_path, video_service=video).run_batch()

        assert result.status == BatchStatus.COMPLETED
        assert [record.status for record in result.records] == [ResultStatus.FAILED] * 2
        assert result.records[0].message == "boom"

    def test_os_error_on_one_item_does_not_abort_batch(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "b", "c")
        transcriber = make_transcriber({
            "a": meme_fragments, "b": PermissionError("denied"), "c": meme_fragments,
        })
        result = _orchestrator(library, transcriber, tmp_path).run_batch()

        assert result.status == BatchStatus.COMPLETED
        assert [record.status for record in result.records] == [
            ResultStatus.SUCCESS,
            ResultStatus.FAILED,
            ResultStatus.SUCCESS,
        ]
        assert result.records[1].message == "denied"
        assert transcriber.calls == ["a", "b", "c"]
        assert library.annotations["b"] == "ScreenSort: Unknown | Status: Failed: denied"

        cache = CacheStore(JsonFileKeyValueStore(tmp_path))
        assert cache.load_processed_ids() == {"a", "b", "c"}
        assert [record.item_id for record in cache.load_results()] == ["a", "b", "c"]

    def test_persisting_keeps_entries_removed_by_cleanup_removed(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a", "gone")
        transcriber = make_transcriber({
            "a": meme_fragments, "gone": meme_fragments, "b": meme_fragments,
        })
        _orchestrator(library, transcriber, tmp_path).run_batch()

        library.items = _items("a", "b")
        library.annotations.clear()
        cache = CacheStore(JsonFileKeyValueStore(tmp_path))
        assert cache.cleanup_stale(library) == 1
        orchestrator = _orchestrator(library, transcriber, tmp_path)
        orchestrator.run_batch()

        assert [record.item_id for record in orchestrator.load_previous_results()] == ["a", "b"]

    def test_results_merge_with_previous_batches(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        transcriber = make_transcriber({"a": meme_fragments, "b": meme_fragments})
        _orchestrator(library, transcriber, tmp_path).run_batch()

        library.items = _items("a", "b")
        library.annotations.clear()
        orchestrator = _orchestrator(library, transcriber, tmp_path)
        orchestrator.run_batch()

        assert [record.item_id for record in orchestrator.load_previous_results()] == ["a", "b"]

    def test_debug_snapshots(
        self, library, make_transcriber, meme_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        _orchestrator(
            library, make_transcriber({"a": meme_fragments}), tmp_path, debug_snapshots=True
        ).run_batch()

        cache = CacheStore(JsonFileKeyValueStore(tmp_path))
        assert cache.load_fragment_snapshot("a") == ["Nobody:", "Me at 3am:", "made with mematic"]


class TestModelGate:
    def _client(self, payload: dict[str, object]) -> MagicMock:
        client = MagicMock(spec=BaseModelClient)
        client.create_chat_completion.return_value = json.dumps(payload)
        return client

    def test_low_model_confidence_is_flagged(
        self, library, make_transcriber, music_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        client = self._client({"songTitle": "Bohemian Rhapsody", "artist": "Queen", "confidence": 0.59})
        video = _video_service()
        result = _orchestrator(
            library, make_transcriber({"a": music_fragments}), tmp_path,
            client=client, video_service=video,
        ).run_batch()

        assert result.records[0].status == ResultStatus.FLAGGED
        assert library.moves == {}
        video.search_song.assert_not_called()

    def test_placeholder_answer_uses_fallback(
        self, library, make_transcriber, music_fragments, tmp_path: Path
    ) -> None:
        library.items = _items("a")
        client = self._client({"songTitle": "Unknown", "artist": "Unknown", "confidence": 0.95})
        result = _orchestrator(
            library, make_transcriber({"a": music_fragments}), tmp_path, client=client
        ).run_batch()

        record = result.records[0]
        assert record.status == ResultStatus.SUCCESS
        assert record.title == "Bohemian Rhapsody"
        assert record.creator == "Queen"
        assert library.moves == {"a": "ScreenSort - Music"}
