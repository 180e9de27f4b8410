from pathlib import Path

from screensort.auth.static_token_adapter import StaticTokenAuth
from screensort.cache.cache_store import CacheStore
from screensort.cache.factory import KeyValueStoreFactory
from screensort.classification.factory import ClassifierFactory
from screensort.classification.keyword_classifier import KeywordClassifier
from screensort.config.settings import Settings
from screensort.content_log.markdown_log_adapter import MarkdownContentLog
from screensort.corrections.correction_store import CorrectionStore
from screensort.corrections.service import CorrectionService
from screensort.domain.models import ContentType
from screensort.enrichment.factory import EnrichmentFactory
from screensort.extraction.factory import ExtractorFactory
from screensort.library.local_directory_adapter import LocalDirectoryLibrary
from screensort.llm.factory import ModelClientFactory
from screensort.pipeline.orchestrator import Orchestrator
from screensort.pipeline.routes import BookRoute, MemeRoute, MovieRoute, MusicRoute, UnknownRoute
from screensort.transcription.factory import TranscriberFactory


def destination_names(prefix: str) -> dict[ContentType, str]:
    return {
        content_type: f"{prefix} - {content_type.destination_suffix}"
        for content_type in ContentType
    }


def build_orchestrator(settings: Settings) -> Orchestrator:
    """Build an Orchestrator with all adapters selected from settings."""
    library = LocalDirectoryLibrary(Path(settings.library_root))
    auth = StaticTokenAuth(settings.google_access_token)
    client = ModelClientFactory.create(settings)
    extractors = ExtractorFactory.create(settings, client, KeywordClassifier())
    video_service = EnrichmentFactory.create_video_service(settings, auth)
    destinations = destination_names(settings.destination_prefix)

    shared = {
        "library": library,
        "destinations": destinations,
        "caption_prefix": settings.caption_prefix,
        "content_log": MarkdownContentLog(Path(settings.content_log_path)),
    }
    routes = {
        ContentType.MUSIC: MusicRoute(
            extractor=extractors[ContentType.MUSIC], video_service=video_service, **shared
        ),
        ContentType.MOVIE: MovieRoute(
            extractor=extractors[ContentType.MOVIE],
            movie_lookup=EnrichmentFactory.create_movie_lookup(settings),
            **shared,
        ),
        ContentType.BOOK: BookRoute(
            extractor=extractors[ContentType.BOOK],
            book_lookup=EnrichmentFactory.create_book_lookup(settings, auth),
            **shared,
        ),
        ContentType.MEME: MemeRoute(**shared),
        ContentType.UNKNOWN: UnknownRoute(**shared),
    }

    return Orchestrator(
        library=library,
        transcriber=TranscriberFactory.create(settings, library),
        classifier=ClassifierFactory.create(settings, client),
        routes=routes,
        cache=CacheStore(KeyValueStoreFactory.create(settings), settings.cache_namespace),
        video_service=video_service,
        auth=auth,
        destinations=destinations,
        caption_prefix=settings.caption_prefix,
        playlist_name=settings.playlist_name,
        destination_workers=settings.destination_workers,
        debug_snapshots=settings.debug_snapshots,
    )


def build_correction_service(settings: Settings) -> CorrectionService:
    return CorrectionService(
        library=LocalDirectoryLibrary(Path(settings.library_root)),
        store=CorrectionStore(KeyValueStoreFactory.create(settings), settings.cache_namespace),
        destinations=destination_names(settings.destination_prefix),
        caption_prefix=settings.caption_prefix,
    )
