from screensort.auth.base import BaseAuthService
from screensort.config.settings import Settings
from screensort.enrichment.google_books_adapter import GoogleBooksLookup
from screensort.enrichment.tmdb_adapter import TmdbMovieLookup
from screensort.enrichment.youtube_adapter import YouTubeVideoService


class EnrichmentFactory:
    """Creates the lookup adapters, sharing one auth service."""

    @staticmethod
    def create_video_service(settings: Settings, auth: BaseAuthService) -> YouTubeVideoService:
        return YouTubeVideoService(
            api_key=settings.youtube_api_key,
            auth=auth,
            timeout_seconds=settings.lookup_timeout_seconds,
        )

    @staticmethod
    def create_movie_lookup(settings: Settings) -> TmdbMovieLookup:
        return TmdbMovieLookup(
            api_key=settings.tmdb_api_key,
            timeout_seconds=settings.lookup_timeout_seconds,
        )

    @staticmethod
    def create_book_lookup(settings: Settings, auth: BaseAuthService) -> GoogleBooksLookup:
        return GoogleBooksLookup(auth=auth, timeout_seconds=settings.lookup_timeout_seconds)
