from screensort.classification.keyword_classifier import KeywordClassifier
from screensort.config.settings import Settings
from screensort.domain.models import ContentType
from screensort.extraction.base import BaseExtractor
from screensort.extraction.book_extractor import BookExtractor
from screensort.extraction.movie_extractor import MovieExtractor
from screensort.extraction.music_extractor import MusicExtractor
from screensort.llm.client_base import BaseModelClient


class ExtractorFactory:
    """Creates one extractor per content type that carries metadata."""

    @staticmethod
    def create(
        settings: Settings,
        client: BaseModelClient | None,
        classifier: KeywordClassifier,
    ) -> dict[ContentType, BaseExtractor]:
        common = {
            "client": client,
            "classifier": classifier,
            "model": settings.llm_model_name,
            "temperature": settings.llm_temperature,
            "fallback_confidence": settings.fallback_confidence,
        }
        return {
            ContentType.MUSIC: MusicExtractor(
                threshold=settings.music_confidence_threshold, **common
            ),
            ContentType.MOVIE: MovieExtractor(
                threshold=settings.movie_confidence_threshold, **common
            ),
            ContentType.BOOK: BookExtractor(
                threshold=settings.book_confidence_threshold, **common
            ),
        }
