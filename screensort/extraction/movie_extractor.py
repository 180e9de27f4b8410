from screensort.domain.models import ContentType
from screensort.extraction.base import BaseExtractor
from screensort.extraction.fallback import MOVIE_NOISE, extract_movie
from screensort.extraction.models import MovieMetadata
from screensort.extraction.validator import MOVIE_VALIDATOR


class MovieExtractor(BaseExtractor[MovieMetadata]):
    """Extracts movie or show title, year and director from streaming screenshots."""

    CONTENT_TYPE = ContentType.MOVIE
    PROMPT_NAME = "movie"
    SCHEMA_NAME = "movie_extraction"
    NOISE = MOVIE_NOISE
    VALIDATOR = MOVIE_VALIDATOR

    def _build(self, data: dict[str, object], lines: list[str]) -> MovieMetadata:
        year = data.get("year")
        if isinstance(year, bool) or not isinstance(year, int) or year <= 0:
            year = None
        return MovieMetadata(
            title=str(data["title"]),
            year=year,
            director=str(data["director"]) or None,
            confidence=float(data["confidence"]),
            raw_text=lines,
        )

    def _fallback(self, lines: list[str], confidence: float) -> MovieMetadata | None:
        return extract_movie(lines, confidence)
