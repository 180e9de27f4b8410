from screensort.domain.models import ContentType
from screensort.extraction.base import BaseExtractor
from screensort.extraction.fallback import BOOK_NOISE, extract_book
from screensort.extraction.models import BookMetadata
from screensort.extraction.validator import BOOK_VALIDATOR


class BookExtractor(BaseExtractor[BookMetadata]):
    """Extracts book title, author and ISBN from reading-app screenshots."""

    CONTENT_TYPE = ContentType.BOOK
    PROMPT_NAME = "book"
    SCHEMA_NAME = "book_extraction"
    NOISE = BOOK_NOISE
    VALIDATOR = BOOK_VALIDATOR

    def _build(self, data: dict[str, object], lines: list[str]) -> BookMetadata:
        return BookMetadata(
            title=str(data["title"]),
            author=str(data["author"]) or None,
            isbn=str(data["isbn"]) or None,
            confidence=float(data["confidence"]),
            raw_text=lines,
        )

    def _fallback(self, lines: list[str], confidence: float) -> BookMetadata | None:
        return extract_book(lines, confidence)
