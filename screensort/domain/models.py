from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ContentType(str, Enum):
    """Closed set of labels a screenshot can be classified as."""

    MUSIC = "music"
    MOVIE = "movie"
    BOOK = "book"
    MEME = "meme"
    UNKNOWN = "unknown"

    @property
    def destination_suffix(self) -> str:
        return _DESTINATION_SUFFIXES[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def requires_extraction(self) -> bool:
        return self in (ContentType.MUSIC, ContentType.MOVIE, ContentType.BOOK)


_DESTINATION_SUFFIXES: dict[ContentType, str] = {
    ContentType.MUSIC: "Music",
    ContentType.MOVIE: "Movies",
    ContentType.BOOK: "Books",
    ContentType.MEME: "Memes",
    ContentType.UNKNOWN: "Flagged",
}


@dataclass(frozen=True)
class BoundingBox:
    """Normalized (0-1) box with a bottom-left origin: higher y is higher on screen."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class TextFragment:
    """One transcribed line of text."""

    text: str
    confidence: float = 1.0
    box: BoundingBox = field(default_factory=BoundingBox)


@dataclass(frozen=True)
class Item:
    """A captured image as reported by the library. Pixel data never leaves the library."""

    id: str
    created_at: datetime | None = None


def order_fragments(fragments: Iterable[TextFragment]) -> list[TextFragment]:
    """Sort fragments top-to-bottom by vertical position."""
    return sorted(fragments, key=lambda fragment: fragment.box.y, reverse=True)


def joined_text(fragments: Iterable[TextFragment]) -> str:
    """Join fragment texts top-to-bottom, one fragment per line."""
    return "\n".join(fragment.text for fragment in order_fragments(fragments))
