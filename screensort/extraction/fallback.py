"""Deterministic pattern extraction used when the model stage cannot be used."""

import re
from collections.abc import Sequence

from screensort.extraction.models import BookMetadata, MovieMetadata, MusicMetadata

MUSIC_NOISE: frozenset[str] = frozenset({
    "play", "pause", "shuffle", "repeat", "share", "add to",
    "library", "lyrics", "queue", "airplay", "cast",
    "am", "pm", "battery", "%", "wifi", "cellular",
    "apple music", "spotify", "youtube music", "soundcloud",
    "now playing", "up next", "playing from",
})

MOVIE_NOISE: frozenset[str] = frozenset({
    "play", "watch", "trailer", "episodes", "season",
    "netflix", "prime video", "disney+", "hbo", "hulu",
    "continue watching", "my list", "trending", "top 10",
    "new", "popular", "because you watched", "more like this",
})

BOOK_NOISE: frozenset[str] = frozenset({
    "goodreads", "kindle", "apple books", "audible", "libby",
    "want to read", "currently reading", "read",
    "ratings", "reviews", "pages", "chapter",
    "buy", "sample", "download", "share",
})

ARTIST_TITLE_SEPARATORS: tuple[str, ...] = (" - ", " — ", " – ", " − ")
PATTERN_MATCH_CONFIDENCE = 0.7
MINIMUM_LINE_LENGTH = 2
SUBSTANTIAL_LINE_LENGTH = 3

_YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
_ISBN_PATTERN = re.compile(r"\b97[89]\d{10}\b")
_NUMERIC_LINE = re.compile(r"^[\d:.]+$")


def clean_lines(lines: Sequence[str], noise: frozenset[str]) -> list[str]:
    """Drop blank, too-short, purely numeric and UI-chrome lines."""
    cleaned = []
    for line in lines:
        stripped = line.strip()
        if len(stripped) < MINIMUM_LINE_LENGTH or _NUMERIC_LINE.match(stripped):
            continue
        if _is_noise(stripped.lower(), noise):
            continue
        cleaned.append(stripped)
    return cleaned


def _is_noise(lowered: str, noise: frozenset[str]) -> bool:
    return any(lowered == pattern or lowered.startswith(pattern + " ") for pattern in noise)


def _substantial(lines: Sequence[str]) -> list[str]:
    return [line for line in lines if len(line) >= SUBSTANTIAL_LINE_LENGTH]


def extract_music(lines: Sequence[str], confidence: float) -> MusicMetadata | None:
    cleaned = clean_lines(lines, MUSIC_NOISE)
    if len(cleaned) < 2:
        return None

    for line in cleaned:
        parsed = _split_artist_title(line)
        if parsed is not None:
            artist, title = parsed
            return MusicMetadata(
                title=title,
                artist=artist,
                confidence=PATTERN_MATCH_CONFIDENCE,
                raw_text=[line],
            )

    # players put the title above the artist
    substantial = _substantial(cleaned)
    if len(substantial) < 2:
        return None
    return MusicMetadata(
        title=substantial[0],
        artist=substantial[1],
        confidence=confidence,
        raw_text=cleaned,
    )


def _split_artist_title(line: str) -> tuple[str, str] | None:
    for separator in ARTIST_TITLE_SEPARATORS:
        parts = line.split(separator)
        if len(parts) != 2:
            continue
        first, second = parts[0].strip(), parts[1].strip()
        if len(first) >= MINIMUM_LINE_LENGTH and len(second) >= MINIMUM_LINE_LENGTH:
            return first, second
    return None


def extract_movie(lines: Sequence[str], confidence: float) -> MovieMetadata | None:
    cleaned = clean_lines(lines, MOVIE_NOISE)
    substantial = _substantial(cleaned)
    if not substantial:
        return None

    year = None
    for line in lines:
        match = _YEAR_PATTERN.search(line)
        if match:
            year = int(match.group(0))
            break

    return MovieMetadata(
        title=substantial[0],
        year=year,
        confidence=confidence,
        raw_text=cleaned,
    )


def extract_book(lines: Sequence[str], confidence: float) -> BookMetadata | None:
    cleaned = clean_lines(lines, BOOK_NOISE)
    if not cleaned:
        return None
    isbn = _find_isbn(cleaned)

    for index, line in enumerate(cleaned):
        if index > 0 and line.lower().startswith("by ") and len(line) > 4:
            return BookMetadata(
                title=cleaned[index - 1],
                author=line[3:].strip(),
                isbn=isbn,
                confidence=PATTERN_MATCH_CONFIDENCE,
                raw_text=cleaned,
            )

    substantial = [
        line for line in _substantial(cleaned) if not _ISBN_PATTERN.search(line.replace("-", ""))
    ]
    if not substantial:
        return None
    return BookMetadata(
        title=substantial[0],
        author=substantial[1] if len(substantial) > 1 else None,
        isbn=isbn,
        confidence=confidence,
        raw_text=cleaned,
    )


def _find_isbn(lines: Sequence[str]) -> str | None:
    for line in lines:
        match = _ISBN_PATTERN.search(line.replace("-", ""))
        if match:
            return match.group(0)
    return None
