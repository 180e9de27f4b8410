"""Deterministic keyword classifier.

Scores the lower-cased screenshot text against per-type keyword sets (app
names, platform chrome, genre phrases). The best-scoring type wins; ties go to
the earlier type in SCORING_ORDER.
"""

from collections.abc import Sequence
from typing import ClassVar

from screensort.classification.base import BaseClassifier
from screensort.classification.models import ClassificationResult
from screensort.domain.models import ContentType, TextFragment


class KeywordClassifier(BaseClassifier):
    """Classifies screenshots by counting known keywords per content type."""

    MINIMUM_MATCHES: ClassVar[int] = 1
    HIGH_CONFIDENCE_FRAGMENT: ClassVar[float] = 0.8
    MINIMUM_HIGH_CONFIDENCE_FRAGMENTS: ClassVar[int] = 2

    SCORING_ORDER: ClassVar[tuple[ContentType, ...]] = (
        ContentType.MUSIC,
        ContentType.MOVIE,
        ContentType.BOOK,
        ContentType.MEME,
    )

    KEYWORDS: ClassVar[dict[ContentType, frozenset[str]]] = {
        ContentType.MUSIC: frozenset({
            "now playing", "apple music", "spotify", "shazam", "soundcloud",
            "youtube music", "amazon music", "tidal", "deezer", "pandora",
            "playing from", "pause", "play", "shuffle", "repeat",
            "add to library", "share song", "lyrics", "up next", "queue",
        }),
        ContentType.MOVIE: frozenset({
            "netflix", "prime video", "disney+", "hbo max", "hulu", "peacock",
            "paramount+", "apple tv+", "imdb", "rotten tomatoes", "metacritic",
            "watch now", "play movie", "episodes", "season", "trailer",
            "cast & crew",
        }),
        ContentType.BOOK: frozenset({
            "goodreads", "kindle", "apple books", "audible", "libby", "kobo",
            "scribd", "reading", "want to read", "currently reading", "pages",
            "chapter", "author", "publisher", "isbn",
        }),
        ContentType.MEME: frozenset({
            "imgflip", "mematic", "made with mematic", "9gag", "reddit",
            "ifunny", "memedroid", "kapwing", "nobody:", "me:", "when you",
            "pov:", "be like", "change my mind",
        }),
    }

    def classify(self, fragments: Sequence[TextFragment]) -> ContentType:
        return self.classify_with_details(fragments).content_type

    def classify_with_details(self, fragments: Sequence[TextFragment]) -> ClassificationResult:
        """Classify and keep the per-type keyword counts."""
        text = " ".join(fragment.text.lower() for fragment in fragments)
        scores = {
            content_type: self._count_matches(text, self.KEYWORDS[content_type])
            for content_type in self.SCORING_ORDER
        }

        best_type = ContentType.UNKNOWN
        best_score = 0
        for content_type in self.SCORING_ORDER:
            if scores[content_type] > best_score:
                best_type, best_score = content_type, scores[content_type]

        if best_score < self.MINIMUM_MATCHES:
            best_type = ContentType.UNKNOWN
        return ClassificationResult(content_type=best_type, scores=scores)

    def has_music_ui_pattern(self, fragments: Sequence[TextFragment]) -> bool:
        """Lock-screen players show title and artist prominently in the top half."""
        prominent = [
            fragment
            for fragment in fragments
            if fragment.box.y > 0.5 and fragment.confidence > self.HIGH_CONFIDENCE_FRAGMENT
        ]
        return len(prominent) >= self.MINIMUM_HIGH_CONFIDENCE_FRAGMENTS

    @staticmethod
    def _count_matches(text: str, keywords: frozenset[str]) -> int:
        return sum(1 for keyword in keywords if keyword in text)
