from dataclasses import dataclass, field

from screensort.domain.models import ContentType


@dataclass(frozen=True)
class ClassificationResult:
    """Keyword classification with per-type match counts, for debugging."""

    content_type: ContentType
    scores: dict[ContentType, int] = field(default_factory=dict)

    @property
    def is_confident(self) -> bool:
        """A unique top score of at least two keyword hits."""
        top = max(self.scores.values(), default=0)
        if top < 2:
            return False
        return sum(1 for score in self.scores.values() if score == top) == 1


@dataclass(frozen=True)
class AIClassificationResult:
    """Model classification with its self-reported confidence."""

    content_type: ContentType
    confidence: float
    reasoning: str = ""

    def is_confident(self, minimum_confidence: float) -> bool:
        return self.confidence >= minimum_confidence
