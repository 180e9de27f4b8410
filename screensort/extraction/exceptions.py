class ExtractionError(Exception):
    """Base exception for all extraction failures; the item is flagged, not moved."""


class NotThisTypeError(ExtractionError):
    """Raised when the fragments do not belong to the extractor's content type."""


class TitleNotFoundError(ExtractionError):
    """Raised when no usable title can be produced."""


class LowConfidenceError(ExtractionError):
    """Raised when the extraction confidence is below the type's threshold."""

    def __init__(self, confidence: float, threshold: float) -> None:
        super().__init__(
            f"Extraction confidence ({confidence:.0%}) is below the {threshold:.0%} threshold"
        )
        self.confidence = confidence
        self.threshold = threshold


class InvalidExtractionError(ExtractionError):
    """Raised when a model response fails validation (placeholders, garbage, bad ranges)."""
