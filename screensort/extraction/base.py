"""Shared extraction template for the music, movie and book extractors."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar, Generic, TypeVar

from screensort.classification.keyword_classifier import KeywordClassifier
from screensort.domain.models import ContentType, TextFragment, order_fragments
from screensort.extraction.exceptions import (
    ExtractionError,
    InvalidExtractionError,
    LowConfidenceError,
    NotThisTypeError,
    TitleNotFoundError,
)
from screensort.extraction.fallback import clean_lines
from screensort.extraction.models import ExtractedMetadata
from screensort.extraction.validator import ExtractionValidator
from screensort.llm.client_base import BaseModelClient
from screensort.llm.exceptions import (
    ModelError,
    ModelRateLimitedError,
    ModelResponseError,
    ModelSafetyRejectedError,
    ModelUnavailableError,
)
from screensort.llm.json_response import parse_json_object
from screensort.llm.prompt_loader import load_json_schema, load_prompt_template
from screensort.logging.logger import Log

M = TypeVar("M", bound=ExtractedMetadata)

_FALLBACK_TRIGGERS = (
    ModelUnavailableError,
    ModelSafetyRejectedError,
    ModelRateLimitedError,
    InvalidExtractionError,
)


class BaseExtractor(ABC, Generic[M]):
    """Turns text fragments into validated metadata for one content type.

    The model answer is validated and gated on ``threshold``. When the model
    is missing, rate limited, refuses on safety grounds or returns garbage,
    the deterministic fallback is used instead. A valid model answer with low
    confidence is not retried through the fallback.
    """

    CONTENT_TYPE: ClassVar[ContentType]
    PROMPT_NAME: ClassVar[str]
    SCHEMA_NAME: ClassVar[str]
    NOISE: ClassVar[frozenset[str]]
    VALIDATOR: ClassVar[ExtractionValidator]

    def __init__(
        self,
        *,
        client: BaseModelClient | None,
        classifier: KeywordClassifier,
        model: str,
        temperature: float = 0.0,
        threshold: float = 0.6,
        fallback_confidence: float = 0.6,
    ) -> None:
        self._client = client
        self._classifier = classifier
        self._model = model
        self._temperature = temperature
        self._threshold = threshold
        self._fallback_confidence = fallback_confidence
        self._prompt_template = load_prompt_template(self.PROMPT_NAME)
        self._json_schema = load_json_schema(self.PROMPT_NAME)

    @property
    def content_type(self) -> ContentType:
        return self.CONTENT_TYPE

    def extract(self, fragments: Sequence[TextFragment]) -> M:
        """Extract metadata from the fragments of one screenshot.

        Raises:
            NotThisTypeError: if the fragments are not of this content type.
            TitleNotFoundError: if no usable title can be produced.
            LowConfidenceError: if the confidence is below the threshold.
            ExtractionError: on any other model failure.
        """
        self._verify_content_type(fragments)

        lines = [
            fragment.text.strip()
            for fragment in order_fragments(fragments)
            if fragment.text.strip()
        ]
        if not clean_lines(lines, self.NOISE):
            raise TitleNotFoundError(f"No {self.CONTENT_TYPE.value} text left after removing UI noise")

        try:
            metadata = self._extract_with_model(lines)
        except _FALLBACK_TRIGGERS as exc:
            Log.warning(
                f"{self.CONTENT_TYPE.display_name} model extraction unusable, using pattern fallback: {exc}"
            )
            metadata = self._fallback(lines, self._fallback_confidence)
            if metadata is None:
                raise TitleNotFoundError(
                    f"Pattern fallback found no {self.CONTENT_TYPE.value} title"
                ) from exc
        except ModelError as exc:
            raise ExtractionError(f"{self.CONTENT_TYPE.display_name} extraction failed: {exc}") from exc

        if metadata.confidence < self._threshold:
            raise LowConfidenceError(metadata.confidence, self._threshold)
        return metadata

    def _verify_content_type(self, fragments: Sequence[TextFragment]) -> None:
        if self._classifier.classify(fragments) != self.CONTENT_TYPE:
            raise NotThisTypeError(f"Screenshot is not a {self.CONTENT_TYPE.value} screenshot")

    def _extract_with_model(self, lines: list[str]) -> M:
        if self._client is None:
            raise ModelUnavailableError("No generative model configured")

        prompt = self._prompt_template.format(screenshot_text="\n".join(lines))
        Log.debug(f"{self.CONTENT_TYPE.display_name} extraction prompt:\n{prompt}")
        raw = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt="",
            user_prompt=prompt,
            json_schema=self._json_schema,
            schema_name=self.SCHEMA_NAME,
        )
        Log.debug(f"{self.CONTENT_TYPE.display_name} extraction raw response:\n{raw}")

        try:
            data = parse_json_object(raw)
        except ModelResponseError as exc:
            raise InvalidExtractionError(str(exc)) from exc
        return self._build(self.VALIDATOR.validate(data), lines)

    @abstractmethod
    def _build(self, data: dict[str, object], lines: list[str]) -> M:
        """Build metadata from a validated model payload."""

    @abstractmethod
    def _fallback(self, lines: list[str], confidence: float) -> M | None:
        """Deterministic extraction; None when nothing usable is found."""
