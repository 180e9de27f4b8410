from collections.abc import Sequence
from typing import ClassVar

from screensort.classification.base import BaseClassifier
from screensort.classification.models import AIClassificationResult
from screensort.domain.models import ContentType, TextFragment, joined_text
from screensort.llm.client_base import BaseModelClient
from screensort.llm.json_response import parse_json_object
from screensort.llm.prompt_loader import load_json_schema, load_prompt_template
from screensort.logging.logger import Log


class AIClassifier(BaseClassifier):
    """Classifies with a generative model and defers to a fallback classifier.

    The model answer is used only when its confidence reaches
    ``min_confidence``; model errors, unparseable answers and low confidence
    all fall through to ``fallback``.
    """

    PROMPT_NAME: ClassVar[str] = "classification"
    SCHEMA_NAME: ClassVar[str] = "classification_result"

    LABEL_SYNONYMS: ClassVar[dict[str, ContentType]] = {
        "music": ContentType.MUSIC,
        "movie": ContentType.MOVIE,
        "movies": ContentType.MOVIE,
        "tv": ContentType.MOVIE,
        "show": ContentType.MOVIE,
        "tv show": ContentType.MOVIE,
        "book": ContentType.BOOK,
        "books": ContentType.BOOK,
        "reading": ContentType.BOOK,
        "meme": ContentType.MEME,
        "memes": ContentType.MEME,
    }

    def __init__(
        self,
        *,
        client: BaseModelClient,
        fallback: BaseClassifier,
        model: str,
        temperature: float = 0.0,
        min_confidence: float = 0.6,
    ) -> None:
        self._client = client
        self._fallback = fallback
        self._model = model
        self._temperature = temperature
        self._min_confidence = min_confidence
        self._prompt_template = load_prompt_template(self.PROMPT_NAME)
        self._json_schema = load_json_schema(self.PROMPT_NAME)

    def classify(self, fragments: Sequence[TextFragment]) -> ContentType:
        try:
            result = self.classify_with_ai(fragments)
        except Exception as exc:  # classification is total
            Log.warning(f"AI classification failed, using fallback: {exc}")
        else:
            Log.debug(
                f"AI classification: {result.content_type.value} "
                f"(confidence {result.confidence:.2f}): {result.reasoning}"
            )
            if result.is_confident(self._min_confidence):
                return result.content_type

        content_type = self._fallback.classify(fragments)
        Log.debug(f"Fallback classification: {content_type.value}")
        return content_type

    def classify_with_ai(self, fragments: Sequence[TextFragment]) -> AIClassificationResult:
        """Run the model stage only.

        Raises:
            ModelError: on any model failure or unparseable response.
        """
        text = joined_text(fragments).strip()
        if not text:
            return AIClassificationResult(
                content_type=ContentType.UNKNOWN,
                confidence=0.0,
                reasoning="No text detected in screenshot",
            )

        raw = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt="",
            user_prompt=self._prompt_template.format(screenshot_text=text),
            json_schema=self._json_schema,
            schema_name=self.SCHEMA_NAME,
        )
        return self._to_result(parse_json_object(raw))

    def _to_result(self, data: dict[str, object]) -> AIClassificationResult:
        label = str(data.get("contentType", "")).strip().lower()
        confidence = data.get("confidence", 0.0)
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            confidence = 0.0
        return AIClassificationResult(
            content_type=self.LABEL_SYNONYMS.get(label, ContentType.UNKNOWN),
            confidence=min(max(float(confidence), 0.0), 1.0),
            reasoning=str(data.get("reasoning", "")),
        )
