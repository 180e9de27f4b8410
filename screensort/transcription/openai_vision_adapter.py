import base64
from typing import Any

import httpx
import openai

from screensort.domain.models import BoundingBox, Item, TextFragment, order_fragments
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import LibraryError
from screensort.llm.exceptions import ModelError
from screensort.llm.json_response import parse_json_object
from screensort.llm.openai_client_adapter import translate_openai_error
from screensort.llm.prompt_loader import load_json_schema, load_prompt_template
from screensort.logging.logger import Log
from screensort.transcription.base import BaseTranscriber
from screensort.transcription.exceptions import NoTextFoundError, TranscriptionError


class OpenAIVisionTranscriber(BaseTranscriber):
    """Transcribes screenshots with a vision-capable OpenAI-compatible chat model."""

    PROMPT_NAME = "transcription"

    def __init__(
        self,
        *,
        library: BaseLibrary,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        minimum_confidence: float = 0.0,
    ) -> None:
        self._library = library
        self._model = model
        self._minimum_confidence = minimum_confidence
        self._client = openai.OpenAI(api_key=api_key, timeout=timeout_seconds, base_url=base_url)
        self._prompt = load_prompt_template(self.PROMPT_NAME)
        self._json_schema = load_json_schema(self.PROMPT_NAME)

    def transcribe(self, item: Item) -> list[TextFragment]:
        try:
            image = self._library.read_image(item)
        except LibraryError as exc:
            raise TranscriptionError(f"Cannot read image {item.id}: {exc}") from exc

        encoded = base64.b64encode(image.content).decode("ascii")
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "transcription_result",
                        "strict": True,
                        "schema": self._json_schema,
                    },
                },
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": self._prompt},
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{image.mime_type};base64,{encoded}"},
                            },
                        ],
                    }
                ],
            )
        except (openai.APIError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TranscriptionError(str(translate_openai_error(exc))) from exc

        if not response.choices or response.choices[0].message.content is None:
            raise TranscriptionError("Text recognition returned an empty response")
        try:
            data = parse_json_object(response.choices[0].message.content)
        except ModelError as exc:
            raise TranscriptionError(f"Text recognition failed: {exc}") from exc

        fragments = self._to_fragments(data.get("fragments"))
        if not fragments:
            raise NoTextFoundError(f"No text was found in {item.id}")
        Log.debug(f"Transcribed {len(fragments)} fragments", item_id=item.id)
        return order_fragments(fragments)

    def _to_fragments(self, raw: Any) -> list[TextFragment]:
        if not isinstance(raw, list):
            raise TranscriptionError("'fragments' must be a list")
        fragments: list[TextFragment] = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            text = str(entry.get("text", "")).strip()
            confidence = _clamp(entry.get("confidence"))
            if not text or confidence < self._minimum_confidence:
                continue
            top = _clamp(entry.get("top"))
            fragments.append(
                TextFragment(text=text, confidence=confidence, box=BoundingBox(y=1.0 - top))
            )
        return fragments


def _clamp(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return min(max(float(value), 0.0), 1.0)
