"""Offline model client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelClient and register the provider in ModelClientFactory.
"""

import json
from typing import ClassVar

from screensort.llm.client_base import BaseModelClient


class ExampleClientAdapter(BaseModelClient):
    """Adapter that answers every schema with a fixed empty response.

    No network calls. Classification comes back as unknown with zero
    confidence and extraction payloads fail validation, so local runs exercise
    the keyword classifier and the deterministic fallback extractors.
    """

    RESPONSES: ClassVar[dict[str, dict[str, object]]] = {
        "classification_result": {
            "contentType": "unknown",
            "confidence": 0.0,
            "reasoning": "example adapter",
        },
        "music_extraction": {"songTitle": "", "artist": "", "confidence": 0.0},
        "movie_extraction": {"title": "", "year": 0, "director": "", "confidence": 0.0},
        "book_extraction": {"title": "", "author": "", "isbn": "", "confidence": 0.0},
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        schema_name: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.RESPONSES.get(schema_name, {}))
