import httpx
import openai

from screensort.llm.client_base import BaseModelClient
from screensort.llm.exceptions import (
    ModelError,
    ModelRateLimitedError,
    ModelSafetyRejectedError,
    ModelUnavailableError,
)

_SAFETY_MARKERS = ("unsafe", "guardrail", "safety", "content_filter", "content policy")


def looks_like_safety_rejection(message: str) -> bool:
    """Detect safety refusals that providers only report through the error text."""
    lowered = message.lower()
    return any(marker in lowered for marker in _SAFETY_MARKERS)


def translate_openai_error(exc: Exception) -> ModelError:
    """Map an OpenAI SDK or transport exception onto the tagged model errors."""
    if isinstance(exc, openai.RateLimitError):
        return ModelRateLimitedError(f"AI provider rate limited the request: {exc}")
    if isinstance(exc, (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException)):
        return ModelUnavailableError(f"AI provider network error: {exc}")
    if looks_like_safety_rejection(str(exc)):
        return ModelSafetyRejectedError(f"AI provider refused the request: {exc}")
    return ModelError(f"AI provider API error: {exc}")


class OpenAIClientAdapter(BaseModelClient):
    """Generative model client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise translate_openai_error(exc) from exc

        if not response.choices:
            raise ModelError("AI returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise ModelSafetyRejectedError("AI response was blocked by the content filter")
        refusal = getattr(choice.message, "refusal", None)
        if refusal:
            raise ModelSafetyRejectedError(f"AI refused the request: {refusal}")
        content = choice.message.content
        if content is None:
            raise ModelError("AI returned empty response")
        return content
