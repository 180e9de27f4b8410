from abc import ABC, abstractmethod


class BaseModelClient(ABC):
    """Contract for provider-specific generative model clients."""

    @abstractmethod
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
        """Return the provider's structured response as plain JSON text.

        Raises:
            ModelUnavailableError: provider unreachable or not configured.
            ModelRateLimitedError: provider throttled the request.
            ModelSafetyRejectedError: provider refused on safety grounds.
            ModelError: any other provider failure.
        """
