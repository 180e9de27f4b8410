from typing import ClassVar

from screensort.config.settings import Settings
from screensort.llm.client_base import BaseModelClient
from screensort.llm.example_client_adapter import ExampleClientAdapter
from screensort.llm.openai_client_adapter import OpenAIClientAdapter


class ModelClientFactory:
    """Creates the configured generative model client, or None when disabled."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseModelClient | None:
        """Create a model client from application settings.

        Returns None for provider ``none``: classification then runs on
        keywords only and extractors go straight to their fallback.
        """
        provider = settings.llm_provider.lower()
        if provider == "none":
            return None
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.llm_api_key,
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=cls.resolve_base_url(provider, settings),
        )

    @classmethod
    def resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.llm_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.llm_base_url.strip()
            if not url:
                raise ValueError(
                    "llm_base_url is required for llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.llm_base_url.strip() or default_base_url
        supported = [
            "none",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")
