from screensort.config.settings import Settings
from screensort.library.base import BaseLibrary
from screensort.llm.factory import ModelClientFactory
from screensort.transcription.base import BaseTranscriber
from screensort.transcription.openai_vision_adapter import OpenAIVisionTranscriber


class TranscriberFactory:
    """Creates the configured transcription adapter."""

    PROVIDERS = ("openai_vision",)

    @classmethod
    def create(cls, settings: Settings, library: BaseLibrary) -> BaseTranscriber:
        provider = settings.transcription_provider.lower()
        if provider != "openai_vision":
            raise ValueError(
                f"Unknown transcription provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        llm_provider = settings.llm_provider.lower()
        base_url = (
            ModelClientFactory.resolve_base_url(llm_provider, settings)
            if llm_provider not in ("none", "example")
            else None
        )
        return OpenAIVisionTranscriber(
            library=library,
            api_key=settings.llm_api_key,
            model=settings.transcription_model_name,
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=base_url,
        )
