from screensort.classification.ai_classifier import AIClassifier
from screensort.classification.base import BaseClassifier
from screensort.classification.keyword_classifier import KeywordClassifier
from screensort.config.settings import Settings
from screensort.llm.client_base import BaseModelClient


class ClassifierFactory:
    """Selects the classifier once, at construction time."""

    @classmethod
    def create(cls, settings: Settings, client: BaseModelClient | None) -> BaseClassifier:
        """AI classifier with keyword fallback when a model client exists, keywords otherwise."""
        keyword_classifier = KeywordClassifier()
        if client is None:
            return keyword_classifier
        return AIClassifier(
            client=client,
            fallback=keyword_classifier,
            model=settings.llm_model_name,
            temperature=settings.llm_temperature,
            min_confidence=settings.classifier_min_confidence,
        )
