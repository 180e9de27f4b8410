from abc import ABC, abstractmethod
from collections.abc import Sequence

from screensort.domain.models import ContentType, TextFragment


class BaseClassifier(ABC):
    """Contract for screenshot classifiers."""

    @abstractmethod
    def classify(self, fragments: Sequence[TextFragment]) -> ContentType:
        """Label a screenshot from its transcribed text.

        Must be total: implementations never raise and return
        ContentType.UNKNOWN when nothing matches.
        """
