from abc import ABC, abstractmethod

from screensort.domain.models import Item, TextFragment


class BaseTranscriber(ABC):
    """Contract for pixel-to-text transcription adapters."""

    @abstractmethod
    def transcribe(self, item: Item) -> list[TextFragment]:
        """Recognize the text lines of one item.

        Returns:
            Fragments ordered top-to-bottom.

        Raises:
            TranscriptionError: on any failure, including no text found.
        """
