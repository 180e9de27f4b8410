from collections.abc import Sequence

from screensort.classification.base import BaseClassifier
from screensort.domain.models import ContentType, Item, TextFragment
from screensort.logging.logger import Log
from screensort.transcription.base import BaseTranscriber
from screensort.transcription.exceptions import TranscriptionError


class MemeDetector:
    """Thin predicate over a classifier: memes are filed without extraction."""

    def __init__(self, classifier: BaseClassifier) -> None:
        self._classifier = classifier

    def is_meme(self, fragments: Sequence[TextFragment]) -> bool:
        return self._classifier.classify(fragments) == ContentType.MEME

    def is_meme_item(self, item: Item, transcriber: BaseTranscriber) -> bool:
        """Transcribe the item first; an item that cannot be transcribed is not a meme."""
        try:
            fragments = transcriber.transcribe(item)
        except TranscriptionError as exc:
            Log.warning(f"Meme check skipped, transcription failed: {exc}", item_id=item.id)
            return False
        return self.is_meme(fragments)
