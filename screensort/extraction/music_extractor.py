from collections.abc import Sequence

from screensort.domain.models import ContentType, TextFragment
from screensort.extraction.base import BaseExtractor
from screensort.extraction.exceptions import NotThisTypeError
from screensort.extraction.fallback import MUSIC_NOISE, extract_music
from screensort.extraction.models import MusicMetadata
from screensort.extraction.validator import MUSIC_VALIDATOR


class MusicExtractor(BaseExtractor[MusicMetadata]):
    """Extracts song title and artist from music player screenshots."""

    CONTENT_TYPE = ContentType.MUSIC
    PROMPT_NAME = "music"
    SCHEMA_NAME = "music_extraction"
    NOISE = MUSIC_NOISE
    VALIDATOR = MUSIC_VALIDATOR

    def _verify_content_type(self, fragments: Sequence[TextFragment]) -> None:
        # lock-screen players often carry no keywords at all
        if self._classifier.classify(fragments) == ContentType.MUSIC:
            return
        if self._classifier.has_music_ui_pattern(fragments):
            return
        raise NotThisTypeError("Screenshot is not a music screenshot")

    def _build(self, data: dict[str, object], lines: list[str]) -> MusicMetadata:
        return MusicMetadata(
            title=str(data["songTitle"]),
            artist=str(data["artist"]),
            confidence=float(data["confidence"]),
            raw_text=lines,
        )

    def _fallback(self, lines: list[str], confidence: float) -> MusicMetadata | None:
        return extract_music(lines, confidence)
