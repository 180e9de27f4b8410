from dataclasses import dataclass


@dataclass(frozen=True)
class ImageData:
    """Encoded image bytes handed to transcription adapters."""

    content: bytes
    mime_type: str = "image/png"
