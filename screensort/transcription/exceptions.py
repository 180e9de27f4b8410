class TranscriptionError(Exception):
    """Raised when text cannot be recognized in an item."""


class NoTextFoundError(TranscriptionError):
    """Raised when recognition succeeds but finds no text."""
