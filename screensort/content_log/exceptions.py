class ContentLogError(Exception):
    """Raised when the content log cannot be read or written."""
