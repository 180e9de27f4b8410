class CacheError(Exception):
    """Raised when the key-value backend cannot be read or written."""


class CacheDecodeError(CacheError):
    """Raised when a stored value is not valid JSON."""
