class LibraryError(Exception):
    """Base exception for all library (source and organization) errors."""


class LibraryAccessError(LibraryError):
    """Raised when the library cannot be read or written at all."""


class ItemNotFoundError(LibraryError):
    """Raised when an item is no longer present in the library."""


class DestinationError(LibraryError):
    """Raised when a destination cannot be created."""


class MoveError(LibraryError):
    """Raised when an item cannot be moved to a destination."""


class AnnotationError(LibraryError):
    """Raised when an item's annotation cannot be read or written."""
