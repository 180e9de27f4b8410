class CorrectionError(Exception):
    """Raised when a correction cannot be applied to or reverted in the library."""
