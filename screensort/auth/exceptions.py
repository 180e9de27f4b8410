class NotAuthenticatedError(Exception):
    """Raised when no valid access token is available."""
