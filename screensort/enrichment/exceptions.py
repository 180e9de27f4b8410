class EnrichmentError(Exception):
    """Base exception for external lookup and playlist failures."""


class NoMatchError(EnrichmentError):
    """Raised when a search returns no results."""

    def __init__(self, query: str) -> None:
        super().__init__(f"No results found for '{query}'")
        self.query = query


class EnrichmentNotConfiguredError(EnrichmentError):
    """Raised when a service is called without its API key or token."""


class QuotaExceededError(EnrichmentError):
    """Raised when the provider reports the daily quota is used up."""
