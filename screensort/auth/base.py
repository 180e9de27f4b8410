from abc import ABC, abstractmethod


class BaseAuthService(ABC):
    """Provides the bearer token for account-scoped enrichment calls."""

    @abstractmethod
    def is_authenticated(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_valid_access_token(self) -> str:
        """Return a usable access token.

        Raises:
            NotAuthenticatedError: if no token is available.
        """
        raise NotImplementedError
