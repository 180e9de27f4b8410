from screensort.auth.base import BaseAuthService
from screensort.auth.exceptions import NotAuthenticatedError


class StaticTokenAuth(BaseAuthService):
    """Access token supplied through configuration; never refreshed."""

    def __init__(self, access_token: str) -> None:
        self._access_token = access_token.strip()

    def is_authenticated(self) -> bool:
        return bool(self._access_token)

    def get_valid_access_token(self) -> str:
        if not self._access_token:
            raise NotAuthenticatedError("GOOGLE_ACCESS_TOKEN is not set")
        return self._access_token
