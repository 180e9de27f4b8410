from typing import ClassVar

import httpx

from screensort.auth.base import BaseAuthService
from screensort.auth.exceptions import NotAuthenticatedError
from screensort.enrichment.base import BaseBookLookup
from screensort.enrichment.exceptions import EnrichmentNotConfiguredError, NoMatchError
from screensort.enrichment.http_client import nested_object, object_list, request_json
from screensort.enrichment.models import BookMatch


class GoogleBooksLookup(BaseBookLookup):
    """Volume search against the Google Books API using the account token."""

    BASE_URL: ClassVar[str] = "https://www.googleapis.com/books/v1/volumes"

    def __init__(
        self,
        *,
        auth: BaseAuthService,
        timeout_seconds: float = 15,
        client: httpx.Client | None = None,
    ) -> None:
        self._auth = auth
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def search_book(self, title: str, author: str | None = None) -> BookMatch:
        try:
            token = self._auth.get_valid_access_token()
        except NotAuthenticatedError as exc:
            raise EnrichmentNotConfiguredError(str(exc)) from exc

        query = f"intitle:{title}"
        if author:
            query += f"+inauthor:{author}"
        data = request_json(
            self._client,
            "GET",
            self.BASE_URL,
            context="Google Books search",
            params={"q": query, "maxResults": 1, "printType": "books"},
            headers={"Authorization": f"Bearer {token}"},
        )
        items = [item for item in object_list(data, "items") if "id" in item]
        if not items:
            raise NoMatchError(title)

        first = items[0]
        volume_id = str(first["id"])
        info = nested_object(first, "volumeInfo")
        return BookMatch(
            id=volume_id,
            title=str(info.get("title") or title),
            link=str(info.get("infoLink") or f"https://books.google.com/books?id={volume_id}"),
            authors=[str(name) for name in info.get("authors") or []],
        )
