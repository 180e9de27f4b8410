from typing import ClassVar

import httpx

from screensort.enrichment.base import BaseMovieLookup
from screensort.enrichment.exceptions import EnrichmentNotConfiguredError, NoMatchError
from screensort.enrichment.http_client import object_list, request_json
from screensort.enrichment.models import MovieMatch


class TmdbMovieLookup(BaseMovieLookup):
    """Movie search against The Movie Database v3 API."""

    BASE_URL: ClassVar[str] = "https://api.themoviedb.org/3"
    WEB_BASE_URL: ClassVar[str] = "https://www.themoviedb.org/movie"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float = 15,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def search_movie(self, title: str, year: int | None = None) -> MovieMatch:
        if not self._api_key:
            raise EnrichmentNotConfiguredError("TMDB_API_KEY is not set")
        params: dict[str, object] = {
            "api_key": self._api_key,
            "query": title,
            "language": "en-US",
            "page": 1,
            "include_adult": "false",
        }
        if year:
            params["year"] = year

        data = request_json(
            self._client,
            "GET",
            f"{self.BASE_URL}/search/movie",
            context="TMDb search",
            params=params,
        )
        results = [result for result in object_list(data, "results") if "id" in result]
        if not results:
            raise NoMatchError(title)

        first = results[0]
        release_date = str(first.get("release_date") or "")
        return MovieMatch(
            id=int(first["id"]),
            title=str(first.get("title") or title),
            link=f"{self.WEB_BASE_URL}/{first['id']}",
            year=int(release_date[:4]) if release_date[:4].isdigit() else None,
        )
