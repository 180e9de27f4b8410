import httpx
import pytest

from screensort.enrichment.exceptions import EnrichmentNotConfiguredError, NoMatchError
from screensort.enrichment.tmdb_adapter import TmdbMovieLookup


def _lookup(handler, api_key: str = "key") -> TmdbMovieLookup:
    return TmdbMovieLookup(
        api_key=api_key,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestTmdbMovieLookup:
    def test_first_result(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"results": [{"id": 27205, "title": "Inception", "release_date": "2010-07-15"}]},
            )

        match = _lookup(handler).search_movie("Inception", 2010)
        assert match.id == 27205
        assert match.year == 2010
        assert match.link == "https://www.themoviedb.org/movie/27205"
        assert seen[0].url.path == "/3/search/movie"
        assert seen[0].url.params["year"] == "2010"
        assert seen[0].url.params["query"] == "Inception"

    def test_year_is_optional(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"results": [{"id": 1, "title": "Arrival"}]})

        match = _lookup(handler).search_movie("Arrival")
        assert "year" not in seen[0].url.params
        assert match.year is None

    def test_no_results(self) -> None:
        with pytest.raises(NoMatchError):
            _lookup(lambda request: httpx.Response(200, json={"results": []})).search_movie("x")

    def test_malformed_results_are_skipped(self) -> None:
        body = {"results": ["junk", {"title": "No id"}, {"id": 7, "title": "Heat"}]}
        match = _lookup(lambda request: httpx.Response(200, json=body)).search_movie("Heat")
        assert match.id == 7

    def test_only_malformed_results(self) -> None:
        body = {"results": ["junk", 3]}
        with pytest.raises(NoMatchError):
            _lookup(lambda request: httpx.Response(200, json=body)).search_movie("Heat")

    def test_not_configured(self) -> None:
        with pytest.raises(EnrichmentNotConfiguredError):
            _lookup(lambda request: httpx.Response(200), api_key="").search_movie("x")
