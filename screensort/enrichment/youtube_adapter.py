"""YouTube Data API v3 adapter for song search and playlist management."""

import re
from typing import ClassVar

import httpx

from screensort.auth.base import BaseAuthService
from screensort.auth.exceptions import NotAuthenticatedError
from screensort.enrichment.base import BaseVideoService
from screensort.enrichment.exceptions import (
    EnrichmentError,
    EnrichmentNotConfiguredError,
    NoMatchError,
    QuotaExceededError,
)
from screensort.enrichment.http_client import (
    nested_object,
    object_list,
    raise_for_status,
    request_json,
)

_NON_SEARCH_CHARACTERS = re.compile(r"[^\w\s]|_")


class YouTubeVideoService(BaseVideoService):
    """Searches with the API key and edits playlists with the account token."""

    BASE_URL: ClassVar[str] = "https://www.googleapis.com/youtube/v3"
    MUSIC_CATEGORY_ID: ClassVar[str] = "10"
    PLAYLIST_FETCH_LIMIT: ClassVar[int] = 50
    PLAYLIST_DESCRIPTION: ClassVar[str] = "Songs added by ScreenSort"
    PLAYLIST_PRIVACY: ClassVar[str] = "private"

    def __init__(
        self,
        *,
        api_key: str,
        auth: BaseAuthService,
        timeout_seconds: float = 15,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._auth = auth
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def search_song(self, title: str, artist: str) -> str:
        if not self._api_key:
            raise EnrichmentNotConfiguredError("YOUTUBE_API_KEY is not set")
        query = self.build_search_query(title, artist)
        data = request_json(
            self._client,
            "GET",
            f"{self.BASE_URL}/search",
            context="YouTube search",
            params={
                "part": "snippet",
                "q": query,
                "type": "video",
                "videoCategoryId": self.MUSIC_CATEGORY_ID,
                "maxResults": 1,
                "key": self._api_key,
            },
        )
        for item in object_list(data, "items"):
            video_id = nested_object(item, "id").get("videoId")
            if video_id:
                return str(video_id)
        raise NoMatchError(query)

    def get_or_create_playlist(self, name: str) -> str:
        headers = self._auth_headers()
        data = request_json(
            self._client,
            "GET",
            f"{self.BASE_URL}/playlists",
            context="YouTube playlist list",
            params={"part": "snippet", "mine": "true", "maxResults": self.PLAYLIST_FETCH_LIMIT},
            headers=headers,
        )
        for item in object_list(data, "items"):
            if nested_object(item, "snippet").get("title") == name and item.get("id"):
                return str(item["id"])

        created = request_json(
            self._client,
            "POST",
            f"{self.BASE_URL}/playlists",
            context="YouTube playlist create",
            params={"part": "snippet,status"},
            headers=headers,
            json={
                "snippet": {"title": name, "description": self.PLAYLIST_DESCRIPTION},
                "status": {"privacyStatus": self.PLAYLIST_PRIVACY},
            },
        )
        playlist_id = created.get("id")
        if not playlist_id:
            raise EnrichmentError("YouTube playlist create returned no id")
        return str(playlist_id)

    def add_to_playlist(self, video_id: str, playlist_id: str) -> None:
        try:
            response = self._client.post(
                f"{self.BASE_URL}/playlistItems",
                params={"part": "snippet"},
                headers=self._auth_headers(),
                json={
                    "snippet": {
                        "playlistId": playlist_id,
                        "resourceId": {"kind": "youtube#video", "videoId": video_id},
                    }
                },
            )
        except httpx.HTTPError as exc:
            raise EnrichmentError(f"YouTube playlist insert request failed: {exc}") from exc

        # already in the playlist
        if response.status_code == 409:
            return
        if response.status_code == 403 and "quotaExceeded" in response.text:
            raise QuotaExceededError("YouTube API quota exceeded")
        raise_for_status(response, "YouTube playlist insert")

    @staticmethod
    def build_search_query(title: str, artist: str) -> str:
        return f"{_sanitize(title)} {_sanitize(artist)} official audio"

    def _auth_headers(self) -> dict[str, str]:
        try:
            token = self._auth.get_valid_access_token()
        except NotAuthenticatedError as exc:
            raise EnrichmentNotConfiguredError(str(exc)) from exc
        return {"Authorization": f"Bearer {token}"}


def _sanitize(text: str) -> str:
    return " ".join(_NON_SEARCH_CHARACTERS.sub("", text).split())
