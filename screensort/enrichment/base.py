from abc import ABC, abstractmethod

from screensort.enrichment.models import BookMatch, MovieMatch


class BaseVideoService(ABC):
    """Song search and playlist management on a video platform."""

    @abstractmethod
    def search_song(self, title: str, artist: str) -> str:
        """Return the video id of the best match.

        Raises:
            NoMatchError: if nothing matches.
            EnrichmentError: on any other failure.
        """
        raise NotImplementedError

    @abstractmethod
    def get_or_create_playlist(self, name: str) -> str:
        """Return the id of the playlist called ``name``, creating it if needed."""
        raise NotImplementedError

    @abstractmethod
    def add_to_playlist(self, video_id: str, playlist_id: str) -> None:
        raise NotImplementedError

    def watch_url(self, video_id: str) -> str:
        return f"https://youtube.com/watch?v={video_id}"


class BaseMovieLookup(ABC):
    @abstractmethod
    def search_movie(self, title: str, year: int | None = None) -> MovieMatch:
        raise NotImplementedError


class BaseBookLookup(ABC):
    @abstractmethod
    def search_book(self, title: str, author: str | None = None) -> BookMatch:
        raise NotImplementedError
