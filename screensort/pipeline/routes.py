"""Per-type handling of a classified item.

Each route returns exactly one ResultRecord. An item is only moved to its
destination when every required step succeeded.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import ClassVar

from screensort.content_log.base import BaseContentLog
from screensort.content_log.exceptions import ContentLogError
from screensort.content_log.models import ContentLogEntry
from screensort.domain.models import ContentType
from screensort.enrichment.base import BaseBookLookup, BaseMovieLookup, BaseVideoService
from screensort.enrichment.exceptions import EnrichmentError
from screensort.extraction.base import BaseExtractor
from screensort.extraction.exceptions import ExtractionError
from screensort.extraction.models import BookMetadata, ExtractedMetadata, MovieMetadata
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import LibraryError
from screensort.logging.logger import Log
from screensort.pipeline.captions import annotate_best_effort, build_caption
from screensort.pipeline.models import ItemContext, ResultRecord, ResultStatus


class BaseRoute(ABC):
    def __init__(
        self,
        *,
        library: BaseLibrary,
        destinations: dict[ContentType, str],
        caption_prefix: str,
        content_log: BaseContentLog | None = None,
    ) -> None:
        self._library = library
        self._destinations = destinations
        self._caption_prefix = caption_prefix
        self._content_log = content_log

    @abstractmethod
    def handle(self, context: ItemContext) -> ResultRecord:
        raise NotImplementedError

    def _finish(
        self,
        context: ItemContext,
        status: ResultStatus,
        content_type: ContentType,
        *,
        caption_status: str,
        message: str | None = None,
        title: str | None = None,
        creator: str | None = None,
        service_link: str | None = None,
    ) -> ResultRecord:
        annotate_best_effort(
            self._library,
            context.item,
            build_caption(self._caption_prefix, content_type, caption_status, title, creator),
        )
        return ResultRecord(
            item_id=context.item.id,
            status=status,
            content_type=content_type,
            title=title,
            creator=creator,
            message=message,
            service_link=service_link,
        )

    def _move(self, context: ItemContext, content_type: ContentType) -> None:
        self._library.move_to_destination(context.item, self._destinations[content_type])

    def _log_content(self, entry: ContentLogEntry, item_id: str) -> None:
        if self._content_log is None:
            return
        try:
            if not self._content_log.append(entry):
                Log.debug("Content already logged", item_id=item_id)
        except ContentLogError as exc:
            Log.warning(f"Content log append failed: {exc}", item_id=item_id)


class MusicRoute(BaseRoute):
    """Extract, find the song, add it to the playlist, log, then move."""

    def __init__(
        self,
        *,
        extractor: BaseExtractor,
        video_service: BaseVideoService,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)
        self._extractor = extractor
        self._video_service = video_service

    def handle(self, context: ItemContext) -> ResultRecord:
        music = ContentType.MUSIC
        try:
            metadata = self._extractor.extract(context.fragments)
        except ExtractionError as exc:
            return self._finish(
                context, ResultStatus.FLAGGED, music,
                caption_status=f"Flagged: {exc}", message=str(exc),
            )

        try:
            if context.playlist_id is None:
                raise EnrichmentError("No playlist available for this batch")
            video_id = self._video_service.search_song(metadata.title, metadata.artist)
            self._video_service.add_to_playlist(video_id, context.playlist_id)
        except EnrichmentError as exc:
            return self._finish(
                context, ResultStatus.FLAGGED, music,
                caption_status=f"Flagged: {exc}", message=str(exc),
                title=metadata.title, creator=metadata.artist,
            )

        link = self._video_service.watch_url(video_id)
        self._log_content(
            ContentLogEntry(
                type=music,
                title=metadata.title,
                creator=metadata.artist,
                service_link=link,
                captured_at=_captured_at(context),
            ),
            context.item.id,
        )

        try:
            self._move(context, music)
        except LibraryError as exc:
            return self._finish(
                context, ResultStatus.FLAGGED, music,
                caption_status=f"Flagged: {exc}", message=str(exc),
                title=metadata.title, creator=metadata.artist, service_link=link,
            )
        return self._finish(
            context, ResultStatus.SUCCESS, music,
            caption_status="Added to playlist", message="Added to playlist",
            title=metadata.title, creator=metadata.artist, service_link=link,
        )


class CatalogRoute(BaseRoute):
    """Extract, look up a reference link (best-effort), log, then move."""

    CONTENT_TYPE: ClassVar[ContentType]

    def __init__(self, *, extractor: BaseExtractor, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._extractor = extractor

    def handle(self, context: ItemContext) -> ResultRecord:
        content_type = self.CONTENT_TYPE
        try:
            metadata = self._extractor.extract(context.fragments)
        except ExtractionError as exc:
            return self._finish(
                context, ResultStatus.FLAGGED, content_type,
                caption_status=f"Flagged: {exc}", message=str(exc),
            )

        link: str | None = None
        try:
            link = self._lookup_link(metadata)
        except EnrichmentError as exc:
            Log.warning(f"{content_type.display_name} lookup failed: {exc}", item_id=context.item.id)

        creator = metadata.creator
        self._log_content(
            ContentLogEntry(
                type=content_type,
                title=metadata.title,
                creator=creator or "",
                service_link=link,
                captured_at=_captured_at(context),
            ),
            context.item.id,
        )

        try:
            self._move(context, content_type)
        except LibraryError as exc:
            return self._finish(
                context, ResultStatus.FLAGGED, content_type,
                caption_status=f"Flagged: {exc}", message=str(exc),
                title=metadata.title, creator=creator, service_link=link,
            )
        return self._finish(
            context, ResultStatus.SUCCESS, content_type,
            caption_status="Sorted", message=f"Sorted into {self._destinations[content_type]}",
            title=metadata.title, creator=creator, service_link=link,
        )

    @abstractmethod
    def _lookup_link(self, metadata: ExtractedMetadata) -> str:
        """Return the reference link for the metadata.

        Raises:
            EnrichmentError: if the lookup fails.
        """


class MovieRoute(CatalogRoute):
    CONTENT_TYPE = ContentType.MOVIE

    def __init__(self, *, movie_lookup: BaseMovieLookup, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._movie_lookup = movie_lookup

    def _lookup_link(self, metadata: MovieMetadata) -> str:
        return self._movie_lookup.search_movie(metadata.title, metadata.year).link


class BookRoute(CatalogRoute):
    CONTENT_TYPE = ContentType.BOOK

    def __init__(self, *, book_lookup: BaseBookLookup, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._book_lookup = book_lookup

    def _lookup_link(self, metadata: BookMetadata) -> str:
        return self._book_lookup.search_book(metadata.title, metadata.author).link


class MemeRoute(BaseRoute):
    def handle(self, context: ItemContext) -> ResultRecord:
        meme = ContentType.MEME
        try:
            self._move(context, meme)
        except LibraryError as exc:
            return self._finish(
                context, ResultStatus.FAILED, meme,
                caption_status=f"Failed: {exc}", message=str(exc),
            )
        return self._finish(
            context, ResultStatus.SUCCESS, meme,
            caption_status="Sorted", message=f"Sorted into {self._destinations[meme]}",
        )


class UnknownRoute(BaseRoute):
    def handle(self, context: ItemContext) -> ResultRecord:
        message = "Could not determine content type"
        return self._finish(
            context, ResultStatus.FLAGGED, ContentType.UNKNOWN,
            caption_status=f"Flagged: {message}", message=message,
        )


def _captured_at(context: ItemContext) -> datetime:
    return context.item.created_at or datetime.now(timezone.utc)
