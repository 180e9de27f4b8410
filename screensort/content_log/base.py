from abc import ABC, abstractmethod

from screensort.content_log.models import ContentLogEntry


class BaseContentLog(ABC):
    """Append-only log of recognized content, grouped by type."""

    @abstractmethod
    def append(self, entry: ContentLogEntry) -> bool:
        """Append an entry; returns False when an equal entry is already logged.

        Raises:
            ContentLogError: if the log cannot be updated.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def document_url(self) -> str | None:
        raise NotImplementedError
