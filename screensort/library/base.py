from abc import ABC, abstractmethod
from collections.abc import Iterable

from screensort.domain.models import Item
from screensort.library.models import ImageData


class BaseLibrary(ABC):
    """Contract for the store that owns items and their organization.

    The worker never copies or deletes items; it only reads them, files them
    into named destinations and annotates them.
    """

    @abstractmethod
    def has_access(self) -> bool:
        """Whether the library can be read and organized by this process."""

    @abstractmethod
    def fetch_items(self) -> list[Item]:
        """Return every candidate item, oldest first.

        Raises:
            LibraryError: if the library cannot be listed.
        """

    @abstractmethod
    def read_image(self, item: Item) -> ImageData:
        """Return the encoded image of an item.

        Raises:
            ItemNotFoundError: if the item no longer exists.
        """

    @abstractmethod
    def create_destination_if_needed(self, name: str) -> str:
        """Create the named destination unless it exists; return its identifier.

        Idempotent. Raises DestinationError on failure.
        """

    @abstractmethod
    def move_to_destination(self, item: Item, name: str) -> None:
        """File an item under the named destination, leaving any previous one.

        A no-op when the item is already there. Raises MoveError on failure.
        """

    @abstractmethod
    def annotate(self, item: Item, text: str) -> None:
        """Attach a caption to an item. Raises AnnotationError on failure."""

    @abstractmethod
    def get_annotation(self, item: Item) -> str | None:
        """Return the caption previously attached to an item, if any."""

    @abstractmethod
    def existing_ids(self, ids: Iterable[str]) -> set[str]:
        """Return the subset of ``ids`` that still exist in the library.

        Raises:
            LibraryError: if existence cannot be determined.
        """
