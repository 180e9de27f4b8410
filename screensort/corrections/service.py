from screensort.corrections.correction_store import CorrectionStore
from screensort.corrections.exceptions import CorrectionError
from screensort.corrections.models import Correction
from screensort.domain.models import ContentType, Item
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import LibraryError
from screensort.logging.logger import Log
from screensort.pipeline.captions import build_caption


class CorrectionService:
    """Applies user corrections to the library and can undo them."""

    APPLIED_STATUS = "User Corrected"
    REVERTED_STATUS = "Reverted"

    def __init__(
        self,
        *,
        library: BaseLibrary,
        store: CorrectionStore,
        destinations: dict[ContentType, str],
        caption_prefix: str = "ScreenSort",
    ) -> None:
        self._library = library
        self._store = store
        self._destinations = destinations
        self._caption_prefix = caption_prefix

    def apply_correction(self, correction: Correction, item: Item) -> Correction:
        """File the item under the corrected type, recaption it and store it as applied.

        Raises:
            CorrectionError: if the library rejects the move or the caption.
        """
        caption = build_caption(
            self._caption_prefix,
            correction.corrected_type,
            self.APPLIED_STATUS,
            correction.corrected_title,
            correction.corrected_creator,
        )
        self._relocate(item, correction.corrected_type, caption)
        applied = correction.as_applied()
        self._store.save(applied)
        Log.info(
            "Applied correction",
            item_id=item.id,
            original=correction.original_type.value,
            corrected=correction.corrected_type.value,
        )
        return applied

    def revert_correction(self, item: Item) -> bool:
        """Put the item back where it was classified. Returns False if it was never corrected.

        Raises:
            CorrectionError: if the library rejects the move or the caption.
        """
        correction = self._store.load(item.id)
        if correction is None:
            return False

        caption = build_caption(
            self._caption_prefix,
            correction.original_type,
            self.REVERTED_STATUS,
            correction.original_title,
            correction.original_creator,
        )
        self._relocate(item, correction.original_type, caption)
        self._store.delete(item.id)
        Log.info("Reverted correction", item_id=item.id, restored=correction.original_type.value)
        return True

    def pending_corrections(self) -> list[Correction]:
        return [correction for correction in self._store.load_all() if not correction.is_applied]

    def pending_count(self) -> int:
        return self._store.unapplied_count()

    def _relocate(self, item: Item, content_type: ContentType, caption: str) -> None:
        destination = self._destinations[content_type]
        try:
            self._library.create_destination_if_needed(destination)
            self._library.move_to_destination(item, destination)
            self._library.annotate(item, caption)
        except LibraryError as exc:
            raise CorrectionError(f"Could not update {item.id}: {exc}") from exc
