from screensort.domain.models import ContentType, Item
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import LibraryError
from screensort.logging.logger import Log


def build_caption(
    prefix: str,
    content_type: ContentType,
    status: str,
    title: str | None = None,
    creator: str | None = None,
) -> str:
    """Render ``<prefix>: <Type> | Title: ... | Creator: ... | Status: ...``."""
    parts = [f"{prefix}: {content_type.display_name}"]
    if title:
        parts.append(f"Title: {title}")
    if creator:
        parts.append(f"Creator: {creator}")
    parts.append(f"Status: {status}")
    return " | ".join(parts)


def has_legacy_marker(annotation: str | None, prefix: str) -> bool:
    return bool(annotation) and annotation.startswith(prefix)


def annotate_best_effort(library: BaseLibrary, item: Item, caption: str) -> None:
    try:
        library.annotate(item, caption)
    except LibraryError as exc:
        Log.warning(f"Could not annotate item: {exc}", item_id=item.id)
