import mimetypes
import os
import shutil
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar

from screensort.domain.models import Item
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import (
    AnnotationError,
    DestinationError,
    ItemNotFoundError,
    LibraryAccessError,
    MoveError,
)
from screensort.library.models import ImageData


class LocalDirectoryLibrary(BaseLibrary):
    """Library backed by a directory of screenshot files.

    Layout::

        {root}/{name}.png              unsorted items (the candidates)
        {root}/{destination}/{name}    items filed into a destination
        {root}/.captions/{name}.txt    annotations, stable across moves

    The item identifier is the file name, so an item keeps its identity after
    being moved into a destination directory.
    """

    SUPPORTED_SUFFIXES: ClassVar[frozenset[str]] = frozenset(
        {".png", ".jpg", ".jpeg", ".heic", ".heif", ".webp"}
    )
    CAPTIONS_DIR: ClassVar[str] = ".captions"

    def __init__(self, root: Path) -> None:
        self._root = root

    def has_access(self) -> bool:
        return self._root.is_dir() and os.access(self._root, os.R_OK | os.W_OK)

    def fetch_items(self) -> list[Item]:
        try:
            stamped = [
                (path.stat().st_mtime, path.name)
                for path in self._root.iterdir()
                if path.is_file() and path.suffix.lower() in self.SUPPORTED_SUFFIXES
            ]
        except OSError as exc:
            raise LibraryAccessError(f"Cannot list library {self._root}: {exc}") from exc
        stamped.sort()
        return [
            Item(id=name, created_at=datetime.fromtimestamp(mtime, tz=timezone.utc))
            for mtime, name in stamped
        ]

    def read_image(self, item: Item) -> ImageData:
        path = self._locate(item.id)
        if path is None:
            raise ItemNotFoundError(f"Item not found: {item.id}")
        try:
            content = path.read_bytes()
        except FileNotFoundError as exc:
            raise ItemNotFoundError(f"Item not found: {item.id}") from exc
        except OSError as exc:
            raise LibraryAccessError(f"Cannot read {item.id}: {exc}") from exc
        mime_type, _ = mimetypes.guess_type(path.name)
        return ImageData(content=content, mime_type=mime_type or "image/png")

    def create_destination_if_needed(self, name: str) -> str:
        path = self._root / name
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DestinationError(f"Failed to create destination '{name}': {exc}") from exc
        return str(path)

    def move_to_destination(self, item: Item, name: str) -> None:
        source = self._locate(item.id)
        if source is None:
            raise MoveError(f"Item not found: {item.id}")
        target_dir = self._root / name
        if not target_dir.is_dir():
            raise MoveError(f"Destination does not exist: {name}")
        if source.parent == target_dir:
            return
        try:
            shutil.move(str(source), str(target_dir / item.id))
        except OSError as exc:
            raise MoveError(f"Failed to move {item.id} to '{name}': {exc}") from exc

    def annotate(self, item: Item, text: str) -> None:
        captions = self._root / self.CAPTIONS_DIR
        try:
            captions.mkdir(exist_ok=True)
            (captions / f"{item.id}.txt").write_text(text, encoding="utf-8")
        except OSError as exc:
            raise AnnotationError(f"Failed to annotate {item.id}: {exc}") from exc

    def get_annotation(self, item: Item) -> str | None:
        path = self._root / self.CAPTIONS_DIR / f"{item.id}.txt"
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise AnnotationError(f"Failed to read annotation of {item.id}: {exc}") from exc

    def existing_ids(self, ids: Iterable[str]) -> set[str]:
        if not self._root.is_dir():
            raise LibraryAccessError(f"Library root does not exist: {self._root}")
        return {item_id for item_id in ids if self._locate(item_id) is not None}

    def _locate(self, item_id: str) -> Path | None:
        direct = self._root / item_id
        if direct.is_file():
            return direct
        try:
            children = list(self._root.iterdir())
        except OSError as exc:
            raise LibraryAccessError(f"Cannot list library {self._root}: {exc}") from exc
        for child in children:
            if child.is_dir() and child.name != self.CAPTIONS_DIR:
                candidate = child / item_id
                if candidate.is_file():
                    return candidate
        return None
