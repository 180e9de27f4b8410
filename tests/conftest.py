from collections.abc import Callable, Iterable

import pytest

from screensort.domain.models import BoundingBox, Item, TextFragment
from screensort.library.base import BaseLibrary
from screensort.library.exceptions import AnnotationError, ItemNotFoundError, MoveError
from screensort.library.models import ImageData
from screensort.transcription.base import BaseTranscriber
from screensort.transcription.exceptions import TranscriptionError


def fragments_from(*texts: str, confidence: float = 0.95) -> list[TextFragment]:
    """Fragments laid out top to bottom in the given order."""
    count = len(texts)
    return [
        TextFragment(
            text=text,
            confidence=confidence,
            box=BoundingBox(x=0.1, y=1.0 - (index + 1) / (count + 1), width=0.8, height=0.05),
        )
        for index, text in enumerate(texts)
    ]


class InMemoryLibrary(BaseLibrary):
    """Library double that records every organization call."""

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self.items = list(items)
        self.access = True
        self.annotations: dict[str, str] = {}
        self.destinations: set[str] = set()
        self.moves: dict[str, str] = {}
        self.failing_moves: set[str] = set()
        self.failing_annotations: set[str] = set()
        self.removed: set[str] = set()

    def has_access(self) -> bool:
        return self.access

    def fetch_items(self) -> list[Item]:
        return list(self.items)

    def read_image(self, item: Item) -> ImageData:
        if item.id in self.removed:
            raise ItemNotFoundError(item.id)
        return ImageData(content=b"\x89PNG")

    def create_destination_if_needed(self, name: str) -> str:
        self.destinations.add(name)
        return name

    def move_to_destination(self, item: Item, name: str) -> None:
        if item.id in self.failing_moves:
            raise MoveError(f"cannot move {item.id}")
        self.moves[item.id] = name

    def annotate(self, item: Item, text: str) -> None:
        if item.id in self.failing_annotations:
            raise AnnotationError(f"cannot annotate {item.id}")
        self.annotations[item.id] = text

    def get_annotation(self, item: Item) -> str | None:
        return self.annotations.get(item.id)

    def existing_ids(self, ids: Iterable[str]) -> set[str]:
        known = {item.id for item in self.items} - self.removed
        return {item_id for item_id in ids if item_id in known}


class ScriptedTranscriber(BaseTranscriber):
    """Returns pre-set fragments per item id; raises for ids mapped to an exception."""

    def __init__(self, script: dict[str, list[TextFragment] | Exception]) -> None:
        self.script = script
        self.calls: list[str] = []

    def transcribe(self, item: Item) -> list[TextFragment]:
        self.calls.append(item.id)
        outcome = self.script.get(item.id)
        if outcome is None:
            raise TranscriptionError(f"no script for {item.id}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture()
def make_fragments() -> Callable[..., list[TextFragment]]:
    return fragments_from


@pytest.fixture()
def music_fragments() -> list[TextFragment]:
    return fragments_from("Now Playing", "Bohemian Rhapsody", "Queen", "Spotify")


@pytest.fixture()
def movie_fragments() -> list[TextFragment]:
    return fragments_from("Netflix", "Inception", "2010", "Watch Now")


@pytest.fixture()
def book_fragments() -> list[TextFragment]:
    return fragments_from("Goodreads", "Dune", "by Frank Herbert", "Want to Read")


@pytest.fixture()
def meme_fragments() -> list[TextFragment]:
    return fragments_from("Nobody:", "Me at 3am:", "made with mematic")


@pytest.fixture()
def library() -> InMemoryLibrary:
    return InMemoryLibrary()


@pytest.fixture()
def make_transcriber() -> Callable[[dict[str, list[TextFragment] | Exception]], ScriptedTranscriber]:
    return ScriptedTranscriber
