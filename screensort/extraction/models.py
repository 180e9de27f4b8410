from dataclasses import dataclass, field


@dataclass(frozen=True)
class MusicMetadata:
    """Song and artist read from a music screenshot."""

    title: str
    artist: str
    confidence: float
    raw_text: list[str] = field(default_factory=list)

    @property
    def creator(self) -> str:
        return self.artist

    @property
    def search_query(self) -> str:
        return f"{self.title} {self.artist}"

    @property
    def display_title(self) -> str:
        return f"{self.title} - {self.artist}"


@dataclass(frozen=True)
class MovieMetadata:
    """Movie or show read from a streaming screenshot."""

    title: str
    confidence: float
    year: int | None = None
    director: str | None = None
    raw_text: list[str] = field(default_factory=list)

    @property
    def creator(self) -> str | None:
        return self.director

    @property
    def search_query(self) -> str:
        return f"{self.title} {self.year}" if self.year else self.title

    @property
    def display_title(self) -> str:
        display = self.title
        if self.year:
            display += f" ({self.year})"
        if self.director:
            display += f" - {self.director}"
        return display


@dataclass(frozen=True)
class BookMetadata:
    """Book read from a reading-app screenshot."""

    title: str
    confidence: float
    author: str | None = None
    isbn: str | None = None
    raw_text: list[str] = field(default_factory=list)

    @property
    def creator(self) -> str | None:
        return self.author

    @property
    def search_query(self) -> str:
        return f"{self.title} {self.author}" if self.author else self.title

    @property
    def display_title(self) -> str:
        return f"{self.title} - {self.author}" if self.author else self.title


ExtractedMetadata = MusicMetadata | MovieMetadata | BookMetadata
