from dataclasses import dataclass, field


@dataclass(frozen=True)
class MovieMatch:
    id: int
    title: str
    link: str
    year: int | None = None


@dataclass(frozen=True)
class BookMatch:
    id: str
    title: str
    link: str
    authors: list[str] = field(default_factory=list)
