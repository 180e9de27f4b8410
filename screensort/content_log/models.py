from dataclasses import dataclass, field
from datetime import datetime, timezone

from screensort.domain.models import ContentType


@dataclass(frozen=True)
class ContentLogEntry:
    """One recognized piece of content for the running log."""

    type: ContentType
    title: str
    creator: str
    service_link: str | None = None
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_text(self) -> str:
        text = f"{self.title} - {self.creator}" if self.creator else self.title
        if self.service_link:
            text += f" [{self.service_link}]"
        return text

    @property
    def dedupe_key(self) -> str:
        return f"{self.type.value}:{self.title.lower()}:{self.creator.lower()}"
