"""Content log kept as a local markdown document with one section per type."""

import re
import threading
from pathlib import Path
from typing import ClassVar

from screensort.content_log.base import BaseContentLog
from screensort.content_log.exceptions import ContentLogError
from screensort.content_log.models import ContentLogEntry
from screensort.domain.models import ContentType

_LINK_SUFFIX = re.compile(r"\s\[[^\]]*\]$")


class MarkdownContentLog(BaseContentLog):
    """Appends entries under ``## <Section>`` headings and skips duplicates."""

    TITLE: ClassVar[str] = "# ScreenSort - Recognized Content"
    SECTIONS: ClassVar[dict[ContentType, str]] = {
        ContentType.MUSIC: "Music",
        ContentType.MOVIE: "Movies",
        ContentType.BOOK: "Books",
        ContentType.UNKNOWN: "Other",
    }

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._known_keys: set[str] | None = None

    @property
    def document_url(self) -> str | None:
        return self._path.resolve().as_uri()

    def append(self, entry: ContentLogEntry) -> bool:
        with self._lock:
            lines = self._read_lines()
            if self._known_keys is None:
                self._known_keys = self._parse_keys(lines)
            if entry.dedupe_key in self._known_keys:
                return False

            heading = f"## {self._section_for(entry.type)}"
            start = lines.index(heading)
            end = next(
                (index for index in range(start + 1, len(lines)) if lines[index].startswith("## ")),
                len(lines),
            )
            insert_at = end
            while insert_at > start + 1 and not lines[insert_at - 1].strip():
                insert_at -= 1
            lines.insert(insert_at, f"- {entry.display_text}")

            try:
                self._path.write_text("\n".join(lines) + "\n", encoding="utf-8")
            except OSError as exc:
                raise ContentLogError(f"Failed to write content log {self._path}: {exc}") from exc
            self._known_keys.add(entry.dedupe_key)
            return True

    def _read_lines(self) -> list[str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except OSError as exc:
            raise ContentLogError(f"Failed to read content log {self._path}: {exc}") from exc

        lines = text.splitlines() if text else [self.TITLE, ""]
        for section in self.SECTIONS.values():
            heading = f"## {section}"
            if heading not in lines:
                lines.extend([heading, ""])
        return lines

    def _parse_keys(self, lines: list[str]) -> set[str]:
        by_heading = {f"## {name}": content_type for content_type, name in self.SECTIONS.items()}
        keys: set[str] = set()
        current: ContentType | None = None
        for line in lines:
            if line.startswith("## "):
                current = by_heading.get(line.strip())
                continue
            if current is None or not line.startswith("- "):
                continue
            text = _LINK_SUFFIX.sub("", line[2:].strip())
            # entries without a creator are written as the bare title
            keys.add(f"{current.value}:{text.lower()}:")
            title, separator, creator = text.rpartition(" - ")
            if separator:
                keys.add(f"{current.value}:{title.lower()}:{creator.lower()}")
        return keys

    def _section_for(self, content_type: ContentType) -> str:
        return self.SECTIONS.get(content_type, self.SECTIONS[ContentType.UNKNOWN])
