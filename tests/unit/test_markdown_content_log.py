from pathlib import Path

from screensort.content_log.markdown_log_adapter import MarkdownContentLog
from screensort.content_log.models import ContentLogEntry
from screensort.domain.models import ContentType


def _entry(content_type: ContentType, title: str, creator: str, link: str | None = None) -> ContentLogEntry:
    return ContentLogEntry(type=content_type, title=title, creator=creator, service_link=link)


class TestMarkdownContentLog:
    def test_creates_document_with_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "log.md"
        log = MarkdownContentLog(path)

        assert log.append(_entry(ContentType.MUSIC, "Song", "Band", "https://youtube.com/watch?v=x"))

        assert path.read_text(encoding="utf-8").splitlines() == [
            "# ScreenSort - Recognized Content",
            "",
            "## Music",
            "- Song - Band [https://youtube.com/watch?v=x]",
            "",
            "## Movies",
            "",
            "## Books",
            "",
            "## Other",
            "",
        ]

    def test_entries_go_to_their_section_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "log.md"
        log = MarkdownContentLog(path)
        log.append(_entry(ContentType.BOOK, "Dune", "Frank Herbert"))
        log.append(_entry(ContentType.MUSIC, "First", "Band"))
        log.append(_entry(ContentType.MUSIC, "Second", "Band"))

        lines = path.read_text(encoding="utf-8").splitlines()
        music = lines.index("## Music")
        assert lines[music + 1] == "- First - Band"
        assert lines[music + 2] == "- Second - Band"
        assert lines[lines.index("## Books") + 1] == "- Dune - Frank Herbert"

    def test_duplicates_are_skipped_case_insensitively(self, tmp_path: Path) -> None:
        log = MarkdownContentLog(tmp_path / "log.md")
        assert log.append(_entry(ContentType.MUSIC, "Song", "Band"))
        assert not log.append(_entry(ContentType.MUSIC, "SONG", "band", "https://example.com"))

    def test_existing_document_entries_count_as_known(self, tmp_path: Path) -> None:
        path = tmp_path / "log.md"
        MarkdownContentLog(path).append(_entry(ContentType.MOVIE, "Inception", "Nolan", "https://t/1"))

        reopened = MarkdownContentLog(path)
        assert not reopened.append(_entry(ContentType.MOVIE, "Inception", "Nolan"))
        assert reopened.append(_entry(ContentType.BOOK, "Inception", "Nolan"))

    def test_entry_without_creator_is_known_after_reopen(self, tmp_path: Path) -> None:
        path = tmp_path / "log.md"
        assert MarkdownContentLog(path).append(_entry(ContentType.MOVIE, "Inception", ""))

        reopened = MarkdownContentLog(path)
        assert not reopened.append(_entry(ContentType.MOVIE, "Inception", ""))
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines.count("- Inception") == 1

    def test_dashed_title_without_creator_is_known_after_reopen(self, tmp_path: Path) -> None:
        path = tmp_path / "log.md"
        MarkdownContentLog(path).append(_entry(ContentType.MOVIE, "Mission - Impossible", ""))
        assert not MarkdownContentLog(path).append(
            _entry(ContentType.MOVIE, "Mission - Impossible", "")
        )

    def test_memes_go_to_other(self, tmp_path: Path) -> None:
        path = tmp_path / "log.md"
        MarkdownContentLog(path).append(_entry(ContentType.MEME, "Cat", "unknown"))
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[lines.index("## Other") + 1] == "- Cat - unknown"

    def test_document_url_is_file_uri(self, tmp_path: Path) -> None:
        log = MarkdownContentLog(tmp_path / "log.md")
        assert log.document_url == (tmp_path / "log.md").resolve().as_uri()


class TestContentLogEntry:
    def test_display_text_with_creator_and_link(self) -> None:
        entry = _entry(ContentType.MUSIC, "Song", "Band", "https://example.com")
        assert entry.display_text == "Song - Band [https://example.com]"

    def test_display_text_without_creator(self) -> None:
        assert _entry(ContentType.MOVIE, "Inception", "").display_text == "Inception"
        linked = _entry(ContentType.MOVIE, "Inception", "", "https://t/1")
        assert linked.display_text == "Inception [https://t/1]"
