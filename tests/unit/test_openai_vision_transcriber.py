import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

from screensort.domain.models import Item
from screensort.library.local_directory_adapter import LocalDirectoryLibrary
from screensort.transcription.exceptions import NoTextFoundError, TranscriptionError
from screensort.transcription.openai_vision_adapter import OpenAIVisionTranscriber


def _response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture()
def mock_openai():
    with patch("screensort.transcription.openai_vision_adapter.openai.OpenAI") as mock_cls:
        yield mock_cls.return_value


def _transcriber(library, minimum_confidence: float = 0.0) -> OpenAIVisionTranscriber:
    return OpenAIVisionTranscriber(
        library=library,
        api_key="key",
        model="vision-model",
        timeout_seconds=10,
        minimum_confidence=minimum_confidence,
    )


class TestOpenAIVisionTranscriber:
    def test_fragments_are_ordered_top_to_bottom(self, library, mock_openai) -> None:
        mock_openai.chat.completions.create.return_value = _response(json.dumps({
            "fragments": [
                {"text": "Queen", "confidence": 0.9, "top": 0.4},
                {"text": "Bohemian Rhapsody", "confidence": 0.95, "top": 0.2},
            ]
        }))

        fragments = _transcriber(library).transcribe(Item(id="a"))

        assert [fragment.text for fragment in fragments] == ["Bohemian Rhapsody", "Queen"]
        assert fragments[0].box.y == pytest.approx(0.8)
        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "vision-model"
        image_part = kwargs["messages"][0]["content"][1]
        assert image_part["image_url"]["url"].startswith("data:image/png;base64,")

    def test_low_confidence_and_blank_fragments_are_dropped(self, library, mock_openai) -> None:
        mock_openai.chat.completions.create.return_value = _response(json.dumps({
            "fragments": [
                {"text": "  ", "confidence": 0.9, "top": 0.1},
                {"text": "blurry", "confidence": 0.2, "top": 0.2},
                {"text": "Dune", "confidence": 0.9, "top": 0.3},
            ]
        }))
        fragments = _transcriber(library, minimum_confidence=0.5).transcribe(Item(id="a"))
        assert [fragment.text for fragment in fragments] == ["Dune"]

    def test_no_text(self, library, mock_openai) -> None:
        mock_openai.chat.completions.create.return_value = _response(json.dumps({"fragments": []}))
        with pytest.raises(NoTextFoundError):
            _transcriber(library).transcribe(Item(id="a"))

    def test_empty_response(self, library, mock_openai) -> None:
        mock_openai.chat.completions.create.return_value = _response(None)
        with pytest.raises(TranscriptionError, match="empty response"):
            _transcriber(library).transcribe(Item(id="a"))

    def test_invalid_json(self, library, mock_openai) -> None:
        mock_openai.chat.completions.create.return_value = _response("not json")
        with pytest.raises(TranscriptionError):
            _transcriber(library).transcribe(Item(id="a"))

    def test_connection_error(self, library, mock_openai) -> None:
        mock_openai.chat.completions.create.side_effect = httpx.ConnectError("offline")
        with pytest.raises(TranscriptionError):
            _transcriber(library).transcribe(Item(id="a"))

    def test_unreadable_file_is_transcription_error(self, tmp_path, mock_openai) -> None:
        (tmp_path / "shot.png").write_bytes(b"\x89PNG")
        library = LocalDirectoryLibrary(tmp_path)
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(TranscriptionError, match="Cannot read image shot.png"):
                _transcriber(library).transcribe(Item(id="shot.png"))
        mock_openai.chat.completions.create.assert_not_called()

    def test_missing_image(self, library, mock_openai) -> None:
        library.removed.add("a")
        with pytest.raises(TranscriptionError, match="Cannot read image"):
            _transcriber(library).transcribe(Item(id="a"))
        mock_openai.chat.completions.create.assert_not_called()
