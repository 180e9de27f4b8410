"""Validation of model extraction payloads.

Models sometimes answer with template text instead of admitting they found
nothing, so every populated field is checked against placeholder tokens
before the payload is trusted.
"""

from typing import ClassVar

from screensort.extraction.exceptions import InvalidExtractionError


class ExtractionValidator:
    """Validates one content type's extraction payload."""

    COMMON_PLACEHOLDERS: ClassVar[frozenset[str]] = frozenset({
        "extracted",
        "unknown",
        "n/a",
        "none",
        "null",
        "undefined",
        "placeholder",
        "not found",
        "unable to",
        "cannot",
    })
    MINIMUM_TITLE_LENGTH: ClassVar[int] = 2
    MINIMUM_CREATOR_LENGTH: ClassVar[int] = 2

    def __init__(
        self,
        *,
        title_field: str,
        creator_field: str | None = None,
        creator_required: bool = False,
        optional_fields: tuple[str, ...] = (),
        extra_placeholders: frozenset[str] = frozenset(),
    ) -> None:
        self.title_field = title_field
        self.creator_field = creator_field
        self.creator_required = creator_required
        self.optional_fields = optional_fields
        self.placeholders = self.COMMON_PLACEHOLDERS | extra_placeholders

    def validate(self, data: dict[str, object]) -> dict[str, object]:
        """Return the payload with string fields stripped.

        Raises:
            InvalidExtractionError: on placeholder text, a too-short title or
                required creator, or a confidence outside [0, 1].
        """
        cleaned = dict(data)
        for field_name in self._text_fields():
            value = data.get(field_name)
            if value is None:
                cleaned[field_name] = ""
                continue
            if not isinstance(value, str):
                raise InvalidExtractionError(f"Field '{field_name}' must be a string")
            cleaned[field_name] = value.strip()

        for field_name in self._text_fields():
            lowered = str(cleaned[field_name]).lower()
            if not lowered:
                continue
            for pattern in sorted(self.placeholders):
                if pattern in lowered:
                    raise InvalidExtractionError(
                        f"Field '{field_name}' contains placeholder text: '{pattern}'"
                    )

        title = str(cleaned[self.title_field])
        if len(title) < self.MINIMUM_TITLE_LENGTH:
            raise InvalidExtractionError(f"Title too short ({len(title)} chars)")

        if self.creator_field and self.creator_required:
            creator = str(cleaned[self.creator_field])
            if len(creator) < self.MINIMUM_CREATOR_LENGTH:
                raise InvalidExtractionError(f"Creator too short ({len(creator)} chars)")

        confidence = data.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise InvalidExtractionError("Confidence must be a number")
        if not 0.0 <= float(confidence) <= 1.0:
            raise InvalidExtractionError(f"Confidence score out of range: {confidence}")
        cleaned["confidence"] = float(confidence)
        return cleaned

    def _text_fields(self) -> list[str]:
        fields = [self.title_field]
        if self.creator_field:
            fields.append(self.creator_field)
        fields.extend(self.optional_fields)
        return fields


MUSIC_VALIDATOR = ExtractionValidator(
    title_field="songTitle",
    creator_field="artist",
    creator_required=True,
    extra_placeholders=frozenset({"song title", "artist name"}),
)

MOVIE_VALIDATOR = ExtractionValidator(
    title_field="title",
    creator_field="director",
    extra_placeholders=frozenset({"movie title", "title here"}),
)

BOOK_VALIDATOR = ExtractionValidator(
    title_field="title",
    creator_field="author",
    optional_fields=("isbn",),
    extra_placeholders=frozenset({"book title", "author name", "title here"}),
)
