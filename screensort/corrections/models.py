import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from screensort.domain.models import ContentType


class CorrectionReason(str, Enum):
    WRONG_CATEGORY = "wrong_category"
    WRONG_TITLE = "wrong_title"
    WRONG_CREATOR = "wrong_creator"
    WRONG_BOTH = "wrong_both"
    MISSED_CONTENT = "missed_content"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _REASON_NAMES[self]


_REASON_NAMES: dict[CorrectionReason, str] = {
    CorrectionReason.WRONG_CATEGORY: "Wrong category",
    CorrectionReason.WRONG_TITLE: "Wrong title",
    CorrectionReason.WRONG_CREATOR: "Wrong artist/director/author",
    CorrectionReason.WRONG_BOTH: "Wrong title and creator",
    CorrectionReason.MISSED_CONTENT: "Missed the content",
    CorrectionReason.OTHER: "Other",
}


@dataclass(frozen=True)
class Correction:
    """A user's fix for a misclassified item. At most one is kept per item."""

    item_id: str
    original_type: ContentType
    corrected_type: ContentType
    original_title: str | None = None
    original_creator: str | None = None
    corrected_title: str | None = None
    corrected_creator: str | None = None
    text_snapshot: list[str] = field(default_factory=list)
    reason: CorrectionReason | None = None
    is_applied: bool = False
    correction_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def category_changed(self) -> bool:
        return self.original_type != self.corrected_type

    @property
    def display_title(self) -> str:
        return self.corrected_title or self.original_title or "Unknown"

    @property
    def display_creator(self) -> str | None:
        return self.corrected_creator or self.original_creator

    def as_applied(self) -> "Correction":
        return replace(self, is_applied=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "correctionId": self.correction_id,
            "itemId": self.item_id,
            "createdAt": self.created_at.isoformat(),
            "originalType": self.original_type.value,
            "originalTitle": self.original_title,
            "originalCreator": self.original_creator,
            "correctedType": self.corrected_type.value,
            "correctedTitle": self.corrected_title,
            "correctedCreator": self.corrected_creator,
            "textSnapshot": list(self.text_snapshot),
            "reason": self.reason.value if self.reason else None,
            "isApplied": self.is_applied,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Correction":
        """Rebuild a correction from ``to_dict`` output.

        Raises:
            KeyError, ValueError: if required keys are missing, an enum value is
                unknown or the timestamp is not ISO 8601.
        """
        reason = data.get("reason")
        return cls(
            correction_id=str(data["correctionId"]),
            item_id=str(data["itemId"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            original_type=ContentType(data["originalType"]),
            original_title=data.get("originalTitle"),
            original_creator=data.get("originalCreator"),
            corrected_type=ContentType(data["correctedType"]),
            corrected_title=data.get("correctedTitle"),
            corrected_creator=data.get("correctedCreator"),
            text_snapshot=[str(line) for line in data.get("textSnapshot") or []],
            reason=CorrectionReason(reason) if reason else None,
            is_applied=bool(data.get("isApplied", False)),
        )
