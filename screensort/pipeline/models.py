import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from screensort.domain.models import ContentType, Item, TextFragment


class ResultStatus(str, Enum):
    SUCCESS = "success"
    FLAGGED = "flagged"
    FAILED = "failed"


class BatchStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NOTHING_TO_DO = "nothing_to_do"
    ERROR = "error"
    PRECONDITION_FAILED = "precondition_failed"


@dataclass(frozen=True)
class ResultRecord:
    """Outcome of processing one item. ``record_id`` is unique per record, not per item."""

    item_id: str
    status: ResultStatus
    content_type: ContentType
    title: str | None = None
    creator: str | None = None
    message: str | None = None
    service_link: str | None = None
    record_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict[str, Any]:
        return {
            "recordId": self.record_id,
            "itemId": self.item_id,
            "status": self.status.value,
            "contentType": self.content_type.value,
            "title": self.title,
            "creator": self.creator,
            "message": self.message,
            "serviceLink": self.service_link,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultRecord":
        """Rebuild a record from ``to_dict`` output.

        Raises:
            KeyError, ValueError: if required keys are missing or values are not
                valid enum members.
        """
        return cls(
            record_id=str(data["recordId"]),
            item_id=str(data["itemId"]),
            status=ResultStatus(data["status"]),
            content_type=ContentType(data["contentType"]),
            title=data.get("title"),
            creator=data.get("creator"),
            message=data.get("message"),
            service_link=data.get("serviceLink"),
        )


@dataclass
class BatchResult:
    status: BatchStatus
    records: list[ResultRecord] = field(default_factory=list)
    message: str | None = None
    processed: int = 0
    total: int = 0

    @property
    def counts(self) -> dict[ResultStatus, int]:
        counts = {status: 0 for status in ResultStatus}
        for record in self.records:
            counts[record.status] += 1
        return counts


@dataclass
class ItemContext:
    """State shared by the route handling one item."""

    item: Item
    fragments: Sequence[TextFragment]
    content_type: ContentType
    playlist_id: str | None = None


ProgressCallback = Callable[[int, int], None]
