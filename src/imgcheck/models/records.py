"""Data models for image records and batch reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from imgcheck.models.metadata import ImageMetadata
from imgcheck.models.outcome import Failed


@dataclass(frozen=True, slots=True)
class ImageRecord:
    id: int
    name: str
    path: str | None = None
    parent_id: int = 0
    mime_type: str = ""

    @property
    def label(self) -> str:
        return f"Attachment {self.id} ({self.name})"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "path": self.path}


@dataclass(frozen=True, slots=True)
class Upload:
    """A freshly uploaded file, before the host commits it to storage."""

    path: str
    name: str = ""


class RecordStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    MISSING = "missing"


@dataclass(slots=True)
class RecordOutcome:
    record: ImageRecord
    status: RecordStatus
    path: str | None = None
    metadata: ImageMetadata | None = None
    failures: list[Failed] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.record.to_dict(),
            "path": self.path,
            "status": self.status.value,
            "metadata": self.metadata.to_dict() if self.metadata is not None else None,
            "failures": [f.to_dict() for f in self.failures],
        }


@dataclass(slots=True)
class BatchReport:
    total: int = 0
    checked: int = 0
    errors: int = 0
    missing: int = 0
    page_size: int = 0
    pages: int = 0
    outcomes: list[RecordOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.errors == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "passed": self.passed,
            "total": self.total,
            "checked": self.checked,
            "errors": self.errors,
            "missing": self.missing,
            "page_size": self.page_size,
            "pages": self.pages,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
