"""Record sources for batch runs: a directory walk or a JSONL attachment export."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Protocol

import orjson

from imgcheck.models.config import IMAGE_EXTENSIONS
from imgcheck.models.records import ImageRecord

# Generated size variants, e.g. "photo-150x150.jpg" next to "photo.jpg"
_SIZE_SUFFIX = re.compile(r"^(?P<base>.+)-\d+x\d+$")

_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "ID"),
    "title": ("title", "post_title", "name"),
    "file": ("file", "path", "_wp_attached_file"),
    "parent": ("parent", "post_parent"),
    "mime_type": ("mime_type", "post_mime_type"),
}


class DataSource(Protocol):
    def count_candidates(self) -> int: ...

    def fetch_page(self, limit: int, offset: int) -> list[ImageRecord]: ...

    def resolve_path(self, record: ImageRecord) -> str | None: ...


def discover_images(
    root: str | Path,
    extensions: tuple[str, ...],
) -> list[str]:
    """Recursively discover image files under root, sorted by path."""
    root = Path(root)
    found: list[str] = []
    ext_set = {e.lower() for e in extensions}
    for dirpath, _dirnames, filenames in os.walk(root):
        for fn in filenames:
            if any(fn.lower().endswith(ext) for ext in ext_set):
                found.append(os.path.join(dirpath, fn))
    found.sort()
    return found


def is_derived_variant(path: str) -> bool:
    """True for a resized copy whose original sits in the same directory."""
    stem, ext = os.path.splitext(path)
    match = _SIZE_SUFFIX.match(os.path.basename(stem))
    if match is None:
        return False
    original = os.path.join(os.path.dirname(path), match.group("base") + ext)
    return os.path.exists(original)


class DirectorySource:
    """Image files under a directory, ordered by path.

    The listing is taken once per source so paging sees a stable snapshot.
    """

    def __init__(
        self,
        root: str | Path,
        extensions: tuple[str, ...] = IMAGE_EXTENSIONS,
        include_derived: bool = False,
    ) -> None:
        self.root = Path(root)
        self.extensions = extensions
        self.include_derived = include_derived
        self._paths: list[str] | None = None

    def _candidates(self) -> list[str]:
        if self._paths is None:
            paths = discover_images(self.root, self.extensions)
            if not self.include_derived:
                paths = [p for p in paths if not is_derived_variant(p)]
            self._paths = paths
        return self._paths

    def count_candidates(self) -> int:
        return len(self._candidates())

    def fetch_page(self, limit: int, offset: int) -> list[ImageRecord]:
        page = self._candidates()[offset : offset + limit]
        return [
            ImageRecord(id=offset + i + 1, name=os.path.basename(path), path=path)
            for i, path in enumerate(page)
        ]

    def resolve_path(self, record: ImageRecord) -> str | None:
        return record.path


def _field(data: dict[str, Any], name: str) -> Any:
    for key in _FIELD_ALIASES[name]:
        if key in data and data[key] is not None:
            return data[key]
    return None


def parse_attachment(data: dict[str, Any]) -> ImageRecord | None:
    """Build a record from one JSONL object, or None if it has no usable id."""
    try:
        record_id = int(_field(data, "id"))
    except (TypeError, ValueError):
        return None
    try:
        parent = int(_field(data, "parent") or 0)
    except (TypeError, ValueError):
        parent = 0
    file = _field(data, "file")
    title = _field(data, "title")
    return ImageRecord(
        id=record_id,
        name=str(title) if title is not None else (os.path.basename(file) if file else ""),
        path=str(file) if file else None,
        parent_id=parent,
        mime_type=str(_field(data, "mime_type") or ""),
    )


def read_attachments(path: str | Path) -> list[ImageRecord]:
    """Read a JSONL attachment export, skipping corrupt lines (crash tolerance)."""
    path = Path(path)
    records: list[ImageRecord] = []
    with open(path, "rb") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError:
                continue
            if not isinstance(data, dict):
                continue
            record = parse_attachment(data)
            if record is not None:
                records.append(record)
    return records


def is_top_level_image(record: ImageRecord) -> bool:
    if record.parent_id != 0:
        return False
    # Records without a MIME type are judged by the checks themselves
    return not record.mime_type or record.mime_type.startswith("image/")


class ManifestSource:
    """Top-level image attachments from a JSONL export, ordered by id ascending.

    Relative file paths resolve against ``base_dir`` (the uploads directory),
    defaulting to the directory holding the export.
    """

    def __init__(self, path: str | Path, base_dir: str | Path | None = None) -> None:
        self.path = Path(path)
        self.base_dir = Path(base_dir) if base_dir is not None else self.path.parent
        self._records: list[ImageRecord] | None = None

    def _candidates(self) -> list[ImageRecord]:
        if self._records is None:
            records = [r for r in read_attachments(self.path) if is_top_level_image(r)]
            records.sort(key=lambda r: r.id)
            self._records = records
        return self._records

    def count_candidates(self) -> int:
        return len(self._candidates())

    def fetch_page(self, limit: int, offset: int) -> list[ImageRecord]:
        return self._candidates()[offset : offset + limit]

    def resolve_path(self, record: ImageRecord) -> str | None:
        if not record.path:
            return None
        path = Path(record.path).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return str(path)
