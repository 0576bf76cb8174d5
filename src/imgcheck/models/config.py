"""Configuration models with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 100

IMAGE_EXTENSIONS: tuple[str, ...] = (
    ".jpg",
    ".jpeg",
    ".png",
    ".bmp",
    ".tiff",
    ".tif",
    ".webp",
    ".gif",
)


@dataclass(slots=True)
class AuditConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    extensions: tuple[str, ...] = IMAGE_EXTENSIONS
    include_derived: bool = False
    show_progress: bool = True
