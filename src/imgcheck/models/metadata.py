"""Image metadata extracted for validation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ColorSpace(str, Enum):
    RGB = "RGB"
    CMYK = "CMYK"
    GRAYSCALE = "GRAYSCALE"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class ImageMetadata:
    # 0 when the file carries no resolution metadata
    horizontal_dpi: int = 0
    vertical_dpi: int = 0
    color_space: ColorSpace = ColorSpace.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["color_space"] = self.color_space.value
        return d
