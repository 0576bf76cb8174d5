"""Extract DPI and color space metadata from an image file."""

from __future__ import annotations

import re

from imgcheck.exceptions import DecodeError, ExtractionUnavailable
from imgcheck.io.decoder import Decoder, PillowDecoder
from imgcheck.models.metadata import ColorSpace, ImageMetadata

_LEADING_INT = re.compile(r"\s*\+?(\d+)")

# Pillow modes -> color space
_MODE_MAP: dict[str, ColorSpace] = {
    "RGB": ColorSpace.RGB,
    "RGBA": ColorSpace.RGB,
    "RGBX": ColorSpace.RGB,
    "RGBa": ColorSpace.RGB,
    "CMYK": ColorSpace.CMYK,
    "1": ColorSpace.GRAYSCALE,
    "L": ColorSpace.GRAYSCALE,
    "LA": ColorSpace.GRAYSCALE,
    "La": ColorSpace.GRAYSCALE,
    "I": ColorSpace.GRAYSCALE,
    "F": ColorSpace.GRAYSCALE,
}


def parse_dpi_value(value: str | None) -> int:
    """Parse the leading integer of one density component, 0 if there is none."""
    if not value:
        return 0
    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def parse_density(density: str | None) -> tuple[int, int]:
    """Split a density string such as ``"300x300"`` into (x, y).

    Each axis is parsed on its own; a missing or malformed side is 0.
    """
    if not density:
        return 0, 0
    parts = density.split("x")
    x = parse_dpi_value(parts[0])
    y = parse_dpi_value(parts[1]) if len(parts) > 1 else 0
    return x, y


def map_color_space(code: str | None) -> ColorSpace:
    if not code:
        return ColorSpace.UNKNOWN
    if code.startswith("I;"):
        return ColorSpace.GRAYSCALE
    return _MODE_MAP.get(code, ColorSpace.OTHER)


class ImageInspector:
    """Reads resolution and color space through a decoder.

    Decoder availability is checked on every call, so installing or removing
    the decoding library takes effect without a restart.
    """

    def __init__(self, decoder: Decoder | None = None) -> None:
        self.decoder: Decoder = decoder if decoder is not None else PillowDecoder()

    def extract(self, path: str) -> ImageMetadata:
        """Raises ExtractionUnavailable or DecodeError.

        Any other fault raised while decoding is reported as DecodeError.
        """
        if not self.decoder.is_available():
            raise ExtractionUnavailable()

        try:
            with self.decoder.open(path) as handle:
                x, y = parse_density(self.decoder.resolution_property(handle))
                color_space = map_color_space(self.decoder.color_space(handle))
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(path, str(exc) or type(exc).__name__) from exc

        return ImageMetadata(horizontal_dpi=x, vertical_dpi=y, color_space=color_space)
