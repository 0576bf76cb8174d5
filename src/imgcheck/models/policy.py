"""Policy model for the resolution and color model checks."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DPI_THRESHOLD = 96


@dataclass(slots=True)
class Policy:
    dpi_threshold: int = DEFAULT_DPI_THRESHOLD

    def __post_init__(self) -> None:
        if isinstance(self.dpi_threshold, bool) or not isinstance(self.dpi_threshold, int):
            raise ValueError(f"dpi_threshold must be an integer, got {self.dpi_threshold!r}")
        if self.dpi_threshold < 0:
            raise ValueError(f"dpi_threshold must be non-negative, got {self.dpi_threshold}")
