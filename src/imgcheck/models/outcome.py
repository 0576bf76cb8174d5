"""Validation outcomes: a tagged result of either Passed or Failed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union


class FailureKind(str, Enum):
    EXTRACTION_UNAVAILABLE = "extraction_unavailable"
    DECODE_ERROR = "decode_error"
    DPI_TOO_HIGH = "dpi_too_high"
    NON_RGB_COLOR_SPACE = "non_rgb_color_space"


@dataclass(frozen=True, slots=True)
class Passed:
    message: str = "Image passed checks."

    @property
    def passed(self) -> Literal[True]:
        return True

    @property
    def kind(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"passed": True, "failure_kind": None, "message": self.message}


@dataclass(frozen=True, slots=True)
class Failed:
    kind: FailureKind
    message: str

    @property
    def passed(self) -> Literal[False]:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"passed": False, "failure_kind": self.kind.value, "message": self.message}


ValidationOutcome = Union[Passed, Failed]
