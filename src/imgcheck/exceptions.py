"""Exceptions raised while inspecting and gating images."""

from __future__ import annotations

from imgcheck.models.outcome import Failed


class ImgcheckError(Exception):
    """Base class for imgcheck errors."""


class ExtractionUnavailable(ImgcheckError):
    """The image decoding capability is not installed in this runtime."""

    def __init__(self, message: str = "Image decoding library (Pillow) is not available.") -> None:
        super().__init__(message)


class DecodeError(ImgcheckError):
    """The file exists but could not be opened or parsed as an image."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Could not read image {path}{detail}")


class FileMissing(ImgcheckError):
    """The referenced file does not exist on disk."""

    def __init__(self, path: str | None) -> None:
        self.path = path
        super().__init__(f"File missing: {path or ''}")


class UploadRejected(ImgcheckError):
    """An upload failed one of the gate checks."""

    def __init__(self, outcome: Failed) -> None:
        self.outcome = outcome
        super().__init__(outcome.message)

    @property
    def kind(self) -> str:
        return self.outcome.kind.value
