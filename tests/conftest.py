"""Programmatic test image fixtures and fake collaborators."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import nullcontext
from pathlib import Path
from typing import Any

import numpy as np
import pytest
from PIL import Image

from imgcheck.exceptions import DecodeError
from imgcheck.models.records import ImageRecord

MakeImage = Callable[..., str]


@pytest.fixture
def make_image(tmp_path: Path) -> MakeImage:
    """Factory writing a small image with the given mode and DPI."""

    def _make(
        name: str = "image.jpg",
        mode: str = "RGB",
        dpi: tuple[int, int] | None = None,
        size: tuple[int, int] = (64, 48),
        directory: Path | None = None,
    ) -> str:
        w, h = size
        arr = np.random.randint(60, 200, (h, w, 3), dtype=np.uint8)
        img = Image.fromarray(arr)
        if mode != "RGB":
            img = img.convert(mode)
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        kwargs: dict[str, Any] = {}
        if dpi is not None:
            kwargs["dpi"] = dpi
        img.save(target, **kwargs)
        return str(target)

    return _make


@pytest.fixture
def rgb_image(make_image: MakeImage) -> str:
    return make_image("rgb_72.jpg", dpi=(72, 72))


@pytest.fixture
def high_dpi_image(make_image: MakeImage) -> str:
    return make_image("rgb_150.jpg", dpi=(150, 150))


@pytest.fixture
def cmyk_image(make_image: MakeImage) -> str:
    return make_image("cmyk_72.jpg", mode="CMYK", dpi=(72, 72))


class FakeDecoder:
    """Decoder returning fixed values, without touching the file."""

    def __init__(
        self,
        density: str | None = "72x72",
        mode: str = "RGB",
        available: bool = True,
        fail_paths: tuple[str, ...] = (),
        read_error: Exception | None = None,
    ) -> None:
        self.density = density
        self.mode = mode
        self.available = available
        self.fail_paths = fail_paths
        self.read_error = read_error
        self.opened: list[str] = []

    def is_available(self) -> bool:
        return self.available

    def open(self, path: str) -> Any:
        self.opened.append(path)
        if path in self.fail_paths:
            raise DecodeError(path, "cannot identify image file")
        return nullcontext(path)

    def resolution_property(self, handle: Any) -> str | None:
        return self.density

    def color_space(self, handle: Any) -> str:
        if self.read_error is not None:
            raise self.read_error
        return self.mode


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def _add(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def info(self, message: str) -> None:
        self._add("info", message)

    def success(self, message: str) -> None:
        self._add("success", message)

    def warning(self, message: str) -> None:
        self._add("warning", message)

    def error(self, message: str) -> None:
        self._add("error", message)

    def of(self, level: str) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]


class ListSource:
    """In-memory data source that records every page request."""

    def __init__(self, records: list[ImageRecord], total: int | None = None) -> None:
        self.records = records
        self.total = len(records) if total is None else total
        self.fetches: list[tuple[int, int]] = []

    def count_candidates(self) -> int:
        return self.total

    def fetch_page(self, limit: int, offset: int) -> list[ImageRecord]:
        self.fetches.append((limit, offset))
        return self.records[offset : offset + limit]

    def resolve_path(self, record: ImageRecord) -> str | None:
        return record.path


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def fake_decoder() -> type[FakeDecoder]:
    return FakeDecoder


@pytest.fixture
def list_source() -> type[ListSource]:
    return ListSource
