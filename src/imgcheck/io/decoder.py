"""Image decoding capability (Pillow), checked for availability at call time."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from importlib.util import find_spec
from typing import Any, Protocol

from imgcheck.exceptions import DecodeError


class Decoder(Protocol):
    def is_available(self) -> bool: ...

    def open(self, path: str) -> AbstractContextManager[Any]: ...

    def resolution_property(self, handle: Any) -> str | None: ...

    def color_space(self, handle: Any) -> str: ...


def _fmt_density(value: Any) -> str:
    try:
        return str(round(float(value)))
    except (TypeError, ValueError, ZeroDivisionError, OverflowError):
        return ""


class PillowDecoder:
    """Decoder backed by Pillow. Only headers are read, never pixel data."""

    def is_available(self) -> bool:
        return find_spec("PIL") is not None

    @contextmanager
    def open(self, path: str) -> Iterator[Any]:
        from PIL import Image

        try:
            img = Image.open(path)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(path, str(exc)) from exc

        with img:
            yield img

    def resolution_property(self, handle: Any) -> str | None:
        """Return the density as ``"<x>x<y>"``, e.g. ``"300x300"``."""
        dpi = handle.info.get("dpi")
        if not dpi:
            return None
        if not isinstance(dpi, (tuple, list)):
            dpi = (dpi,)
        return "x".join(_fmt_density(v) for v in dpi)

    def color_space(self, handle: Any) -> str:
        mode: str = handle.mode or ""
        # Palette images report the color model of their palette
        if mode in ("P", "PA") and handle.palette is not None:
            return handle.palette.mode or mode
        return mode
