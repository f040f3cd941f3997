"""Loading of binary, text and image assets from the data directory."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image as _PILImage

from simplege.math import Size

DATA_PATH = "data"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass(frozen=True)
class BinAsset:
    """Raw bytes of an asset."""

    value: bytes

    def __bytes__(self) -> bytes:
        return self.value


@dataclass(frozen=True)
class TextAsset:
    """Text content of an asset."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Image:
    """A decoded image as 8-bit RGBA pixels, row by row."""

    size: Size[int]
    pixels: bytes

    @classmethod
    def from_bytes(cls, content: bytes) -> Image:
        """Decode PNG data; anything that is not PNG raises ValueError."""
        if not bytes(content[:8]) == PNG_SIGNATURE:
            raise ValueError("content is not a PNG image")
        with _PILImage.open(io.BytesIO(content)) as decoded:
            decoded.load()
            picture = decoded
            if picture.mode.startswith("I"):
                # Reduce 16-bit grey to 8 bits by dropping the low byte.
                picture = picture.convert("I").point(lambda v: v * (1 / 256)).convert("L")
            rgba = picture.convert("RGBA")
            return cls(Size(rgba.width, rgba.height), rgba.tobytes())


def _path(name: str, root: str | Path) -> Path:
    return Path(root) / name


def load_binary(name: str, root: str | Path = DATA_PATH) -> BinAsset:
    """Read ``root/name`` as bytes; raises OSError when it cannot be opened."""
    return BinAsset(_path(name, root).read_bytes())


def load_text(name: str, root: str | Path = DATA_PATH) -> TextAsset:
    """Read ``root/name`` as UTF-8 text; raises OSError when it cannot be opened."""
    return TextAsset(_path(name, root).read_text(encoding="utf-8"))


def load_image(name: str, root: str | Path = DATA_PATH) -> Image:
    """Read and decode the PNG at ``root/name``."""
    return Image.from_bytes(_path(name, root).read_bytes())