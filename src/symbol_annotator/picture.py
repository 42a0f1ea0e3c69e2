"""Source buffers supplied by the image-processing pipeline."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Protocol

from PIL import Image


class SourceKey(str, Enum):
    """Standard buffers a page picture may hold."""

    INITIAL = "initial"
    BINARY = "binary"
    LARGE_TARGET = "large_target"


class Picture(Protocol):
    """Read access to a page's cached source buffers."""

    def get_source(self, key: SourceKey) -> Image.Image | None:
        """Return the buffer for ``key``, or None when it is not available."""
        ...


class PagePicture:
    """In-memory picture holding whichever source buffers were provided.

    Args:
        sources: Mapping from source key to PIL image.
    """

    def __init__(self, sources: dict[SourceKey, Image.Image] | None = None) -> None:
        self._sources: dict[SourceKey, Image.Image] = dict(sources or {})

    @classmethod
    def from_file(cls, path: Path) -> PagePicture:
        """Load a page image; bilevel files become BINARY, others INITIAL gray."""
        with Image.open(path) as img:
            img.load()
            if img.mode == "1":
                return cls({SourceKey.BINARY: img.copy()})
            return cls({SourceKey.INITIAL: img.convert("L")})

    def get_source(self, key: SourceKey) -> Image.Image | None:
        return self._sources.get(key)

    def set_source(self, key: SourceKey, image: Image.Image) -> None:
        self._sources[key] = image
