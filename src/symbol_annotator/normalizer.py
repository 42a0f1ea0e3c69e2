"""Produce the single-channel classifier input image for a page."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PIL import Image

from symbol_annotator.exceptions import NormalizationError
from symbol_annotator.picture import Picture, SourceKey
from symbol_annotator.scale import scaled_size


class ImageNormalizer:
    """Build the page image at the classifier's expected resolution.

    When the expected interline equals the interline of the large-target
    buffer the image pipeline already caches, that buffer is used as is.
    Otherwise, or when that buffer is not cached, the initial (gray) buffer
    is resized by the scale ratio with an area-averaging (box) filter.  The
    binary buffer stands in when no initial buffer exists.

    Args:
        large_target_interline: Interline of the cached large-target buffer.
    """

    def __init__(self, large_target_interline: int) -> None:
        self.large_target_interline = large_target_interline

    def normalize(
        self, picture: Picture, expected_interline: int, ratio: float
    ) -> Image.Image:
        """Return a mode ``L`` image scaled for the classifier.

        Raises:
            NormalizationError: If no usable source buffer exists or
                PIL fails to process it.
        """
        try:
            if expected_interline == self.large_target_interline:
                buffer = picture.get_source(SourceKey.LARGE_TARGET)
                if buffer is not None:
                    return self._to_gray(buffer)
                logger.debug("Large-target source not cached, scaling page image")

            buffer = picture.get_source(SourceKey.INITIAL)
            if buffer is None:
                buffer = picture.get_source(SourceKey.BINARY)
            if buffer is None:
                raise NormalizationError("Neither initial nor binary source available")

            gray = self._to_gray(buffer)
            if ratio != 1.0:
                gray = self._resize(gray, ratio)
            return gray
        except (OSError, ValueError) as exc:
            raise NormalizationError(f"Could not normalize page image: {exc}") from exc

    def save(self, image: Image.Image, path: Path) -> Path:
        """Write ``image`` as PNG, creating parent directories as needed."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            image.save(path, format="PNG")
        except (OSError, ValueError) as exc:
            raise NormalizationError(f"Could not write {path}: {exc}") from exc
        logger.info(f"Saved {path}")
        return path

    def _resize(self, image: Image.Image, ratio: float) -> Image.Image:
        # BOX averages source pixels, which avoids aliasing on downscale.
        # TODO: switch to a bilinear filter when ratio > 1.
        size = scaled_size(image.width, image.height, ratio)
        logger.debug(f"Resizing {image.size} -> {size} (ratio={ratio:.3f})")
        return image.resize(size, resample=Image.Resampling.BOX)

    @staticmethod
    def _to_gray(image: Image.Image) -> Image.Image:
        return image if image.mode == "L" else image.convert("L")
