"""Annotation schemas.

``AnnotationPayload`` is the wire form returned by the classification
service, in classifier pixel space.  ``Annotation`` is the page-space value
built from it by the decoder.
"""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from symbol_annotator.scale import to_page_space


class BoundingBox(BaseModel, frozen=True):
    """Axis-aligned box in pixel units."""

    x: float
    y: float
    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)

    def scaled(self, factor: float) -> BoundingBox:
        """Project page-space geometry into classifier space."""
        return BoundingBox(
            x=self.x * factor,
            y=self.y * factor,
            width=self.width * factor,
            height=self.height * factor,
        )

    def unscaled(self, ratio: float) -> BoundingBox:
        """Project classifier-space geometry back to page space."""
        return BoundingBox(
            x=to_page_space(self.x, ratio),
            y=to_page_space(self.y, ratio),
            width=to_page_space(self.width, ratio),
            height=to_page_space(self.height, ratio),
        )

    def as_rect(self) -> tuple[int, int, int, int]:
        """Integer (x, y, width, height) enclosing this box."""
        left = math.floor(self.x)
        top = math.floor(self.y)
        right = math.ceil(self.x + self.width)
        bottom = math.ceil(self.y + self.height)
        return left, top, right - left, bottom - top


class AnnotationPayload(BaseModel, frozen=True):
    """One annotation object as sent by the service."""

    label: str = Field(strict=True)
    bounds: list[Annotated[float, Field(strict=True)]] = Field(
        min_length=4, max_length=4
    )
    confidence: float = Field(ge=0.0, le=1.0, strict=True)

    @field_validator("bounds")
    @classmethod
    def _size_not_negative(cls, bounds: list[float]) -> list[float]:
        """Width and height are extents, so they cannot be negative."""
        if bounds[2] < 0 or bounds[3] < 0:
            raise ValueError(f"negative width or height in bounds {bounds}")
        return bounds

    def to_annotation(self, ratio: float) -> Annotation:
        x, y, width, height = self.bounds
        box = BoundingBox(x=x, y=y, width=width, height=height)
        return Annotation(
            label=self.label,
            bounds=box.unscaled(ratio),
            confidence=self.confidence,
        )


class Annotation(BaseModel, frozen=True):
    """A detected symbol: label, page-space bounds and confidence."""

    label: str
    bounds: BoundingBox
    confidence: float = Field(ge=0.0, le=1.0)
