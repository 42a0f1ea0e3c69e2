"""Annotation and sample schemas."""

from symbol_annotator.schemas.annotation import (
    Annotation,
    AnnotationPayload,
    BoundingBox,
)
from symbol_annotator.schemas.info import RunInfo
from symbol_annotator.schemas.sample import Sample

__all__ = [
    "Annotation",
    "AnnotationPayload",
    "BoundingBox",
    "RunInfo",
    "Sample",
]
