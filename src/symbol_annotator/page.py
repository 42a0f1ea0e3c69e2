"""Page handle consumed by the annotations step."""

from __future__ import annotations

from dataclasses import dataclass, field

from symbol_annotator.picture import Picture
from symbol_annotator.registry import AnnotationRegistry


@dataclass
class Page:
    """A page as seen by the annotations step.

    page_id: Identifier used to name artifacts.
    interline: Measured interline of the page, in pixels.
    picture: Source buffers from the image-processing pipeline.
    annotations: Registry receiving the decoded annotations.
    """

    page_id: str
    interline: float
    picture: Picture
    annotations: AnnotationRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.annotations = AnnotationRegistry(self.page_id)
