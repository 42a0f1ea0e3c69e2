"""Pydantic frozen configuration models for symbol_annotator."""

import tempfile
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_WEB_SERVICE_URL = "http://127.0.0.1:5000/classify"


def _default_temp_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "symbol_annotator")


class AnnotationsConfig(BaseModel, frozen=True):
    """Configuration for AnnotationsStep.

    All fields are validated at construction time. Frozen, no mutation after creation.

    display_annotations: Should the annotations view be displayed after a run.
    expected_interline: Interline (pixels) of the classifier input image.
    large_target_interline: Interline of the large-target buffer the image
        pipeline already caches; matching it skips any resize.
    web_service_url: URL of the detection web service.
    connect_timeout / read_timeout: Request deadlines, in seconds.
    temp_dir: Where uploaded images and raw responses are kept.
    fail_fast: Abort the whole batch on the first malformed annotation
        instead of skipping it.
    replace_existing: Clear the page's previous annotations before
        registering a new batch instead of appending to them.
    """

    display_annotations: bool = True
    expected_interline: int = Field(default=10, gt=0)
    large_target_interline: int = Field(default=10, gt=0)
    web_service_url: str = DEFAULT_WEB_SERVICE_URL
    connect_timeout: float = Field(default=10.0, gt=0.0)
    read_timeout: float = Field(default=300.0, gt=0.0)
    temp_dir: str = Field(default_factory=_default_temp_dir)
    fail_fast: bool = True
    replace_existing: bool = True

    @model_validator(mode="after")
    def _url_must_be_http(self) -> "AnnotationsConfig":
        """Only http(s) endpoints can receive a multipart upload."""
        if not self.web_service_url.startswith(("http://", "https://")):
            raise ValueError(
                f"web_service_url must be an http(s) URL, got {self.web_service_url!r}"
            )
        return self
