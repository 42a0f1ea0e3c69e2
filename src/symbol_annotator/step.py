"""ANNOTATIONS step: delegate symbol detection to the full-page classifier.

The page image is scaled to the classifier's expected interline, posted to
the detection web service, and the returned annotations are scaled back to
page coordinates before being registered in the page's annotation registry.

Commit is all-or-nothing: the registry changes only when every stage has
succeeded.  Failures are returned as a ``StepFailure`` rather than raised.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from symbol_annotator.config import AnnotationsConfig
from symbol_annotator.decoder import AnnotationDecoder
from symbol_annotator.exceptions import AnnotationsError, NormalizationError
from symbol_annotator.inference.base import BaseClassificationClient
from symbol_annotator.inference.http_client import HttpClassificationClient
from symbol_annotator.normalizer import ImageNormalizer
from symbol_annotator.page import Page
from symbol_annotator.scale import resolve_ratio
from symbol_annotator.schemas.annotation import Annotation
from symbol_annotator.schemas.info import RunInfo
from symbol_annotator.types import StepFailure, StepResult, StepSuccess, failure_kind

AnnotationViewer = Callable[[Page], None]


class AnnotationsStep:
    """Run the classification round trip for one page at a time.

    Args:
        config: AnnotationsConfig with endpoint, interlines and policies.
        client: Classification client; an HttpClassificationClient on
            ``config.web_service_url`` is built when omitted.
        normalizer: Image normalizer; built from the config when omitted.
        decoder: Annotation decoder; built from the config when omitted.
    """

    def __init__(
        self,
        config: AnnotationsConfig | None = None,
        *,
        client: BaseClassificationClient | None = None,
        normalizer: ImageNormalizer | None = None,
        decoder: AnnotationDecoder | None = None,
    ) -> None:
        self.config = config if config is not None else AnnotationsConfig()
        self.client = client or HttpClassificationClient(
            self.config.web_service_url,
            connect_timeout=self.config.connect_timeout,
            read_timeout=self.config.read_timeout,
        )
        self.normalizer = normalizer or ImageNormalizer(
            self.config.large_target_interline
        )
        self.decoder = decoder or AnnotationDecoder(fail_fast=self.config.fail_fast)
        self.temp_dir = Path(self.config.temp_dir)

    def artifact_paths(self, page_id: str, run_id: str) -> tuple[Path, Path]:
        """Uploaded image and raw response paths for one run."""
        stem = f"{page_id}-{run_id}"
        return self.temp_dir / f"{stem}.png", self.temp_dir / f"{stem}.json"

    def run(
        self, page: Page, cancel_event: threading.Event | None = None
    ) -> StepResult:
        """Classify ``page`` and register the resulting annotations.

        Runs on the same page are serialized through the registry lock.
        """
        run_id = uuid.uuid4().hex
        registry = page.annotations
        with registry.lock:
            try:
                annotations, info = self._classify(page, run_id, cancel_event)
            except AnnotationsError as exc:
                kind = failure_kind(exc)
                logger.warning(
                    f"Annotations step failed for page {page.page_id} ({kind}): {exc}"
                )
                return StepFailure(kind=kind, error=exc, run_id=run_id)

            if self.config.replace_existing:
                registry.replace_all(annotations)
            else:
                registry.extend(annotations)

        logger.info(
            f"Page {page.page_id}: registered {len(annotations)} annotation(s)"
        )
        return StepSuccess(annotations=annotations, info=info)

    def display(self, page: Page, viewer: AnnotationViewer) -> bool:
        """Hand the page to ``viewer`` if annotations display is enabled."""
        if not self.config.display_annotations:
            return False
        viewer(page)
        return True

    def _classify(
        self, page: Page, run_id: str, cancel_event: threading.Event | None
    ) -> tuple[list[Annotation], RunInfo]:
        expected = self.config.expected_interline
        try:
            ratio = resolve_ratio(page.interline, expected)
        except ValueError as exc:
            raise NormalizationError(str(exc)) from exc

        image = self.normalizer.normalize(page.picture, expected, ratio)
        image_path, response_path = self.artifact_paths(page.page_id, run_id)
        self.normalizer.save(image, image_path)

        text = self.client.classify(image_path, response_path, cancel_event)
        annotations = self.decoder.decode(text, ratio)

        info = RunInfo(
            run_id=run_id,
            page_id=page.page_id,
            ratio=ratio,
            image_width=image.width,
            image_height=image.height,
            web_service_url=self.config.web_service_url,
        )
        return annotations, info
