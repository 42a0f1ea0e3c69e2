"""Decode classifier answers into page-space annotations."""

from __future__ import annotations

from typing import Any

import orjson
from loguru import logger
from pydantic import ValidationError

from symbol_annotator.exceptions import DecodeError
from symbol_annotator.schemas.annotation import Annotation, AnnotationPayload


class AnnotationDecoder:
    """Parse the JSON array sent back by the classification service.

    Each object ``{label, bounds: [x, y, w, h], confidence}`` is validated
    and its geometry divided by the scale ratio that was applied to the
    uploaded image.

    Args:
        fail_fast: If True, the first malformed object aborts the whole
            batch.  If False, malformed objects are logged and skipped.
    """

    def __init__(self, fail_fast: bool = True) -> None:
        self.fail_fast = fail_fast

    def decode(self, text: str, ratio: float) -> list[Annotation]:
        """Return the annotations of ``text`` in page pixel space.

        Raises:
            DecodeError: If the payload is empty, not JSON, not an array, or
                (in fail-fast mode) holds a malformed object.
        """
        if ratio <= 0:
            raise ValueError(f"Scale ratio must be positive, got {ratio}")
        items = self._parse(text)

        annotations: list[Annotation] = []
        skipped = 0
        for index, item in enumerate(items):
            try:
                annotation = AnnotationPayload.model_validate(item).to_annotation(
                    ratio
                )
            except ValidationError as exc:
                if self.fail_fast:
                    raise DecodeError(
                        f"Malformed annotation at index {index}: {exc}"
                    ) from exc
                skipped += 1
                logger.warning(f"Skipping malformed annotation at index {index}: {exc}")
                continue
            annotations.append(annotation)

        if skipped:
            logger.warning(f"Skipped {skipped} of {len(items)} annotation(s)")
        return annotations

    @staticmethod
    def _parse(text: str) -> list[Any]:
        if not text.strip():
            raise DecodeError("Empty classifier response")
        try:
            data = orjson.loads(text)
        except orjson.JSONDecodeError as exc:
            raise DecodeError(f"Classifier response is not JSON: {exc}") from exc
        if not isinstance(data, list):
            raise DecodeError(
                f"Expected a JSON array of annotations, got {type(data).__name__}"
            )
        return data
