"""Result types returned by the annotations step to the invoking pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from symbol_annotator.exceptions import (
    AnnotationsError,
    DecodeError,
    NormalizationError,
    TransportError,
)
from symbol_annotator.schemas.annotation import Annotation
from symbol_annotator.schemas.info import RunInfo

FailureKind = Literal["normalize", "transport", "decode"]


@dataclass(frozen=True)
class StepSuccess:
    """All annotations decoded and committed to the page registry."""

    annotations: list[Annotation]
    info: RunInfo

    ok = True


@dataclass(frozen=True)
class StepFailure:
    """The run aborted; the page registry was left untouched.

    kind: which stage failed ("normalize", "transport" or "decode").
    error: the exception raised by that stage.
    """

    kind: FailureKind
    error: AnnotationsError
    run_id: str

    ok = False


StepResult = StepSuccess | StepFailure


def failure_kind(error: AnnotationsError) -> FailureKind:
    """Map an exception onto its failure kind."""
    if isinstance(error, NormalizationError):
        return "normalize"
    if isinstance(error, TransportError):
        return "transport"
    if isinstance(error, DecodeError):
        return "decode"
    raise TypeError(f"Unclassified annotations error: {type(error).__name__}")
