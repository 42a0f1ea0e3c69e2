"""Error hierarchy for the annotations round trip."""

from __future__ import annotations


class AnnotationsError(Exception):
    """Base class for every failure of an annotations run."""


class NormalizationError(AnnotationsError):
    """The classifier input image could not be produced or written."""


class TransportError(AnnotationsError):
    """The classification request did not yield a usable HTTP response."""


class ClassifierTimeoutError(TransportError):
    """No response within the configured deadline."""


class ClassifierConnectionError(TransportError):
    """Connection, DNS or other transport-level failure."""


class ClassifierHTTPStatusError(TransportError):
    """The service answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClassificationCancelledError(TransportError):
    """The run was cancelled before the response was fully received."""


class DecodeError(AnnotationsError):
    """The response payload is malformed or does not match the schema."""
