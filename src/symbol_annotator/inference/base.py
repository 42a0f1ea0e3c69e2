"""Abstract base class for page classification clients."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from pathlib import Path


class BaseClassificationClient(ABC):
    """Base class for clients of a full-page symbol classifier.

    Subclasses submit the normalized page image and return the raw
    response text, leaving its interpretation to the decoder.
    """

    @abstractmethod
    def classify(
        self,
        image_path: Path,
        response_path: Path,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Submit ``image_path`` and wait for the classifier's answer.

        The raw answer is also written to ``response_path``.

        Raises:
            TransportError: On timeout, connection failure, non-success
                status or cancellation.
            DecodeError: If the response body is not valid text.
        """
