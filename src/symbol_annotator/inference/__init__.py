"""Clients of the remote classification service."""

from symbol_annotator.inference.base import BaseClassificationClient
from symbol_annotator.inference.http_client import HttpClassificationClient

__all__ = [
    "BaseClassificationClient",
    "HttpClassificationClient",
]
