"""Page-level symbol annotation through a remote classification service."""

__version__ = "0.0.1"
