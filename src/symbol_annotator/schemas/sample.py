"""Labeled sample schema."""

from __future__ import annotations

from pydantic import BaseModel


class Sample(BaseModel, frozen=True):
    """One labeled exemplar of the training corpus."""

    sample_id: str
    label: str
    image_path: str
