"""Run metadata schema."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class RunInfo(BaseModel):
    """Context of one annotations run, attached to exported annotation files."""

    run_id: str
    page_id: str
    ratio: float
    image_width: int | None = None
    image_height: int | None = None
    web_service_url: str | None = None
    created_at: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())
