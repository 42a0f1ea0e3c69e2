"""Shared pytest fixtures for symbol_annotator tests."""

import json
import threading
from pathlib import Path

import pytest
from PIL import Image

from symbol_annotator.config import AnnotationsConfig
from symbol_annotator.inference.base import BaseClassificationClient
from symbol_annotator.page import Page
from symbol_annotator.picture import PagePicture, SourceKey


class FakeClassificationClient(BaseClassificationClient):
    """Records the uploaded image and answers with a canned payload."""

    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.calls: list[Path] = []
        self.uploaded_sizes: list[tuple[int, int]] = []

    def classify(
        self,
        image_path: Path,
        response_path: Path,
        cancel_event: threading.Event | None = None,
    ) -> str:
        self.calls.append(image_path)
        with Image.open(image_path) as img:
            self.uploaded_sizes.append(img.size)
        response_path.write_text(self.answer)
        return self.answer


@pytest.fixture()
def annotations_config(tmp_path: Path) -> AnnotationsConfig:
    """Config writing artifacts under tmp_path, large target at 16px."""
    return AnnotationsConfig(
        expected_interline=10,
        large_target_interline=16,
        temp_dir=str(tmp_path / "temp"),
    )


@pytest.fixture()
def binary_page() -> Page:
    """Page with interline 20 and only an 800x600 binary buffer."""
    picture = PagePicture({SourceKey.BINARY: Image.new("1", (800, 600), 1)})
    return Page(page_id="page-1", interline=20, picture=picture)


@pytest.fixture()
def one_box_answer() -> str:
    return json.dumps(
        [{"label": "noteheadBlack", "bounds": [100, 50, 20, 10], "confidence": 0.9}]
    )


@pytest.fixture()
def tmp_corpus_dir(tmp_path: Path) -> Path:
    """Minimal labeled-sample corpus in JSONL-annotated format.

    Two subdirectories, each with annotations.jsonl rows
    {"image": ..., "suffix": <label>}.
    Labels: "clef" x 6, "flat" x 4, "sharp" x 2, "rest" x 1 (13 samples).
    """
    corpus = tmp_path / "corpus"
    counts = {"clef": 6, "flat": 4, "sharp": 2, "rest": 1}
    for sub in ("real", "synthetic"):
        sub_dir = corpus / sub
        sub_dir.mkdir(parents=True)
        lines: list[str] = []
        for label, count in counts.items():
            # real gets the first half (rounded up), synthetic the rest
            half = (count + 1) // 2
            indices = range(half) if sub == "real" else range(half, count)
            for i in indices:
                fname = f"{label}_{i:02d}.png"
                Image.new("L", (32, 32), color=i * 10).save(sub_dir / fname)
                lines.append(json.dumps({"image": fname, "suffix": label}))
        (sub_dir / "annotations.jsonl").write_text("\n".join(lines) + "\n")
    return corpus


@pytest.fixture()
def fake_client_cls() -> type[FakeClassificationClient]:
    return FakeClassificationClient
