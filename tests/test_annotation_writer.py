"""Tests for AnnotationWriter."""

from __future__ import annotations

import json
from pathlib import Path

from symbol_annotator.io.annotation import AnnotationWriter
from symbol_annotator.registry import AnnotationRegistry
from symbol_annotator.schemas.annotation import Annotation, BoundingBox
from symbol_annotator.schemas.info import RunInfo


def _make_registry(page_id: str = "page-1") -> AnnotationRegistry:
    registry = AnnotationRegistry(page_id)
    registry.replace_all(
        [
            Annotation(
                label="gClef",
                bounds=BoundingBox(x=200, y=100, width=40, height=20),
                confidence=0.95,
            )
        ]
    )
    return registry


class TestAnnotationWriter:
    def test_write_creates_file(self, tmp_path: Path) -> None:
        writer = AnnotationWriter(tmp_path / "out")
        out_path = writer.write(_make_registry())
        assert out_path.exists()
        assert out_path.name == "page-1.json"

    def test_write_valid_json(self, tmp_path: Path) -> None:
        writer = AnnotationWriter(tmp_path / "out")
        info = RunInfo(run_id="abc", page_id="page-1", ratio=0.5)
        out_path = writer.write(_make_registry(), info)
        data = json.loads(out_path.read_text())
        assert data["page_id"] == "page-1"
        assert data["info"]["ratio"] == 0.5
        assert data["annotations"]["1"]["label"] == "gClef"
        assert data["annotations"]["1"]["bounds"] == {
            "x": 200.0,
            "y": 100.0,
            "width": 40.0,
            "height": 20.0,
        }

    def test_write_without_info(self, tmp_path: Path) -> None:
        writer = AnnotationWriter(tmp_path / "out")
        data = json.loads(writer.write(_make_registry()).read_text())
        assert data["info"] is None

    def test_write_creates_output_dir(self, tmp_path: Path) -> None:
        deep_dir = tmp_path / "a" / "b" / "c"
        out_path = AnnotationWriter(deep_dir).write(_make_registry())
        assert out_path.exists()

    def test_write_multiple(self, tmp_path: Path) -> None:
        writer = AnnotationWriter(tmp_path / "out")
        writer.write(_make_registry("a"))
        writer.write(_make_registry("b"))
        names = {f.stem for f in (tmp_path / "out").glob("*.json")}
        assert names == {"a", "b"}
