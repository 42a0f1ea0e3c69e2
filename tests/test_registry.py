"""Tests for AnnotationRegistry."""

from __future__ import annotations

from unittest.mock import MagicMock

from symbol_annotator.registry import AnnotationRegistry
from symbol_annotator.schemas.annotation import Annotation, BoundingBox


def _annotation(label: str, x: float = 0.0) -> Annotation:
    return Annotation(
        label=label,
        bounds=BoundingBox(x=x, y=0, width=1, height=1),
        confidence=0.5,
    )


class TestAnnotationRegistry:
    def test_register_assigns_unique_ids(self) -> None:
        registry = AnnotationRegistry("p1")
        ids = [registry.register(_annotation(str(i))) for i in range(5)]
        assert len(set(ids)) == 5
        assert len(registry) == 5

    def test_register_does_not_flag_modified(self) -> None:
        registry = AnnotationRegistry("p1")
        registry.register(_annotation("a"))
        assert registry.modified is False

    def test_replace_all_notifies_once(self) -> None:
        registry = AnnotationRegistry("p1")
        listener = MagicMock()
        registry.add_listener(listener)
        registry.replace_all([_annotation(str(i)) for i in range(10)])
        assert registry.modified is True
        listener.assert_called_once_with(registry)

    def test_replace_all_drops_previous_batch(self) -> None:
        registry = AnnotationRegistry("p1")
        registry.replace_all([_annotation("a"), _annotation("b")])
        registry.replace_all([_annotation("c")])
        assert [a.label for a in registry] == ["c"]

    def test_ids_stay_unique_across_batches(self) -> None:
        registry = AnnotationRegistry("p1")
        first = registry.replace_all([_annotation("a")])
        second = registry.replace_all([_annotation("b")])
        assert set(first).isdisjoint(second)

    def test_extend_appends(self) -> None:
        registry = AnnotationRegistry("p1")
        listener = MagicMock()
        registry.add_listener(listener)
        registry.extend([_annotation("a")])
        registry.extend([_annotation("b"), _annotation("c")])
        assert [a.label for a in registry] == ["a", "b", "c"]
        assert listener.call_count == 2

    def test_get_and_contains(self) -> None:
        registry = AnnotationRegistry("p1")
        (annotation_id,) = registry.replace_all([_annotation("a")])
        assert annotation_id in registry
        assert registry.get(annotation_id) == _annotation("a")
        assert registry.get(annotation_id + 1) is None

    def test_clear_modified(self) -> None:
        registry = AnnotationRegistry("p1")
        registry.replace_all([])
        registry.clear_modified()
        assert registry.modified is False

    def test_lock_is_exclusive(self) -> None:
        registry = AnnotationRegistry("p1")
        with registry.lock:
            assert registry.lock.acquire(blocking=False) is False
        assert registry.lock.acquire(blocking=False) is True
        registry.lock.release()
