"""Per-page annotation store."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator

from loguru import logger

from symbol_annotator.schemas.annotation import Annotation

RegistryListener = Callable[["AnnotationRegistry"], None]


class AnnotationRegistry:
    """Annotations of one page, keyed by a registry-assigned integer id.

    Individual ``register`` calls do not touch the ``modified`` flag.  Batch
    operations (``replace_all`` and ``extend``) set it exactly once and notify
    listeners once, whatever the batch size.

    ``lock`` serializes runs targeting this page.
    """

    def __init__(self, page_id: str) -> None:
        self.page_id = page_id
        self.lock = threading.Lock()
        self._annotations: dict[int, Annotation] = {}
        self._last_id = 0
        self._modified = False
        self._listeners: list[RegistryListener] = []

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._annotations.values())

    def __contains__(self, annotation_id: object) -> bool:
        return annotation_id in self._annotations

    @property
    def modified(self) -> bool:
        return self._modified

    def items(self) -> list[tuple[int, Annotation]]:
        return list(self._annotations.items())

    def get(self, annotation_id: int) -> Annotation | None:
        return self._annotations.get(annotation_id)

    def register(self, annotation: Annotation) -> int:
        """Store one annotation and return its new id."""
        self._last_id += 1
        self._annotations[self._last_id] = annotation
        return self._last_id

    def clear(self) -> None:
        self._annotations.clear()

    def replace_all(self, annotations: Iterable[Annotation]) -> list[int]:
        """Drop the current content, then register the whole batch."""
        batch = list(annotations)
        previous = len(self._annotations)
        self.clear()
        ids = [self.register(annotation) for annotation in batch]
        logger.debug(
            f"Page {self.page_id}: replaced {previous} annotation(s) with {len(ids)}"
        )
        self.set_modified()
        return ids

    def extend(self, annotations: Iterable[Annotation]) -> list[int]:
        """Register the whole batch after the existing annotations."""
        ids = [self.register(annotation) for annotation in annotations]
        self.set_modified()
        return ids

    def set_modified(self) -> None:
        """Flag the registry as changed and notify listeners once."""
        self._modified = True
        for listener in self._listeners:
            listener(self)

    def clear_modified(self) -> None:
        self._modified = False

    def add_listener(self, listener: RegistryListener) -> None:
        self._listeners.append(listener)
