"""Page annotation writer using orjson."""

from __future__ import annotations

from pathlib import Path

import orjson

from symbol_annotator.registry import AnnotationRegistry
from symbol_annotator.schemas.info import RunInfo


class AnnotationWriter:
    """Write one JSON file per page with its registered annotations.

    Output files are named ``{page_id}.json`` inside ``output_dir``.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, registry: AnnotationRegistry, info: RunInfo | None = None) -> Path:
        """Write the registry content to disk. Returns the output path."""
        out_path = self.output_dir / f"{registry.page_id}.json"
        dump = {
            "page_id": registry.page_id,
            "info": info.model_dump() if info is not None else None,
            # orjson requires str dict keys; registry ids are ints
            "annotations": {
                str(annotation_id): annotation.model_dump()
                for annotation_id, annotation in registry.items()
            },
        }
        data = orjson.dumps(dump, option=orjson.OPT_INDENT_2)
        out_path.write_bytes(data)
        return out_path
