"""Load labeled samples from JSONL annotation files."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from symbol_annotator.schemas.sample import Sample


def load_samples(root: Path) -> list[Sample]:
    """Collect samples from every ``annotations.jsonl`` under ``root``.

    Each row is ``{"image": <file name>, "suffix": <label>}``; image paths
    are resolved relative to the annotation file.  Sample ids are
    ``<relative jsonl dir>/<image>#<row>`` so duplicated images stay distinct.

    Args:
        root: Directory to search recursively.

    Returns:
        Samples in file then row order.
    """
    samples: list[Sample] = []
    ann_files = sorted(p for p in root.rglob("annotations.jsonl") if p.is_file())
    for ann_path in ann_files:
        ann_dir = ann_path.parent
        prefix = ann_dir.relative_to(root).as_posix()
        with open(ann_path) as f:
            for row, line in enumerate(f):
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                image = record["image"]
                samples.append(
                    Sample(
                        sample_id=f"{prefix}/{image}#{row}",
                        label=record["suffix"],
                        image_path=str(ann_dir / image),
                    )
                )
    logger.debug(
        f"Loaded {len(samples)} sample(s) from {len(ann_files)} file(s) under {root}"
    )
    return samples
