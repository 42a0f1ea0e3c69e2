"""Annotations entrypoint for symbol_annotator.

Usage:
    python -m symbol_annotator.annotate image=page.png interline=20
    python -m symbol_annotator.annotate image=page.png interline=20 \
        annotations.web_service_url=http://gpu-box:5000/classify
    python -m symbol_annotator.annotate image=page.png interline=20 \
        annotations.expected_interline=12 output_dir=out
"""

import sys
from pathlib import Path

import hydra
from loguru import logger
from omegaconf import DictConfig, OmegaConf

from symbol_annotator.config import AnnotationsConfig
from symbol_annotator.io.annotation import AnnotationWriter
from symbol_annotator.page import Page
from symbol_annotator.picture import PagePicture
from symbol_annotator.step import AnnotationsStep
from symbol_annotator.types import StepSuccess


def build_config(cfg: DictConfig) -> AnnotationsConfig:
    """Validate the ``annotations`` node into an AnnotationsConfig."""
    values = OmegaConf.to_container(cfg.annotations, resolve=True)
    return AnnotationsConfig(**values)  # type: ignore[arg-type]


def run(cfg: DictConfig) -> int:
    """Annotate one page image and export its annotations. Returns an exit code."""
    config = build_config(cfg)
    image_path = Path(cfg.image)
    page_id = cfg.get("page_id") or image_path.stem

    page = Page(
        page_id=page_id,
        interline=float(cfg.interline),
        picture=PagePicture.from_file(image_path),
    )
    step = AnnotationsStep(config)
    result = step.run(page)
    if not isinstance(result, StepSuccess):
        logger.error(f"Page {page_id}: {result.kind} failure, nothing exported")
        return 1

    writer = AnnotationWriter(Path(cfg.output_dir))
    out_path = writer.write(page.annotations, result.info)
    logger.info(f"Wrote {len(page.annotations)} annotation(s) to {out_path}")
    return 0


@hydra.main(version_base=None, config_path="conf", config_name="annotate")
def main(cfg: DictConfig) -> None:
    """Run the annotations step with the given Hydra config."""
    logger.remove()
    logger.add(sys.stderr, level=cfg.get("log_level", "INFO"))

    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")
    sys.exit(run(cfg))


if __name__ == "__main__":
    main()
