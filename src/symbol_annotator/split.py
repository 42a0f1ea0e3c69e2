"""Split a labeled-sample corpus into train and test lists.

Usage:
    python -m symbol_annotator.split corpus_root=data/samples
    python -m symbol_annotator.split corpus_root=data/samples \
        samples.strategy=random-split
"""

import sys
from pathlib import Path

import hydra
import orjson
from loguru import logger
from omegaconf import DictConfig, OmegaConf

from symbol_annotator.samples.corpus import load_samples
from symbol_annotator.samples.source import SplitConfig, build_sample_source
from symbol_annotator.schemas.sample import Sample


def write_jsonl(samples: list[Sample], path: Path) -> Path:
    """Write one sample per line. Returns the output path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [orjson.dumps(sample.model_dump()) for sample in samples]
    path.write_bytes(b"".join(line + b"\n" for line in lines))
    return path


def run(cfg: DictConfig) -> tuple[Path, Path]:
    """Split the corpus and write ``train.jsonl`` / ``test.jsonl``."""
    values = OmegaConf.to_container(cfg.samples, resolve=True)
    split_config = SplitConfig(**values)  # type: ignore[arg-type]
    samples = load_samples(Path(cfg.corpus_root))
    source = build_sample_source(split_config, samples)

    output_dir = Path(cfg.output_dir)
    train_path = write_jsonl(source.train_samples(), output_dir / "train.jsonl")
    test_path = write_jsonl(source.test_samples(), output_dir / "test.jsonl")
    logger.info(
        f"{split_config.strategy}: {len(source.train_samples())} train, "
        f"{len(source.test_samples())} test sample(s) written to {output_dir}"
    )
    return train_path, test_path


@hydra.main(version_base=None, config_path="conf", config_name="split")
def main(cfg: DictConfig) -> None:
    """Run the corpus split with the given Hydra config."""
    logger.remove()
    logger.add(sys.stderr, level=cfg.get("log_level", "INFO"))
    run(cfg)


if __name__ == "__main__":
    main()
