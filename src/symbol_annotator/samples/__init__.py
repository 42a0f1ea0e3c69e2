"""Labeled-sample sources for classifier training and evaluation."""

from symbol_annotator.samples.corpus import load_samples
from symbol_annotator.samples.source import (
    ConstantSource,
    RandomSplitSource,
    SampleSource,
    SplitConfig,
    StratifiedSplitSource,
    build_sample_source,
)

__all__ = [
    "ConstantSource",
    "RandomSplitSource",
    "SampleSource",
    "SplitConfig",
    "StratifiedSplitSource",
    "build_sample_source",
    "load_samples",
]
