"""Partition a labeled-sample corpus into training and evaluation subsets."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Sequence
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field

from symbol_annotator.schemas.sample import Sample

SplitStrategy = Literal["same-set", "random-split", "stratified-split"]


class SampleSource(ABC):
    """Source of samples for training and for testing."""

    @abstractmethod
    def train_samples(self) -> list[Sample]:
        """Samples to train on."""

    @abstractmethod
    def test_samples(self) -> list[Sample]:
        """Samples to evaluate on."""


class ConstantSource(SampleSource):
    """Same collection for both roles.

    Train and test overlap completely, so this is only good for smoke
    testing a training pipeline, never for measuring accuracy.
    """

    def __init__(self, samples: list[Sample]) -> None:
        self.samples = samples

    def train_samples(self) -> list[Sample]:
        return self.samples

    def test_samples(self) -> list[Sample]:
        return self.samples


class RandomSplitSource(SampleSource):
    """Disjoint split of a seeded shuffle of the corpus.

    Args:
        samples: Whole corpus.
        test_fraction: Share of samples held out for testing, in (0, 1).
        seed: Seed of the shuffle, so that splits are reproducible.
    """

    def __init__(
        self, samples: Sequence[Sample], test_fraction: float = 0.2, seed: int = 42
    ) -> None:
        _check_fraction(test_fraction)
        shuffled = list(samples)
        random.Random(seed).shuffle(shuffled)
        n_test = _held_out(len(shuffled), test_fraction)
        self._test = shuffled[:n_test]
        self._train = shuffled[n_test:]
        logger.debug(
            f"Random split: {len(self._train)} train / {len(self._test)} test"
        )

    def train_samples(self) -> list[Sample]:
        return self._train

    def test_samples(self) -> list[Sample]:
        return self._test


class StratifiedSplitSource(SampleSource):
    """Disjoint split that preserves label proportions.

    Each label is split separately.  A label with at least two samples
    always contributes at least one to each side; a singleton label goes to
    training.

    Args:
        samples: Whole corpus.
        test_fraction: Share of each label held out for testing, in (0, 1).
        seed: Seed of the per-label shuffles.
    """

    def __init__(
        self, samples: Sequence[Sample], test_fraction: float = 0.2, seed: int = 42
    ) -> None:
        _check_fraction(test_fraction)
        rng = random.Random(seed)
        by_label: dict[str, list[Sample]] = defaultdict(list)
        for sample in samples:
            by_label[sample.label].append(sample)

        self._train: list[Sample] = []
        self._test: list[Sample] = []
        for label in sorted(by_label):
            group = by_label[label]
            rng.shuffle(group)
            n_test = _held_out(len(group), test_fraction) if len(group) > 1 else 0
            self._test.extend(group[:n_test])
            self._train.extend(group[n_test:])
        logger.debug(
            f"Stratified split over {len(by_label)} label(s): "
            f"{len(self._train)} train / {len(self._test)} test"
        )

    def train_samples(self) -> list[Sample]:
        return self._train

    def test_samples(self) -> list[Sample]:
        return self._test


class SplitConfig(BaseModel, frozen=True):
    """Configuration of the train/test split.

    Strategies:
        same-set: Both roles get the whole corpus (smoke tests only).
        random-split: Seeded shuffle, disjoint subsets.
        stratified-split: Per-label seeded shuffle, disjoint subsets.
    """

    strategy: SplitStrategy = "stratified-split"
    test_fraction: float = Field(default=0.2, gt=0.0, lt=1.0)
    seed: int = 42


def build_sample_source(config: SplitConfig, samples: list[Sample]) -> SampleSource:
    """Factory: build the sample source named by ``config.strategy``."""
    if config.strategy == "same-set":
        logger.warning(
            "same-set split: train and test samples are identical, "
            "accuracy figures will be meaningless"
        )
        return ConstantSource(samples)
    if config.strategy == "random-split":
        return RandomSplitSource(samples, config.test_fraction, config.seed)
    if config.strategy == "stratified-split":
        return StratifiedSplitSource(samples, config.test_fraction, config.seed)
    raise ValueError(f"Unknown split strategy: {config.strategy}")


def _check_fraction(test_fraction: float) -> None:
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")


def _held_out(count: int, test_fraction: float) -> int:
    """Number of test samples out of ``count``, leaving at least one to train."""
    if count < 2:
        return 0
    return min(max(1, math.floor(count * test_fraction)), count - 1)
