from __future__ import annotations

from dataclasses import dataclass
import logging
import time

import numpy as np

from dataset import Data
from default_ig_split import DefaultIgSplit
from ig_split import IgSplit, Split
from opt_ig_split import OptIgSplit


logger = logging.getLogger(__name__)


@dataclass
class SplitEvaluatorMetrics:
    splits_computed: int = 0
    numerical_splits: int = 0
    categorical_splits: int = 0
    compare_checked: int = 0
    compare_mismatches: int = 0
    time_spent_sec: float = 0.0


@dataclass
class SplitEvaluatorParams:
    split_search: str = "optimized"  # one of: optimized, default
    validation_mode: str = "off"  # one of: off, compare
    compare_every_n_splits: int = 1
    compare_atol: float = 1e-9

    def __post_init__(self) -> None:
        if self.split_search not in {"optimized", "default"}:
            raise ValueError("split_search must be one of: optimized, default")
        if self.validation_mode not in {"off", "compare"}:
            raise ValueError("validation_mode must be one of: off, compare")
        if self.compare_every_n_splits <= 0:
            raise ValueError("compare_every_n_splits must be positive")
        if self.compare_atol < 0.0:
            raise ValueError("compare_atol must be >= 0")


class SplitEvaluator:
    """Entry point used by tree builders to score one attribute at one node.

    Runs the configured strategy and, in ``compare`` mode, periodically checks
    it against the other one. Metrics accumulate across calls, so concurrent
    callers should each own an evaluator.
    """

    def __init__(self, params: SplitEvaluatorParams | None = None) -> None:
        self.params = params or SplitEvaluatorParams()
        self.metrics = SplitEvaluatorMetrics()

        if self.params.split_search == "optimized":
            self._search: IgSplit = OptIgSplit()
            self._reference: IgSplit = DefaultIgSplit()
        else:
            self._search = DefaultIgSplit()
            self._reference = OptIgSplit()

    def _splits_match(self, split: Split, other: Split) -> bool:
        if (split.split is None) != (other.split is None):
            return False
        # equal gains at different thresholds are ties, not mismatches
        return bool(np.isclose(split.ig, other.ig, rtol=0.0, atol=self.params.compare_atol))

    def compute_split(self, data: Data, attr: int) -> Split:
        start = time.perf_counter()
        numerical = data.dataset.is_numerical(attr)
        split = self._search.compute_split(data, attr)
        self.metrics.time_spent_sec += time.perf_counter() - start

        self.metrics.splits_computed += 1
        if numerical:
            self.metrics.numerical_splits += 1
        else:
            self.metrics.categorical_splits += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "attr=%d numerical=%s size=%d ig=%.6f split=%s",
                attr,
                numerical,
                data.size(),
                split.ig,
                split.split,
            )

        if (
            self.params.validation_mode == "compare"
            and self.metrics.splits_computed % self.params.compare_every_n_splits == 0
        ):
            self.metrics.compare_checked += 1
            reference = self._reference.compute_split(data, attr)
            if not self._splits_match(split, reference):
                self.metrics.compare_mismatches += 1
                logger.warning(
                    "split mismatch on attr=%d: %s ig=%.12f split=%s, reference ig=%.12f split=%s",
                    attr,
                    self.params.split_search,
                    split.ig,
                    split.split,
                    reference.ig,
                    reference.split,
                )

        return split
