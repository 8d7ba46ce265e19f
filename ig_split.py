from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from dataset import Data


@dataclass(frozen=True)
class Split:
    attr: int
    ig: float
    split: float | None = None  # threshold, numerical attributes only


def entropy(counts: np.ndarray, data_size: int) -> float:
    """Shannon entropy in bits of a label histogram.

    ``counts[i]`` is the number of instances with label ``i`` and ``data_size``
    their total. An empty partition has entropy 0.
    """
    if data_size == 0:
        return 0.0

    counts = np.asarray(counts, dtype=np.float64)
    # zero counts are skipped, otherwise we get a NaN
    p = counts[counts > 0] / float(data_size)
    return float(-(p * np.log2(p)).sum())


class IgSplit(ABC):
    """Computes the best split of one attribute using the information gain."""

    @abstractmethod
    def compute_split(self, data: Data, attr: int) -> Split:
        ...

    @abstractmethod
    def threshold_gains(self, data: Data, attr: int) -> tuple[np.ndarray, np.ndarray]:
        """Return the candidate thresholds of a numerical attribute and their gains."""
        ...

    @staticmethod
    def sorted_values(data: Data, attr: int) -> np.ndarray:
        """Distinct values of ``attr`` in ascending order."""
        return np.unique(data.values(attr))

    @staticmethod
    def categorical_values(data: Data, attr: int) -> tuple[np.ndarray, np.ndarray]:
        """Distinct values of ``attr`` in first-seen order.

        Also returns, for every instance, the index of its value in that array.
        Equal values always share one index.
        """
        column = data.values(attr)
        uniques, first_seen, inverse = np.unique(
            column, return_index=True, return_inverse=True
        )
        order = np.argsort(first_seen, kind="stable")
        rank = np.empty_like(order)
        rank[order] = np.arange(order.size)
        return uniques[order], rank[inverse.reshape(-1)]

    @staticmethod
    def best_index(gains: np.ndarray) -> tuple[int, float]:
        """First index holding the largest gain."""
        best = -1
        best_ig = -1.0
        for index, ig in enumerate(gains):
            if ig > best_ig:
                best_ig = float(ig)
                best = index

        if best == -1:
            raise RuntimeError("no best split found !")
        return best, best_ig
