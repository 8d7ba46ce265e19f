from __future__ import annotations

import numpy as np

from dataset import Data
from ig_split import IgSplit, Split, entropy


class DefaultIgSplit(IgSplit):
    """Reference information gain split search.

    Rebuilds the label histograms of both partitions from scratch for every
    candidate threshold. Quadratic in the number of distinct values; used to
    validate ``OptIgSplit``.
    """

    def compute_split(self, data: Data, attr: int) -> Split:
        if data.dataset.is_numerical(attr):
            values, gains = self.threshold_gains(data, attr)
            best, best_ig = self.best_index(gains)
            return Split(attr, best_ig, float(values[best]))

        return Split(attr, self.categorical_ig(data, attr))

    @staticmethod
    def _label_counts(data: Data, mask: np.ndarray) -> np.ndarray:
        return np.bincount(data.labels[mask], minlength=data.dataset.nb_labels)

    def categorical_ig(self, data: Data, attr: int) -> float:
        size = data.size()
        if size == 0:
            return 0.0

        column = data.values(attr)
        values, _ = self.categorical_values(data, attr)

        hy = entropy(np.bincount(data.labels, minlength=data.dataset.nb_labels), size)
        hyx = 0.0
        for value in values:
            mask = column == value
            value_size = int(mask.sum())
            hyx += value_size / size * entropy(self._label_counts(data, mask), value_size)

        return hy - hyx

    def numerical_ig(self, data: Data, attr: int, split: float) -> float:
        """Information gain of partitioning ``attr`` into ``< split`` and ``>= split``."""
        size = data.size()
        if size == 0:
            return 0.0

        column = data.values(attr)
        hy = entropy(np.bincount(data.labels, minlength=data.dataset.nb_labels), size)

        less = column < split
        size_less = int(less.sum())
        size_more = size - size_less

        hyx = size_less / size * entropy(self._label_counts(data, less), size_less)
        hyx += size_more / size * entropy(self._label_counts(data, ~less), size_more)
        return hy - hyx

    def threshold_gains(self, data: Data, attr: int) -> tuple[np.ndarray, np.ndarray]:
        values = self.sorted_values(data, attr)
        gains = np.array(
            [self.numerical_ig(data, attr, float(split)) for split in values],
            dtype=np.float64,
        )
        return values, gains
