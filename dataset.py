from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

import numpy as np


class AttributeType(Enum):
    NUMERICAL = "N"
    CATEGORICAL = "C"


@dataclass
class Dataset:
    """Attribute typing and label domain shared by every slice of a training set.

    ``values`` holds, per categorical attribute, the tokens seen while loading;
    a token's position in that list is the float code stored in the data.
    ``labels`` optionally holds the label tokens in code order.
    """

    attributes: list[AttributeType]
    nb_labels: int
    values: dict[int, list[str]] = field(default_factory=dict)
    labels: list[str] | None = None

    def __post_init__(self) -> None:
        self.attributes = [AttributeType(a) for a in self.attributes]
        if len(self.attributes) == 0:
            raise ValueError("dataset must have at least one attribute")
        if self.nb_labels <= 0:
            raise ValueError("nb_labels must be positive")
        if self.labels is not None and len(self.labels) != self.nb_labels:
            raise ValueError("labels length must match nb_labels")
        for attr in self.values:
            if self.is_numerical(attr):
                raise ValueError(f"attribute {attr} is numerical and cannot hold categorical values")

    @classmethod
    def from_descriptor(cls, descriptor: str, nb_labels: int) -> "Dataset":
        """Build a dataset from a space separated descriptor such as ``"N C N"``.

        ``N`` marks a numerical attribute and ``C`` a categorical one.
        """
        tokens = descriptor.split()
        attributes = []
        for token in tokens:
            try:
                attributes.append(AttributeType(token.upper()))
            except ValueError as e:
                raise ValueError(f"Unsupported attribute token '{token}' in descriptor") from e
        return cls(attributes=attributes, nb_labels=nb_labels)

    @property
    def nb_attributes(self) -> int:
        return len(self.attributes)

    def check_attribute(self, attr: int) -> None:
        if not (0 <= attr < len(self.attributes)):
            raise ValueError(
                f"attribute index {attr} out of range for {len(self.attributes)} attributes"
            )

    def is_numerical(self, attr: int) -> bool:
        self.check_attribute(attr)
        return self.attributes[attr] is AttributeType.NUMERICAL

    def encode_value(self, attr: int, token: str) -> float:
        """Return the float code of a categorical token, registering unseen tokens."""
        if self.is_numerical(attr):
            raise ValueError(f"attribute {attr} is numerical")
        known = self.values.setdefault(attr, [])
        if token not in known:
            known.append(token)
        return float(known.index(token))

    def decode_value(self, attr: int, code: float) -> str:
        if self.is_numerical(attr):
            raise ValueError(f"attribute {attr} is numerical")
        return self.values[attr][int(code)]

    def encode_label(self, token: str) -> int:
        if self.labels is None:
            raise ValueError("dataset has no label tokens")
        try:
            return self.labels.index(token)
        except ValueError as e:
            raise ValueError(f"Unknown label '{token}'") from e


@dataclass(frozen=True, eq=False)
class Instance:
    values: np.ndarray
    label: int

    def get(self, attr: int) -> float:
        if not (0 <= attr < self.values.size):
            raise ValueError(f"attribute index {attr} out of range for {self.values.size} attributes")
        return float(self.values[attr])


class Data:
    """Read-only slice of labeled instances backed by a dense float matrix."""

    def __init__(self, dataset: Dataset, X: np.ndarray, y: np.ndarray) -> None:
        X = np.array(X, dtype=np.float64)
        y = np.asarray(y)
        if X.ndim == 1 and X.size == 0:
            X = X.reshape(0, dataset.nb_attributes)
        if X.ndim != 2:
            raise ValueError("X must be a 2D array")
        if X.shape[1] != dataset.nb_attributes:
            raise ValueError("X columns must match the number of dataset attributes")
        if y.ndim != 1 or y.shape[0] != X.shape[0]:
            raise ValueError("y must be a 1D array with the same number of rows as X")
        if y.size > 0:
            if not np.all(np.equal(np.mod(y, 1), 0)):
                raise ValueError("labels must be integers")
            if y.min() < 0 or y.max() >= dataset.nb_labels:
                raise ValueError(f"labels must be in [0, {dataset.nb_labels})")

        self.dataset = dataset
        self._X = X
        self._y = y.astype(np.int64)
        self._X.setflags(write=False)
        self._y.setflags(write=False)

    def size(self) -> int:
        return int(self._y.size)

    def __len__(self) -> int:
        return self.size()

    def is_empty(self) -> bool:
        return self._y.size == 0

    def get(self, index: int) -> Instance:
        return Instance(values=self._X[index], label=int(self._y[index]))

    def __iter__(self):
        for index in range(self.size()):
            yield self.get(index)

    def values(self, attr: int) -> np.ndarray:
        """All values of ``attr`` in instance order."""
        self.dataset.check_attribute(attr)
        return self._X[:, attr]

    @property
    def labels(self) -> np.ndarray:
        return self._y

    def subset(self, rows: Sequence[int] | np.ndarray) -> "Data":
        rows = np.asarray(rows)
        if rows.dtype == bool:
            if rows.shape != self._y.shape:
                raise ValueError("boolean row mask must match the slice size")
            rows = np.flatnonzero(rows)
        rows = rows.astype(np.int64)
        return Data(self.dataset, self._X[rows], self._y[rows])


def load_data(
    dataset: Dataset,
    records: Iterable[Sequence[str | float]],
    labels: Iterable[str | int],
) -> Data:
    """Encode raw records into a ``Data`` slice.

    Numerical fields are converted with ``float``; categorical tokens are
    encoded through ``dataset.encode_value``. String labels are encoded through
    ``dataset.labels``, integer labels are kept as is.
    """
    rows: list[list[float]] = []
    for record in records:
        if len(record) != dataset.nb_attributes:
            raise ValueError(
                f"record has {len(record)} fields, expected {dataset.nb_attributes}"
            )
        row = []
        for attr, field_value in enumerate(record):
            if dataset.is_numerical(attr):
                row.append(float(field_value))
            else:
                row.append(dataset.encode_value(attr, str(field_value)))
        rows.append(row)

    y = [dataset.encode_label(lbl) if isinstance(lbl, str) else int(lbl) for lbl in labels]

    X = np.asarray(rows, dtype=np.float64).reshape(len(rows), dataset.nb_attributes)
    return Data(dataset, X, np.asarray(y, dtype=np.int64))
