import numpy as np
import pytest

from dataset import AttributeType, Data, Dataset, load_data
from ig_split import Split, entropy
from opt_ig_split import OptIgSplit


def _numerical_data(values, labels, nb_labels=2):
    dataset = Dataset(attributes=[AttributeType.NUMERICAL], nb_labels=nb_labels)
    return Data(dataset, np.asarray(values, dtype=np.float64).reshape(-1, 1), labels)


def _categorical_data(values, labels, nb_labels=2):
    dataset = Dataset(attributes=[AttributeType.CATEGORICAL], nb_labels=nb_labels)
    return load_data(dataset, [[v] for v in values], labels)


def test_entropy_of_empty_partition_is_zero():
    assert entropy(np.array([], dtype=np.int64), 0) == 0.0
    assert entropy(np.array([3, 5, 1]), 0) == 0.0


def test_entropy_known_values():
    assert entropy(np.array([2, 2]), 4) == 1.0
    assert entropy(np.array([4, 0]), 4) == 0.0
    assert np.isclose(entropy(np.array([1, 1, 1, 1]), 4), 2.0)
    assert np.isclose(entropy(np.array([1, 3]), 4), 0.8112781244591328)


def test_entropy_bounds_on_random_histograms():
    rng = np.random.default_rng(5)
    for _ in range(200):
        nb_labels = int(rng.integers(1, 8))
        counts = rng.integers(0, 20, size=nb_labels)
        size = int(counts.sum())
        h = entropy(counts, size)
        assert h >= 0.0
        assert h <= np.log2(nb_labels) + 1e-12


def test_numerical_perfect_split_picks_threshold_three():
    data = _numerical_data([1, 2, 3, 4], [0, 0, 1, 1])
    split = OptIgSplit().compute_split(data, 0)

    assert split == Split(attr=0, ig=1.0, split=3.0)


def test_numerical_split_independent_of_instance_order():
    data = _numerical_data([4, 1, 3, 2], [1, 0, 1, 0])
    split = OptIgSplit().compute_split(data, 0)

    assert split.split == 3.0
    assert split.ig == 1.0


def test_numerical_single_distinct_value_has_zero_gain():
    data = _numerical_data([7.5] * 6, [0, 1, 0, 1, 1, 0])
    split = OptIgSplit().compute_split(data, 0)

    assert split.split == 7.5
    assert split.ig == 0.0


def test_numerical_duplicate_values_share_one_candidate():
    data = _numerical_data([1, 1, 2, 2, 2, 3], [0, 0, 1, 1, 1, 1])
    values, gains = OptIgSplit().threshold_gains(data, 0)

    np.testing.assert_array_equal(values, [1.0, 2.0, 3.0])
    assert gains.shape == (3,)
    split = OptIgSplit().compute_split(data, 0)
    assert split.split == 2.0
    assert np.isclose(split.ig, entropy(np.array([2, 4]), 6))


def test_numerical_ties_keep_first_threshold():
    # thresholds 2 and 4 reach the same gain; the first one wins
    data = _numerical_data([1, 2, 3, 4], [0, 1, 1, 0])
    values, gains = OptIgSplit().threshold_gains(data, 0)
    split = OptIgSplit().compute_split(data, 0)

    assert gains[1] == gains[3]
    best = int(np.flatnonzero(gains == gains.max())[0])
    assert best == 1
    assert split.split == values[best] == 2.0
    assert split.ig == gains[best]


def test_first_candidate_has_zero_gain():
    rng = np.random.default_rng(1)
    data = _numerical_data(rng.normal(size=50), rng.integers(0, 3, size=50), nb_labels=3)
    _, gains = OptIgSplit().threshold_gains(data, 0)

    assert gains[0] == 0.0


def test_numerical_split_on_empty_slice_raises():
    data = _numerical_data([], [])
    with pytest.raises(RuntimeError):
        OptIgSplit().compute_split(data, 0)


def test_categorical_perfect_split():
    data = _categorical_data(["a", "a", "b", "b"], [0, 0, 1, 1])
    split = OptIgSplit().compute_split(data, 0)

    assert split == Split(attr=0, ig=1.0)
    assert split.split is None


def test_categorical_split_is_order_independent():
    rng = np.random.default_rng(3)
    values = rng.integers(0, 5, size=60).astype(str).tolist()
    labels = rng.integers(0, 3, size=60)
    perm = rng.permutation(60)

    data = _categorical_data(values, labels, nb_labels=3)
    shuffled = data.subset(perm)

    ig = OptIgSplit().compute_split(data, 0).ig
    ig_shuffled = OptIgSplit().compute_split(shuffled, 0).ig
    assert np.isclose(ig, ig_shuffled, rtol=0.0, atol=1e-12)


def test_categorical_on_empty_slice_has_zero_gain():
    data = _categorical_data([], [])
    assert OptIgSplit().compute_split(data, 0) == Split(attr=0, ig=0.0)


def test_homogeneous_labels_have_zero_gain():
    rng = np.random.default_rng(9)
    dataset = Dataset(
        attributes=[AttributeType.NUMERICAL, AttributeType.CATEGORICAL],
        nb_labels=4,
    )
    X = np.column_stack([rng.normal(size=40), rng.integers(0, 4, size=40)])
    data = Data(dataset, X, np.full(40, 2))

    search = OptIgSplit()
    assert search.compute_split(data, 0).ig == 0.0
    assert search.compute_split(data, 1).ig == 0.0


def test_gain_is_non_negative_on_random_slices():
    rng = np.random.default_rng(21)
    dataset = Dataset(
        attributes=[AttributeType.NUMERICAL, AttributeType.CATEGORICAL],
        nb_labels=3,
    )
    search = OptIgSplit()
    for _ in range(30):
        n = int(rng.integers(1, 80))
        X = np.column_stack(
            [np.round(rng.normal(size=n), 1), rng.integers(0, 6, size=n)]
        )
        data = Data(dataset, X, rng.integers(0, 3, size=n))
        assert search.compute_split(data, 0).ig >= -1e-9
        assert search.compute_split(data, 1).ig >= -1e-9


def test_attribute_out_of_range_raises_value_error():
    data = _numerical_data([1, 2], [0, 1])
    with pytest.raises(ValueError):
        OptIgSplit().compute_split(data, 3)


def test_input_slice_is_not_modified():
    data = _numerical_data([3, 1, 2, 1], [1, 0, 1, 0])
    before_values = data.values(0).copy()
    before_labels = data.labels.copy()

    OptIgSplit().compute_split(data, 0)

    np.testing.assert_array_equal(data.values(0), before_values)
    np.testing.assert_array_equal(data.labels, before_labels)
