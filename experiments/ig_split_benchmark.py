import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

# Allow running as: python experiments/ig_split_benchmark.py
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dataset import AttributeType, Data, Dataset
from split_evaluator import SplitEvaluator, SplitEvaluatorParams


def make_synthetic(
    n_samples: int,
    n_numerical: int,
    n_categorical: int,
    n_categories: int,
    nb_labels: int,
    distinct_values: int | None,
    random_state: int,
) -> Data:
    rng = np.random.default_rng(random_state)

    X_num = rng.normal(size=(n_samples, n_numerical))
    if distinct_values is not None and distinct_values > 0:
        X_num = np.round(X_num * distinct_values / 6.0) / (distinct_values / 6.0)
    X_cat = rng.integers(0, n_categories, size=(n_samples, n_categorical)).astype(np.float64)

    w = rng.normal(size=n_numerical)
    score = X_num @ w if n_numerical > 0 else np.zeros(n_samples)
    if n_categorical > 0:
        score = score + 0.5 * (X_cat[:, 0] - n_categories / 2.0)
    score = score + 0.5 * rng.normal(size=n_samples)

    edges = np.quantile(score, np.linspace(0.0, 1.0, nb_labels + 1)[1:-1])
    y = np.searchsorted(edges, score, side="right")

    dataset = Dataset(
        attributes=[AttributeType.NUMERICAL] * n_numerical
        + [AttributeType.CATEGORICAL] * n_categorical,
        nb_labels=nb_labels,
    )
    return Data(dataset, np.hstack([X_num, X_cat]), y)


def evaluate_one(data: Data, split_search: str, compare: bool):
    params = SplitEvaluatorParams(
        split_search=split_search,
        validation_mode="compare" if compare else "off",
    )
    evaluator = SplitEvaluator(params)

    splits = []
    t0 = time.perf_counter()
    for attr in range(data.dataset.nb_attributes):
        splits.append(evaluator.compute_split(data, attr))
    total_time = time.perf_counter() - t0

    return {
        "total_time_sec": total_time,
        "split_time_sec": evaluator.metrics.time_spent_sec,
        "splits": splits,
        "compare_checked": evaluator.metrics.compare_checked,
        "compare_mismatches": evaluator.metrics.compare_mismatches,
    }


def best_attribute(splits):
    best = max(splits, key=lambda s: s.ig)
    return best.attr, best.ig, best.split


def main():
    parser = argparse.ArgumentParser(description="Time optimized vs default information gain split search")
    parser.add_argument("--n-samples", type=int, default=2000)
    parser.add_argument("--n-numerical", type=int, default=8)
    parser.add_argument("--n-categorical", type=int, default=4)
    parser.add_argument("--n-categories", type=int, default=6)
    parser.add_argument("--nb-labels", type=int, default=3)
    parser.add_argument(
        "--distinct-values",
        type=int,
        default=0,
        help="Round numerical features to about this many distinct values; <=0 keeps them continuous",
    )
    parser.add_argument("--random-state", type=int, default=42)
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Check every optimized split against the default split search",
    )
    parser.add_argument(
        "--default",
        action="store_true",
        help="Also time the default split search (slower)",
    )
    parser.add_argument("--verbose", action="store_true")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    data = make_synthetic(
        n_samples=args.n_samples,
        n_numerical=args.n_numerical,
        n_categorical=args.n_categorical,
        n_categories=args.n_categories,
        nb_labels=args.nb_labels,
        distinct_values=args.distinct_values,
        random_state=args.random_state,
    )
    print(
        f"Synthetic data n={data.size()} numerical={args.n_numerical}"
        f" categorical={args.n_categorical} labels={args.nb_labels}"
    )

    opt_out = evaluate_one(data, split_search="optimized", compare=args.compare)
    attr, ig, split = best_attribute(opt_out["splits"])
    print(
        "OptIgSplit"
        f" time={opt_out['total_time_sec']:.3f}s"
        f" split_time={opt_out['split_time_sec']:.3f}s"
        f" best_attr={attr} ig={ig:.6f} split={split}"
    )
    if args.compare:
        print(
            "  compare"
            f" checked={opt_out['compare_checked']}"
            f" mismatches={opt_out['compare_mismatches']}"
        )

    if args.default:
        default_out = evaluate_one(data, split_search="default", compare=False)
        attr, ig, split = best_attribute(default_out["splits"])
        print(
            "DefaultIgSplit"
            f" time={default_out['total_time_sec']:.3f}s"
            f" split_time={default_out['split_time_sec']:.3f}s"
            f" best_attr={attr} ig={ig:.6f} split={split}"
        )
        speedup = default_out["split_time_sec"] / max(opt_out["split_time_sec"], 1e-12)
        print(f"  speedup={speedup:.1f}x")


if __name__ == "__main__":
    main()
