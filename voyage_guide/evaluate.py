"""
voyage_guide/evaluate.py

Scores both fixed predictors against the ground-truth Survived flag of the
whole engineered dataset.

Metrics follow the positive class (1 = survived). A ratio with an empty
denominator is reported as NaN rather than 0 or an error:
  - precision when a model never predicts survival
  - recall when nobody in the data survived
  - F1 when precision or recall is NaN, or both are 0
The dashboard shows NaN as "n/a".

Run
---
python -m voyage_guide.evaluate --n-passengers 100 --random-state 42
"""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, precision_score, recall_score

from voyage_guide.features import engineer_features
from voyage_guide.inference import MODELS, SurvivalPredictor, score
from voyage_guide.make_synthetic_data import DEFAULT_N_PASSENGERS, load_dataset
from voyage_guide.records import EngineeredPassenger


logger = logging.getLogger(__name__)

METRIC_NAMES = ["accuracy", "precision", "recall", "f1"]


@dataclass(frozen=True)
class ClassificationMetrics:
    accuracy: float
    precision: float
    recall: float
    f1: float
    tn: int
    fp: int
    fn: int
    tp: int

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in METRIC_NAMES}


def f1_from(precision: float, recall: float) -> float:
    """Harmonic mean of precision and recall; NaN when it is undefined."""
    if math.isnan(precision) or math.isnan(recall) or precision + recall == 0:
        return float("nan")
    return 2 * precision * recall / (precision + recall)


def compute_classification_metrics(
    y_true: Sequence[int], y_pred: Sequence[int]
) -> ClassificationMetrics:
    """Accuracy, precision, recall, F1 and confusion counts for 0/1 labels."""
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)

    if y_true.size == 0:
        nan = float("nan")
        return ClassificationMetrics(nan, nan, nan, nan, tn=0, fp=0, fn=0, tp=0)

    cm = confusion_matrix(y_true, y_pred, labels=[0, 1])

    # undefined ratios come back as NaN
    precision = float(precision_score(y_true, y_pred, zero_division=np.nan))
    recall = float(recall_score(y_true, y_pred, zero_division=np.nan))

    return ClassificationMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        precision=precision,
        recall=recall,
        f1=f1_from(precision, recall),
        tn=int(cm[0, 0]),
        fp=int(cm[0, 1]),
        fn=int(cm[1, 0]),
        tp=int(cm[1, 1]),
    )


def evaluate_models(
    engineered: Iterable[EngineeredPassenger],
    models: Mapping[str, SurvivalPredictor] = MODELS,
) -> Dict[str, ClassificationMetrics]:
    """Run every model over the dataset and compare with the actual outcome."""
    engineered = list(engineered)
    y_true = [p.survived for p in engineered]

    results = {}
    for key, model in models.items():
        y_pred = score(engineered, model)
        results[key] = compute_classification_metrics(y_true, y_pred.to_numpy())
        logger.debug("%s: %s", model.name, results[key])
    return results


def metrics_table(
    results: Mapping[str, ClassificationMetrics],
    models: Mapping[str, SurvivalPredictor] = MODELS,
) -> pd.DataFrame:
    """One row per metric, one column per model (display names where known)."""
    columns = {
        (models[key].name if key in models else key): metrics.as_dict()
        for key, metrics in results.items()
    }
    return pd.DataFrame(columns).reindex(METRIC_NAMES)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate the fixed survival predictors.")
    parser.add_argument(
        "--n-passengers",
        type=int,
        default=DEFAULT_N_PASSENGERS,
        help="Total number of passengers to generate (seed records included).",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=42,
        help="Random seed for reproducibility.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    args = parser.parse_args(argv)
    if args.n_passengers < 1:
        parser.error("--n-passengers must be at least 1")
    return args


def _fmt(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.3f}"


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    snapshot = load_dataset(args.n_passengers, args.random_state, delay_seconds=0)
    results = evaluate_models(engineer_features(snapshot))

    print(f"Evaluated {len(snapshot)} passengers.")
    for key, m in results.items():
        print(
            f"{MODELS[key].name:<18} Accuracy={_fmt(m.accuracy)} Precision={_fmt(m.precision)} "
            f"Recall={_fmt(m.recall)} F1={_fmt(m.f1)} | TN={m.tn} FP={m.fp} FN={m.fn} TP={m.tp}"
        )


if __name__ == "__main__":
    main()
