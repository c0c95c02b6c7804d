"""Scoring oracle and selection rules for learner selection."""

from functools import partial
from typing import Callable

import numpy as np
from sklearn.metrics import accuracy_score, balanced_accuracy_score, f1_score

from tsml_ensemble.exceptions import ConfigurationError

METRICS: dict[str, Callable[[np.ndarray, np.ndarray], float]] = {
    "accuracy": accuracy_score,
    "balanced_accuracy": balanced_accuracy_score,
    "f1_macro": partial(f1_score, average="macro", zero_division=0),
}


def score(metric: str, true_labels: np.ndarray, predicted_labels: np.ndarray) -> float:
    """Score predictions against true labels; higher is better."""
    if metric not in METRICS:
        raise ConfigurationError(f"Unknown metric '{metric}', expected one of {sorted(METRICS)}")
    if len(true_labels) == 0:
        raise ConfigurationError("Cannot score an empty validation set")

    return float(METRICS[metric](np.asarray(true_labels), np.asarray(predicted_labels)))


def best_mean_score(learner_partition_scores: np.ndarray) -> int:
    """Index of the learner with the highest mean score across partitions."""
    return int(np.argmax(np.mean(learner_partition_scores, axis=1)))


def best_median_score(learner_partition_scores: np.ndarray) -> int:
    """Index of the learner with the highest median score."""
    return int(np.argmax(np.median(learner_partition_scores, axis=1)))


def best_worst_case_score(learner_partition_scores: np.ndarray) -> int:
    """Index of the learner whose lowest partition score is highest."""
    return int(np.argmax(np.min(learner_partition_scores, axis=1)))


SELECTION_FUNCTIONS: dict[str, Callable[[np.ndarray], int]] = {
    "best_mean_score": best_mean_score,
    "best_median_score": best_median_score,
    "best_worst_case_score": best_worst_case_score,
}
