"""
Best learner selection with optional grid search.
"""

from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, Callable, Mapping

import numpy as np
import polars as pl

from tsml_ensemble.exceptions import ConfigurationError
from tsml_ensemble.models.architectures.sklearn_learners import default_learners
from tsml_ensemble.models.base import (
    Learner,
    LearnerConfig,
    check_fit_inputs,
    fit_learner,
    to_array,
    transform_learner,
    validate_learners,
    validate_n_jobs,
)
from tsml_ensemble.training.cross_validation import (
    KFoldPartitionGenerator,
    RandomState,
    fresh_random_state,
    validate_partitions,
)
from tsml_ensemble.training.grid_search import expand_learners
from tsml_ensemble.training.scoring import METRICS, best_mean_score, score
from tsml_ensemble.utils.logging import log_failed_stage
from tsml_ensemble.utils.parallel import run_tasks

DEFAULT_NUM_FOLDS = 5


@dataclass(frozen=True)
class BestLearnerConfig(LearnerConfig):
    """Configuration for cross-validated learner selection."""
    name: str = "best_learner"
    # Candidate learners
    learners: list[Learner] = field(default_factory=default_learners)
    # (instances, labels) -> list of training index arrays; None means
    # shuffled 5-fold seeded with random_state
    partition_generator: Callable[[np.ndarray, np.ndarray], list] | None = None
    # (learner x partition score matrix) -> index of the best learner
    selection_function: Callable[[np.ndarray], int] = best_mean_score
    # (metric, true_labels, predicted_labels) -> score, higher is better
    score_function: Callable[[str, np.ndarray, np.ndarray], float] = score
    metric: str = "accuracy"
    # dtype of the learner x partition score matrix
    score_type: type = float
    # One options grid per learner (or None to keep it as is); each grid
    # mirrors the learner's options with a list of values per option
    learner_options_grid: list[Mapping[str, Any] | None] | None = None
    random_state: RandomState = None
    n_jobs: int = 1

    def validate(self) -> None:
        super().validate()
        validate_learners(self.learners)
        for name in ("selection_function", "score_function"):
            if not callable(getattr(self, name)):
                raise ConfigurationError(f"{name} must be callable")
        if self.partition_generator is not None and not callable(self.partition_generator):
            raise ConfigurationError("partition_generator must be callable")
        if self.score_function is score and self.metric not in METRICS:
            raise ConfigurationError(
                f"Unknown metric '{self.metric}', expected one of {sorted(METRICS)}"
            )
        if not isinstance(self.score_type, type):
            raise ConfigurationError("score_type must be a type such as float")
        validate_n_jobs(self.n_jobs)
        self._validate_grid()

    def _validate_grid(self) -> None:
        grid = self.learner_options_grid
        if grid is None:
            return
        if not isinstance(grid, (list, tuple)):
            raise ConfigurationError("learner_options_grid must be a list with one entry per learner")
        if len(grid) != len(self.learners):
            raise ConfigurationError(
                f"learner_options_grid has {len(grid)} entries for {len(self.learners)} learners"
            )
        # Build every candidate once so bad option paths or values fail here
        expand_learners(self.learners, grid)


@dataclass(frozen=True)
class BestLearnerModel:
    """Fitted state of a BestLearner."""
    best_learner: Learner
    best_learner_index: int
    learners: tuple[Learner, ...]
    learner_partition_scores: np.ndarray


def score_candidate(
    learner: Learner,
    l_index: int,
    p_index: int,
    instances: np.ndarray,
    labels: np.ndarray,
    partition: np.ndarray,
    metric: str,
    score_function: Callable[[str, np.ndarray, np.ndarray], float],
) -> float:
    """Fit a fresh copy of learner on the partition, score it on the rest."""
    stage = f"candidate {l_index} ({learner.config.name}) partition {p_index} scoring"

    with log_failed_stage(stage, learner.logger):
        rest = np.setdiff1d(np.arange(len(instances)), partition)

        candidate = learner.clone()
        candidate.fit(instances[partition], labels[partition])
        predictions = candidate.transform(instances[rest])
        result = score_function(metric, labels[rest], predictions)

    learner.logger.debug(f"{stage}: {result}")
    return result


def check_selection(best_learner_index: Any, num_learners: int) -> int:
    """Check a selection function's result is a valid learner index."""
    if isinstance(best_learner_index, bool) or not isinstance(best_learner_index, Integral):
        raise ConfigurationError(
            f"Selection function must return an integer index, got {best_learner_index!r}"
        )
    if not 0 <= best_learner_index < num_learners:
        raise ConfigurationError(
            f"Selection function returned {best_learner_index}, "
            f"outside [0, {num_learners})"
        )
    return int(best_learner_index)


class BestLearner(Learner):
    """
    Selects the best learner out of a set by cross-validated score.

    Performs a grid search over learner options if an options grid is
    provided. The winner is refit on all training instances.
    """

    config_class = BestLearnerConfig

    def fit(
        self,
        instances: np.ndarray | pl.DataFrame,
        labels: np.ndarray,
        random_state: RandomState = None,
    ) -> "BestLearner":
        """
        Score every candidate on every partition and refit the winner.

        Args:
            instances: Training features
            labels: Training labels
            random_state: Seed for the default partition generator;
                overrides the configured one for this call
        """
        instances, labels = check_fit_inputs(instances, labels)
        num_instances = len(instances)

        # Obtain candidate learners, expanding options grids if present
        with log_failed_stage("grid expansion", self.logger):
            learners = expand_learners(self.config.learners, self.config.learner_options_grid)
            if not learners:
                raise ConfigurationError("No candidate learners to select from")

        # Generate partitions
        with log_failed_stage("partition generation", self.logger):
            partition_generator = self._partition_generator(random_state)
            partitions = validate_partitions(
                partition_generator(instances, labels), num_instances
            )

        num_learners = len(learners)
        num_partitions = len(partitions)
        self.logger.info(
            f"Scoring {num_learners} candidates on {num_partitions} partitions "
            f"of {num_instances} instances"
        )

        # Train each learner on each partition and score it on the rest
        scores = run_tasks(
            score_candidate,
            [
                (
                    learners[l_index], l_index, p_index, instances, labels,
                    partitions[p_index], self.config.metric, self.config.score_function,
                )
                for l_index in range(num_learners)
                for p_index in range(num_partitions)
            ],
            n_jobs=self.config.n_jobs,
        )
        learner_partition_scores = np.array(scores, dtype=self.config.score_type).reshape(
            num_learners, num_partitions
        )

        # Find best learner based on selection function
        with log_failed_stage("selection", self.logger):
            best_learner_index = check_selection(
                self.config.selection_function(learner_partition_scores.copy()),
                num_learners,
            )

        # Retrain best learner on all training instances
        best_learner = fit_learner(
            learners[best_learner_index].clone(), instances, labels, "best learner refit"
        )

        learner_partition_scores.setflags(write=False)
        self.model = BestLearnerModel(
            best_learner=best_learner,
            best_learner_index=best_learner_index,
            learners=tuple(learners),
            learner_partition_scores=learner_partition_scores,
        )
        self.logger.info(
            f"Selected candidate {best_learner_index} ({best_learner.config.name}), "
            f"mean score {learner_partition_scores[best_learner_index].mean():.4f}"
        )
        return self

    def transform(self, instances: np.ndarray | pl.DataFrame) -> np.ndarray:
        """Predict with the selected learner."""
        model = self._check_is_fitted()
        return transform_learner(model.best_learner, to_array(instances), "best learner transform")

    def _partition_generator(self, random_state: RandomState) -> Callable:
        if self.config.partition_generator is not None:
            return self.config.partition_generator

        if random_state is None:
            random_state = fresh_random_state(self.config.random_state)
        return KFoldPartitionGenerator(DEFAULT_NUM_FOLDS, random_state)

    def score_table(self) -> pl.DataFrame:
        """Per-candidate scores: one row per candidate, one column per partition."""
        model = self._check_is_fitted()
        scores = model.learner_partition_scores

        table = {
            "candidate": list(range(len(model.learners))),
            "name": [learner.config.name for learner in model.learners],
            "mean_score": scores.mean(axis=1).tolist(),
            "std_score": scores.std(axis=1).tolist(),
        }
        for p_index in range(scores.shape[1]):
            table[f"partition_{p_index}"] = scores[:, p_index].tolist()

        return pl.DataFrame(table)
