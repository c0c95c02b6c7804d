"""
Majority vote ensemble.
"""

from dataclasses import dataclass, field

import numpy as np
import polars as pl

from tsml_ensemble.models.architectures.sklearn_learners import default_learners
from tsml_ensemble.models.base import (
    Learner,
    LearnerConfig,
    base_predictions,
    check_fit_inputs,
    fit_learner,
    learner_stage,
    to_array,
    transform_learner,
    validate_learners,
    validate_n_jobs,
)
from tsml_ensemble.utils.parallel import run_tasks


@dataclass(frozen=True)
class VoteEnsembleConfig(LearnerConfig):
    """Configuration for a voting committee."""
    name: str = "vote_ensemble"
    # Learners in voting committee
    learners: list[Learner] = field(default_factory=default_learners)
    n_jobs: int = 1

    def validate(self) -> None:
        super().validate()
        validate_learners(self.learners)
        validate_n_jobs(self.n_jobs)


@dataclass(frozen=True)
class VoteModel:
    """Fitted state of a VoteEnsemble."""
    learners: tuple[Learner, ...]


def majority_vote(predictions: np.ndarray) -> np.ndarray:
    """
    Row-wise mode of a (num_learners, num_instances) prediction matrix.

    Ties go to the smallest of the tied labels in sort order.
    """
    num_instances = predictions.shape[1]
    result = np.empty(num_instances, dtype=predictions.dtype)

    for row in range(num_instances):
        values, counts = np.unique(predictions[:, row], return_counts=True)
        result[row] = values[np.argmax(counts)]

    return result


class VoteEnsemble(Learner):
    """
    Set of learners that majority vote to decide the prediction.

    Every learner is trained on the same full training set.
    """

    config_class = VoteEnsembleConfig

    def fit(
        self,
        instances: np.ndarray | pl.DataFrame,
        labels: np.ndarray,
    ) -> "VoteEnsemble":
        """Fit a fresh copy of every configured learner on all rows."""
        instances, labels = check_fit_inputs(instances, labels)
        learners = [learner.clone() for learner in self.config.learners]

        self.logger.info(
            f"Training {len(learners)} voting learners on {len(instances)} instances"
        )

        fitted = run_tasks(
            fit_learner,
            [
                (learner, instances, labels, learner_stage(l_index, learner, "fit"))
                for l_index, learner in enumerate(learners)
            ],
            n_jobs=self.config.n_jobs,
        )

        self.model = VoteModel(learners=tuple(fitted))
        return self

    def transform(self, instances: np.ndarray | pl.DataFrame) -> np.ndarray:
        """Return the majority vote of the fitted learners per row."""
        model = self._check_is_fitted()
        instances = to_array(instances)

        predictions = np.stack([
            transform_learner(learner, instances, learner_stage(l_index, learner, "transform"))
            for l_index, learner in enumerate(model.learners)
        ])

        return majority_vote(predictions)

    def get_base_predictions(
        self, instances: np.ndarray | pl.DataFrame
    ) -> dict[str, np.ndarray]:
        """Get predictions from each fitted learner."""
        model = self._check_is_fitted()
        return base_predictions(model.learners, to_array(instances))
