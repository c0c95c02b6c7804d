"""
Stacking ensemble for combining multiple learners.
"""

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
import polars as pl

from tsml_ensemble.exceptions import ConfigurationError, InconsistentDataError
from tsml_ensemble.models.architectures.sklearn_learners import (
    RandomForest,
    default_learners,
)
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
from tsml_ensemble.models.encoders.label_map import LabelMap
from tsml_ensemble.training.cross_validation import RandomState, fresh_random_state, holdout
from tsml_ensemble.utils.logging import log_failed_stage
from tsml_ensemble.utils.parallel import run_tasks


@dataclass(frozen=True)
class StackEnsembleConfig(LearnerConfig):
    """Configuration for a stacking ensemble."""
    name: str = "stack_ensemble"
    # Learners that produce the feature space for the stacker
    learners: list[Learner] = field(default_factory=default_learners)
    # Learner trained on the other learners' outputs
    stacker: Learner = field(default_factory=RandomForest)
    # Proportion of training set left to train the stacker itself
    stacker_training_proportion: float = 0.3
    # Provide original features on top of learner outputs to the stacker
    keep_original_features: bool = False
    random_state: RandomState = None
    n_jobs: int = 1

    def validate(self) -> None:
        super().validate()
        validate_learners(self.learners)
        if not isinstance(self.stacker, Learner):
            raise ConfigurationError(
                f"stacker is {type(self.stacker).__name__}, not a Learner"
            )
        if not 0 < self.stacker_training_proportion < 1:
            raise ConfigurationError(
                "stacker_training_proportion must be in (0, 1), "
                f"got {self.stacker_training_proportion}"
            )
        if not isinstance(self.keep_original_features, bool):
            raise ConfigurationError("keep_original_features must be a bool")
        validate_n_jobs(self.n_jobs)


@dataclass(frozen=True)
class StackModel:
    """Fitted state of a StackEnsemble."""
    learners: tuple[Learner, ...]
    stacker: Learner
    label_map: LabelMap
    keep_original_features: bool


def build_stacker_instances(
    learners: Sequence[Learner],
    instances: np.ndarray,
    label_map: LabelMap,
    keep_original_features: bool = False,
) -> np.ndarray:
    """
    Build the stacker's feature space from learner predictions.

    Each learner contributes a one-hot block of ``num_classes`` columns;
    the column for learner ``l`` predicting class index ``c`` is
    ``l * num_classes + c``. Original features are prepended if requested;
    non-numeric features give an object array with the one-hot entries
    kept as floats.
    """
    num_labels = label_map.num_classes
    num_instances = len(instances)
    num_learners = len(learners)
    stacker_instances = np.zeros((num_instances, num_learners * num_labels))
    rows = np.arange(num_instances)

    # Fill stacker instances with predictions from learners
    for l_index, learner in enumerate(learners):
        predictions = transform_learner(
            learner, instances, learner_stage(l_index, learner, "transform")
        )
        with log_failed_stage(learner_stage(l_index, learner, "prediction encoding"), learner.logger):
            pred_encoding = label_map.encode(predictions)
        stacker_instances[rows, l_index * num_labels + pred_encoding] = 1.0

    if keep_original_features:
        if np.issubdtype(instances.dtype, np.number) or instances.dtype == np.bool_:
            stacker_instances = np.hstack([instances, stacker_instances])
        else:
            # Categorical columns would coerce the one-hot block to strings
            stacker_instances = np.hstack([
                instances.astype(object), stacker_instances.astype(object)
            ])

    return stacker_instances


class StackEnsemble(Learner):
    """
    Ensemble where a stacker learns on a set of learners' predictions.

    The training set is split once: base learners train on one part,
    the stacker trains on their one-hot encoded predictions for the
    other part.
    """

    config_class = StackEnsembleConfig

    def fit(
        self,
        instances: np.ndarray | pl.DataFrame,
        labels: np.ndarray,
        random_state: RandomState = None,
    ) -> "StackEnsemble":
        """
        Fit the stacking ensemble.

        Args:
            instances: Training features
            labels: Training labels
            random_state: Seed for the learner/stacker split; overrides
                the configured one for this call
        """
        instances, labels = check_fit_inputs(instances, labels)
        num_instances = len(instances)
        if random_state is None:
            random_state = fresh_random_state(self.config.random_state)

        # Partition training set for learners and stacker
        learner_indices, stack_indices = holdout(
            num_instances, self.config.stacker_training_proportion, random_state
        )
        if len(learner_indices) == 0 or len(stack_indices) == 0:
            raise InconsistentDataError(
                f"Cannot split {num_instances} instances into non-empty learner "
                f"and stacker sets with proportion {self.config.stacker_training_proportion}"
            )

        learner_instances = instances[learner_indices]
        stack_instances = instances[stack_indices]
        learner_labels = labels[learner_indices]
        stack_labels = labels[stack_indices]

        # Train all learners
        learners = [learner.clone() for learner in self.config.learners]
        self.logger.info(
            f"Training {len(learners)} base learners on {len(learner_indices)} instances, "
            f"stacker on {len(stack_indices)}"
        )
        learners = run_tasks(
            fit_learner,
            [
                (learner, learner_instances, learner_labels, learner_stage(l_index, learner, "fit"))
                for l_index, learner in enumerate(learners)
            ],
            n_jobs=self.config.n_jobs,
        )

        # Train stacker on learners' outputs
        label_map = LabelMap.from_labels(labels)
        keep_original_features = self.config.keep_original_features
        stacker_instances = build_stacker_instances(
            learners, stack_instances, label_map, keep_original_features
        )
        stacker = fit_learner(
            self.config.stacker.clone(), stacker_instances, stack_labels, "stacker fit"
        )

        self.model = StackModel(
            learners=tuple(learners),
            stacker=stacker,
            label_map=label_map,
            keep_original_features=keep_original_features,
        )
        self.logger.info(f"Stacker trained on {stacker_instances.shape[1]} derived features")
        return self

    def transform(self, instances: np.ndarray | pl.DataFrame) -> np.ndarray:
        """Predict with the stacker on the fitted learners' outputs."""
        model = self._check_is_fitted()

        stacker_instances = build_stacker_instances(
            model.learners,
            to_array(instances),
            model.label_map,
            model.keep_original_features,
        )
        return transform_learner(model.stacker, stacker_instances, "stacker transform")

    def get_base_predictions(
        self, instances: np.ndarray | pl.DataFrame
    ) -> dict[str, np.ndarray]:
        """Get predictions from each fitted base learner."""
        model = self._check_is_fitted()
        return base_predictions(model.learners, to_array(instances))
