"""
Base learner class and utilities.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Sequence

import numpy as np
import polars as pl
from loguru import logger

from tsml_ensemble.exceptions import (
    ConfigurationError,
    InconsistentDataError,
    NotFittedError,
)
from tsml_ensemble.utils.config import merge_configs
from tsml_ensemble.utils.logging import log_failed_stage

SUPPORTED_OUTPUTS = ("class",)


@dataclass(frozen=True)
class LearnerConfig:
    """Configuration shared by every learner."""
    name: str = "learner"
    output: str = "class"  # Only class prediction is supported

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_dict(cls, overrides: dict[str, Any] | None = None) -> "LearnerConfig":
        """Build a config by merging overrides recursively over the defaults."""
        overrides = overrides or {}
        defaults = config_to_dict(cls())

        unknown = sorted(set(overrides) - set(defaults))
        if unknown:
            raise ConfigurationError(f"Unknown options for {cls.__name__}: {unknown}")

        return cls(**merge_configs(defaults, overrides))

    def validate(self) -> None:
        """Validate configuration."""
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError("name must be a non-empty string")
        if self.output not in SUPPORTED_OUTPUTS:
            raise ConfigurationError(
                f"Unsupported output '{self.output}', expected one of {SUPPORTED_OUTPUTS}"
            )


def config_to_dict(config: LearnerConfig) -> dict[str, Any]:
    """Shallow mapping of config field names to values."""
    return {f.name: getattr(config, f.name) for f in fields(config)}


class Learner(ABC):
    """
    Abstract base class for everything that can be fit and then transform.

    Primitive learners and ensembles share this contract, so an ensemble
    can be used anywhere a learner is expected, including inside another
    ensemble.
    """

    config_class: ClassVar[type[LearnerConfig]] = LearnerConfig

    def __init__(self, config: LearnerConfig | dict[str, Any] | None = None):
        if config is None or isinstance(config, dict):
            config = self.config_class.from_dict(config)
        elif isinstance(config, self.config_class):
            config = copy.deepcopy(config)
        else:
            raise ConfigurationError(
                f"{self.__class__.__name__} expects {self.config_class.__name__}, "
                f"got {type(config).__name__}"
            )

        self.config = config
        self.model = None

    @abstractmethod
    def fit(
        self,
        instances: np.ndarray | pl.DataFrame,
        labels: np.ndarray,
    ) -> "Learner":
        """
        Fit the learner, replacing any previous model.

        Args:
            instances: Feature table (rows are samples)
            labels: Labels aligned row-for-row with instances

        Returns:
            self
        """
        pass

    @abstractmethod
    def transform(self, instances: np.ndarray | pl.DataFrame) -> np.ndarray:
        """
        Predict on new instances.

        Args:
            instances: Feature table (rows are samples)

        Returns:
            One prediction per row
        """
        pass

    @property
    def logger(self):
        return logger.bind(model=self.config.name)

    @property
    def is_fitted(self) -> bool:
        """Check if learner is fitted."""
        return self.model is not None

    @property
    def options(self) -> dict[str, Any]:
        """Option tree addressable by grid search."""
        return config_to_dict(self.config)

    def with_options(self, options: dict[str, Any]) -> "Learner":
        """Create a fresh, unfitted learner of the same type."""
        return type(self)(options)

    def clone(self) -> "Learner":
        """Unfitted copy sharing no state with this learner."""
        return self.with_options(self.options)

    def _check_is_fitted(self) -> Any:
        if self.model is None:
            raise NotFittedError(f"{self.config.name} must be fitted before transform")
        return self.model

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.config.name}')"


def to_array(instances: np.ndarray | pl.DataFrame | Sequence) -> np.ndarray:
    """Convert an instance table to a 2-D numpy array."""
    if isinstance(instances, pl.DataFrame):
        instances = instances.to_numpy()

    instances = np.asarray(instances)
    if instances.ndim == 1:
        instances = instances.reshape(-1, 1)
    elif instances.ndim != 2:
        raise InconsistentDataError(
            f"Instances must be 2-D, got {instances.ndim} dimensions"
        )
    return instances


def to_labels(labels: np.ndarray | pl.Series | Sequence) -> np.ndarray:
    """Convert labels to a 1-D numpy array."""
    if isinstance(labels, pl.Series):
        labels = labels.to_numpy()

    labels = np.asarray(labels)
    if labels.ndim == 2 and labels.shape[1] == 1:
        labels = labels.ravel()
    elif labels.ndim != 1:
        raise InconsistentDataError(f"Labels must be 1-D, got shape {labels.shape}")
    return labels


def check_fit_inputs(
    instances: np.ndarray | pl.DataFrame,
    labels: np.ndarray | pl.Series,
) -> tuple[np.ndarray, np.ndarray]:
    """Convert fit inputs and check they are aligned."""
    instances = to_array(instances)
    labels = to_labels(labels)

    if len(instances) != len(labels):
        raise InconsistentDataError(
            f"Got {len(instances)} instances but {len(labels)} labels"
        )
    if len(labels) == 0:
        raise InconsistentDataError("Cannot fit on zero instances")

    return instances, labels


def learner_stage(index: int, learner: Learner, action: str) -> str:
    """Human-readable name of one learner's step, used in failure logs."""
    return f"learner {index} ({learner.config.name}) {action}"


def fit_learner(
    learner: Learner,
    instances: np.ndarray,
    labels: np.ndarray,
    stage: str,
) -> Learner:
    """Fit a learner, naming the stage if it fails. Returns the fitted learner."""
    with log_failed_stage(stage, learner.logger):
        learner.fit(instances, labels)
    return learner


def transform_learner(
    learner: Learner,
    instances: np.ndarray,
    stage: str,
) -> np.ndarray:
    """Run a learner's transform and check one prediction comes back per row."""
    with log_failed_stage(stage, learner.logger):
        predictions = np.asarray(learner.transform(instances))

    if predictions.ndim == 2 and predictions.shape[1] == 1:
        predictions = predictions.ravel()

    if predictions.ndim != 1 or len(predictions) != len(instances):
        raise InconsistentDataError(
            f"{stage} returned predictions of shape {predictions.shape} "
            f"for {len(instances)} rows"
        )
    return predictions


def unique_names(learners: Sequence[Learner]) -> list[str]:
    """Learner names, suffixed with their index where names repeat."""
    names = [learner.config.name for learner in learners]
    return [
        name if names.count(name) == 1 else f"{name}_{index}"
        for index, name in enumerate(names)
    ]


def validate_learners(learners: Any, field_name: str = "learners") -> None:
    """Check a configured learner list."""
    if not isinstance(learners, (list, tuple)):
        raise ConfigurationError(f"{field_name} must be a list of learners")
    if len(learners) == 0:
        raise ConfigurationError(f"{field_name} must not be empty")
    for index, learner in enumerate(learners):
        if not isinstance(learner, Learner):
            raise ConfigurationError(
                f"{field_name}[{index}] is {type(learner).__name__}, not a Learner"
            )


def validate_n_jobs(n_jobs: Any) -> None:
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, int) or n_jobs == 0:
        raise ConfigurationError(f"n_jobs must be a non-zero integer, got {n_jobs!r}")


def base_predictions(
    learners: Sequence[Learner],
    instances: np.ndarray,
) -> dict[str, np.ndarray]:
    """Predictions of each fitted learner, keyed by its unique name."""
    return {
        name: transform_learner(learner, instances, learner_stage(l_index, learner, "transform"))
        for l_index, (name, learner) in enumerate(zip(unique_names(learners), learners))
    }
