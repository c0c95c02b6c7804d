"""
scikit-learn estimator wrappers usable as primitive learners.
"""

import importlib
import inspect
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import polars as pl

from tsml_ensemble.exceptions import ConfigurationError
from tsml_ensemble.models.base import (
    Learner,
    LearnerConfig,
    check_fit_inputs,
    to_array,
)


def resolve_estimator(estimator: type | str) -> type:
    """Resolve an estimator class from a class or a dotted import path."""
    if isinstance(estimator, str):
        module_name, _, class_name = estimator.rpartition(".")
        if not module_name:
            raise ConfigurationError(f"Estimator path must be dotted, got '{estimator}'")
        try:
            module = importlib.import_module(module_name)
            estimator = getattr(module, class_name)
        except (ImportError, AttributeError) as exc:
            raise ConfigurationError(f"Cannot import estimator '{estimator}'") from exc

    if not isinstance(estimator, type) or not (
        hasattr(estimator, "fit") and hasattr(estimator, "predict")
    ):
        raise ConfigurationError(f"{estimator!r} is not an estimator class with fit/predict")

    return estimator


@dataclass(frozen=True)
class SklearnLearnerConfig(LearnerConfig):
    """Configuration for a wrapped scikit-learn estimator."""
    name: str = "sklearn"
    estimator: type | str = "sklearn.tree.DecisionTreeClassifier"
    params: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        super().validate()
        estimator_class = resolve_estimator(self.estimator)
        if not isinstance(self.params, dict):
            raise ConfigurationError("params must be a mapping of estimator arguments")

        accepted = estimator_params(estimator_class)
        if accepted is not None:
            unknown = sorted(set(self.params) - accepted)
            if unknown:
                raise ConfigurationError(
                    f"Unknown params for {estimator_class.__name__}: {unknown}"
                )


def estimator_params(estimator_class: type) -> set[str] | None:
    """Constructor argument names, or None if it takes arbitrary keywords."""
    parameters = inspect.signature(estimator_class).parameters.values()
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters):
        return None
    return {p.name for p in parameters if p.kind is not inspect.Parameter.VAR_POSITIONAL}


class SklearnLearner(Learner):
    """Any scikit-learn classifier behind the fit/transform contract."""

    config_class = SklearnLearnerConfig

    def fit(
        self,
        instances: np.ndarray | pl.DataFrame,
        labels: np.ndarray,
    ) -> "SklearnLearner":
        """Fit a new estimator built from the configured params."""
        instances, labels = check_fit_inputs(instances, labels)

        estimator_class = resolve_estimator(self.config.estimator)
        estimator = estimator_class(**self.config.params)
        estimator.fit(instances, labels)

        self.model = estimator
        self.logger.debug(
            f"Fitted {estimator_class.__name__} on {len(instances)} instances"
        )
        return self

    def transform(self, instances: np.ndarray | pl.DataFrame) -> np.ndarray:
        """Predict class labels."""
        model = self._check_is_fitted()
        return model.predict(to_array(instances))


@dataclass(frozen=True)
class PrunedTreeConfig(SklearnLearnerConfig):
    name: str = "pruned_tree"
    estimator: type | str = "sklearn.tree.DecisionTreeClassifier"
    params: dict[str, Any] = field(default_factory=lambda: {"ccp_alpha": 0.0})


@dataclass(frozen=True)
class AdaBoostConfig(SklearnLearnerConfig):
    name: str = "adaboost"
    estimator: type | str = "sklearn.ensemble.AdaBoostClassifier"
    params: dict[str, Any] = field(default_factory=lambda: {"n_estimators": 7})


@dataclass(frozen=True)
class RandomForestConfig(SklearnLearnerConfig):
    name: str = "random_forest"
    estimator: type | str = "sklearn.ensemble.RandomForestClassifier"
    params: dict[str, Any] = field(default_factory=lambda: {
        "n_estimators": 10,
        "max_features": "sqrt",
        "max_samples": 0.7,
    })


class PrunedTree(SklearnLearner):
    """Decision tree with cost-complexity pruning."""
    config_class = PrunedTreeConfig


class AdaBoost(SklearnLearner):
    """Adaptive boosting over decision stumps."""
    config_class = AdaBoostConfig


class RandomForest(SklearnLearner):
    """Random forest with per-tree row subsampling."""
    config_class = RandomForestConfig


def default_learners() -> list[Learner]:
    """Learners used when an ensemble is configured without any."""
    return [PrunedTree(), AdaBoost(), RandomForest()]
