"""
Learner registry for building learners from nested mappings.

A learner definition is a mapping with a ``type`` key plus the learner's options.
Ensemble definitions nest further definitions under ``learners`` and ``stacker``::

    type: stack_ensemble
    stacker_training_proportion: 0.4
    learners:
      - type: pruned_tree
      - type: random_forest
        params: {n_estimators: 50}
    stacker:
      type: adaboost
"""

from pathlib import Path
from typing import Any, Callable, Mapping

from loguru import logger

from tsml_ensemble.exceptions import ConfigurationError
from tsml_ensemble.models.architectures.sklearn_learners import (
    AdaBoost,
    PrunedTree,
    RandomForest,
    SklearnLearner,
)
from tsml_ensemble.models.base import Learner
from tsml_ensemble.models.ensemble.selection import BestLearner
from tsml_ensemble.models.ensemble.stacking import StackEnsemble
from tsml_ensemble.models.ensemble.voting import VoteEnsemble
from tsml_ensemble.training.cross_validation import (
    HoldoutPartitionGenerator,
    KFoldPartitionGenerator,
)
from tsml_ensemble.training.scoring import SELECTION_FUNCTIONS
from tsml_ensemble.utils.config import load_config

LEARNER_TYPES: dict[str, type[Learner]] = {
    "vote_ensemble": VoteEnsemble,
    "stack_ensemble": StackEnsemble,
    "best_learner": BestLearner,
    "sklearn": SklearnLearner,
    "pruned_tree": PrunedTree,
    "adaboost": AdaBoost,
    "random_forest": RandomForest,
}

PARTITION_GENERATORS: dict[str, Callable[..., Callable]] = {
    "kfold": KFoldPartitionGenerator,
    "holdout": HoldoutPartitionGenerator,
}


def register_learner(type_name: str, learner_class: type[Learner]) -> None:
    """Register a learner class under a type name."""
    if not (isinstance(learner_class, type) and issubclass(learner_class, Learner)):
        raise ConfigurationError(f"{learner_class!r} is not a Learner subclass")

    LEARNER_TYPES[type_name] = learner_class
    logger.debug(f"Registered learner type: {type_name}")


def create_learner(definition: Mapping[str, Any] | Learner) -> Learner:
    """Build a learner, recursively building any nested learner definitions."""
    if isinstance(definition, Learner):
        return definition
    if not isinstance(definition, Mapping):
        raise ConfigurationError(
            f"Learner definition must be a mapping, got {type(definition).__name__}"
        )

    options = dict(definition)
    type_name = options.pop("type", None)
    if type_name not in LEARNER_TYPES:
        raise ConfigurationError(
            f"Unknown learner type {type_name!r}, expected one of {sorted(LEARNER_TYPES)}"
        )

    if "learners" in options:
        if not isinstance(options["learners"], (list, tuple)):
            raise ConfigurationError("learners must be a list of learner definitions")
        options["learners"] = [create_learner(item) for item in options["learners"]]
    if "stacker" in options:
        options["stacker"] = create_learner(options["stacker"])
    if "partition_generator" in options:
        options["partition_generator"] = _create_partition_generator(
            options["partition_generator"]
        )
    if isinstance(options.get("selection_function"), str):
        options["selection_function"] = _lookup_selection_function(
            options["selection_function"]
        )

    return LEARNER_TYPES[type_name](options)


def _create_partition_generator(definition: Any) -> Callable | None:
    if definition is None or callable(definition):
        return definition
    if not isinstance(definition, Mapping):
        raise ConfigurationError("partition_generator must be a mapping with a 'type' key")

    arguments = dict(definition)
    type_name = arguments.pop("type", None)
    if type_name not in PARTITION_GENERATORS:
        raise ConfigurationError(
            f"Unknown partition generator {type_name!r}, "
            f"expected one of {sorted(PARTITION_GENERATORS)}"
        )
    try:
        return PARTITION_GENERATORS[type_name](**arguments)
    except TypeError as exc:
        raise ConfigurationError(f"Bad arguments for {type_name} partition generator: {exc}") from exc


def _lookup_selection_function(name: str) -> Callable:
    if name not in SELECTION_FUNCTIONS:
        raise ConfigurationError(
            f"Unknown selection function '{name}', expected one of {sorted(SELECTION_FUNCTIONS)}"
        )
    return SELECTION_FUNCTIONS[name]


def load_learner(path: str | Path) -> Learner:
    """Build a learner from a YAML definition file."""
    learner = create_learner(load_config(path))
    logger.info(f"Built {learner!r} from {path}")
    return learner
