"""
Primitive learners wrapping external ML libraries.
"""

from tsml_ensemble.models.architectures.sklearn_learners import (
    AdaBoost,
    PrunedTree,
    RandomForest,
    SklearnLearner,
    SklearnLearnerConfig,
    default_learners,
)

__all__ = [
    "SklearnLearner",
    "SklearnLearnerConfig",
    "PrunedTree",
    "AdaBoost",
    "RandomForest",
    "default_learners",
]
