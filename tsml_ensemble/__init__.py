"""
Meta-learning ensembles for the time-series ML toolkit.

Majority vote, stacking and cross-validated best-learner selection,
all exposing the same fit/transform contract as the learners they
combine.
"""

__version__ = "0.1.0"

from tsml_ensemble.exceptions import (
    ConfigurationError,
    EnsembleError,
    InconsistentDataError,
    NotFittedError,
    UnseenLabelError,
)
from tsml_ensemble.models import (
    AdaBoost,
    BestLearner,
    LabelMap,
    Learner,
    PrunedTree,
    RandomForest,
    SklearnLearner,
    StackEnsemble,
    VoteEnsemble,
    create_learner,
    load_learner,
)

__all__ = [
    "Learner",
    "VoteEnsemble",
    "StackEnsemble",
    "BestLearner",
    "SklearnLearner",
    "PrunedTree",
    "AdaBoost",
    "RandomForest",
    "LabelMap",
    "create_learner",
    "load_learner",
    "EnsembleError",
    "ConfigurationError",
    "NotFittedError",
    "InconsistentDataError",
    "UnseenLabelError",
]
