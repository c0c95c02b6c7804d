"""
Learners: the fit/transform contract, primitive learners and ensembles.
"""

from tsml_ensemble.models.base import Learner, LearnerConfig
from tsml_ensemble.models.architectures import AdaBoost, PrunedTree, RandomForest, SklearnLearner
from tsml_ensemble.models.encoders import LabelMap
from tsml_ensemble.models.ensemble import BestLearner, StackEnsemble, VoteEnsemble
from tsml_ensemble.models.registry import create_learner, load_learner, register_learner

__all__ = [
    "Learner",
    "LearnerConfig",
    "SklearnLearner",
    "PrunedTree",
    "AdaBoost",
    "RandomForest",
    "LabelMap",
    "VoteEnsemble",
    "StackEnsemble",
    "BestLearner",
    "create_learner",
    "load_learner",
    "register_learner",
]
