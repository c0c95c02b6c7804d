"""
Ensemble learners combining multiple base learners.
"""

from tsml_ensemble.models.ensemble.selection import BestLearner, BestLearnerConfig
from tsml_ensemble.models.ensemble.stacking import StackEnsemble, StackEnsembleConfig
from tsml_ensemble.models.ensemble.voting import VoteEnsemble, VoteEnsembleConfig

__all__ = [
    "VoteEnsemble",
    "VoteEnsembleConfig",
    "StackEnsemble",
    "StackEnsembleConfig",
    "BestLearner",
    "BestLearnerConfig",
]
