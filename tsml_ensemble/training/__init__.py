"""
Partitioning, grid expansion and scoring used by the ensembles.
"""

from tsml_ensemble.training.cross_validation import (
    HoldoutPartitionGenerator,
    KFoldPartitionGenerator,
    holdout,
    kfold,
    kfold_training_partitions,
)
from tsml_ensemble.training.grid_search import expand_learners, expand_options_grid
from tsml_ensemble.training.scoring import (
    SELECTION_FUNCTIONS,
    best_mean_score,
    best_median_score,
    best_worst_case_score,
    score,
)

__all__ = [
    "holdout",
    "kfold",
    "kfold_training_partitions",
    "KFoldPartitionGenerator",
    "HoldoutPartitionGenerator",
    "expand_learners",
    "expand_options_grid",
    "score",
    "best_mean_score",
    "best_median_score",
    "best_worst_case_score",
    "SELECTION_FUNCTIONS",
]
