"""
Holdout and k-fold partitioning of instance indices.

A partition is an array of row indices. The generators used by
``BestLearner`` return the *training* rows of each split; the
validation rows are the complement.
"""

import copy

import numpy as np

from tsml_ensemble.exceptions import ConfigurationError

RandomState = int | np.random.Generator | None


def fresh_random_state(random_state: RandomState) -> RandomState:
    """Copy a generator so drawing from it leaves the original untouched."""
    if isinstance(random_state, np.random.Generator):
        return copy.deepcopy(random_state)
    return random_state


def holdout(
    num_instances: int,
    right_proportion: float,
    random_state: RandomState = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Split ``range(num_instances)`` once into two disjoint index sets.

    Args:
        num_instances: Number of rows to split
        right_proportion: Fraction of rows assigned to the right set
        random_state: Seed or generator for the permutation

    Returns:
        Tuple of (left_indices, right_indices), together covering every
        index exactly once
    """
    if num_instances < 0:
        raise ConfigurationError(f"num_instances must be >= 0, got {num_instances}")
    if not 0 < right_proportion < 1:
        raise ConfigurationError(
            f"Holdout proportion must be in (0, 1), got {right_proportion}"
        )

    rng = np.random.default_rng(random_state)
    shuffled_indices = rng.permutation(num_instances)

    pivot = int(round(right_proportion * num_instances))
    right = shuffled_indices[:pivot]
    left = shuffled_indices[pivot:]

    return left, right


def kfold(
    num_instances: int,
    num_partitions: int,
    random_state: RandomState = None,
) -> list[np.ndarray]:
    """
    Shuffle indices and cut them into disjoint folds covering every index.

    Fold sizes differ by at most one.
    """
    if num_partitions < 2:
        raise ConfigurationError(f"k-fold needs at least 2 partitions, got {num_partitions}")
    if num_instances < num_partitions:
        raise ConfigurationError(
            f"Cannot split {num_instances} instances into {num_partitions} folds"
        )

    rng = np.random.default_rng(random_state)
    shuffled_indices = rng.permutation(num_instances)

    return [np.sort(fold) for fold in np.array_split(shuffled_indices, num_partitions)]


def kfold_training_partitions(
    num_instances: int,
    num_partitions: int,
    random_state: RandomState = None,
) -> list[np.ndarray]:
    """Training rows of each k-fold split (every index outside one fold)."""
    indices = np.arange(num_instances)
    return [
        np.setdiff1d(indices, fold)
        for fold in kfold(num_instances, num_partitions, random_state)
    ]


class KFoldPartitionGenerator:
    """Partition generator yielding the training rows of a shuffled k-fold."""

    def __init__(self, n_splits: int = 5, random_state: RandomState = None):
        self.n_splits = n_splits
        self.random_state = random_state

    def __call__(self, instances: np.ndarray, labels: np.ndarray) -> list[np.ndarray]:
        return kfold_training_partitions(len(instances), self.n_splits, self.random_state)

    def __repr__(self) -> str:
        return f"KFoldPartitionGenerator(n_splits={self.n_splits})"


class HoldoutPartitionGenerator:
    """Partition generator yielding a single holdout split's training rows."""

    def __init__(self, validation_proportion: float = 0.3, random_state: RandomState = None):
        self.validation_proportion = validation_proportion
        self.random_state = random_state

    def __call__(self, instances: np.ndarray, labels: np.ndarray) -> list[np.ndarray]:
        training, _ = holdout(len(instances), self.validation_proportion, self.random_state)
        return [np.sort(training)]

    def __repr__(self) -> str:
        return f"HoldoutPartitionGenerator(validation_proportion={self.validation_proportion})"


def validate_partitions(partitions, num_instances: int) -> list[np.ndarray]:
    """
    Check generated partitions before any scoring happens.

    Each partition must be a non-empty set of distinct in-range indices
    that leaves at least one row for validation.
    """
    partitions = [np.asarray(partition) for partition in partitions]
    if len(partitions) == 0:
        raise ConfigurationError("Partition generator returned no partitions")

    for p_index, partition in enumerate(partitions):
        if partition.ndim != 1 or len(partition) == 0:
            raise ConfigurationError(f"Partition {p_index} must be a non-empty 1-D index array")
        if not np.issubdtype(partition.dtype, np.integer):
            raise ConfigurationError(f"Partition {p_index} must hold integer indices")
        if partition.min() < 0 or partition.max() >= num_instances:
            raise ConfigurationError(
                f"Partition {p_index} has indices outside [0, {num_instances})"
            )
        if len(np.unique(partition)) != len(partition):
            raise ConfigurationError(f"Partition {p_index} repeats indices")
        if len(partition) == num_instances:
            raise ConfigurationError(f"Partition {p_index} leaves no rows for validation")

    return partitions
