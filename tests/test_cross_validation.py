"""Tests for holdout and k-fold partitioning."""

import numpy as np
import pytest

from tsml_ensemble.exceptions import ConfigurationError
from tsml_ensemble.training.cross_validation import (
    HoldoutPartitionGenerator,
    KFoldPartitionGenerator,
    holdout,
    kfold,
    kfold_training_partitions,
    validate_partitions,
)


@pytest.mark.parametrize("num_instances,proportion", [(10, 0.5), (7, 0.3), (101, 0.25), (3, 0.9)])
def test_holdout_is_disjoint_and_exhaustive(num_instances, proportion):
    left, right = holdout(num_instances, proportion, random_state=0)

    assert len(left) + len(right) == num_instances
    assert len(np.intersect1d(left, right)) == 0
    assert np.array_equal(np.sort(np.concatenate([left, right])), np.arange(num_instances))


def test_holdout_right_size_follows_proportion():
    left, right = holdout(10, 0.3, random_state=1)

    assert len(right) == 3
    assert len(left) == 7


def test_holdout_is_reproducible_with_seed():
    first = holdout(50, 0.3, random_state=123)
    second = holdout(50, 0.3, random_state=123)

    assert np.array_equal(first[0], second[0])
    assert np.array_equal(first[1], second[1])


def test_holdout_accepts_generator():
    rng = np.random.default_rng(5)
    left, right = holdout(20, 0.5, random_state=rng)

    assert len(left) == len(right) == 10


@pytest.mark.parametrize("proportion", [0.0, 1.0, -0.2, 1.5])
def test_holdout_rejects_proportion_outside_unit_interval(proportion):
    with pytest.raises(ConfigurationError):
        holdout(10, proportion)


def test_kfold_folds_are_disjoint_and_cover_all_indices():
    folds = kfold(23, 5, random_state=0)

    assert len(folds) == 5
    combined = np.concatenate(folds)
    assert len(combined) == 23
    assert np.array_equal(np.sort(combined), np.arange(23))
    assert {len(fold) for fold in folds} <= {4, 5}


def test_kfold_rejects_too_few_instances_or_folds():
    with pytest.raises(ConfigurationError):
        kfold(3, 5)
    with pytest.raises(ConfigurationError):
        kfold(10, 1)


def test_training_partitions_are_fold_complements():
    folds = kfold(20, 4, random_state=9)
    partitions = kfold_training_partitions(20, 4, random_state=9)

    for fold, partition in zip(folds, partitions):
        assert len(fold) + len(partition) == 20
        assert len(np.intersect1d(fold, partition)) == 0


def test_kfold_generator_uses_instance_count(sample_features, sample_labels):
    generator = KFoldPartitionGenerator(n_splits=4, random_state=0)
    partitions = generator(sample_features, sample_labels)

    assert len(partitions) == 4
    assert all(len(partition) == 150 for partition in partitions)


def test_holdout_generator_yields_single_training_partition(sample_features, sample_labels):
    generator = HoldoutPartitionGenerator(validation_proportion=0.25, random_state=0)
    partitions = generator(sample_features, sample_labels)

    assert len(partitions) == 1
    assert len(partitions[0]) == 150


@pytest.mark.parametrize("partitions", [
    [],
    [np.array([], dtype=int)],
    [np.array([0, 1, 10])],
    [np.array([0, 0, 1])],
    [np.arange(10)],
    [np.array([0.0, 1.0])],
])
def test_validate_partitions_rejects_bad_partitions(partitions):
    with pytest.raises(ConfigurationError):
        validate_partitions(partitions, 10)


def test_validate_partitions_accepts_lists():
    partitions = validate_partitions([[0, 1, 2], [3, 4]], 6)

    assert all(isinstance(partition, np.ndarray) for partition in partitions)
