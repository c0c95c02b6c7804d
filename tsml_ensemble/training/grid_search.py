"""
Hyperparameter grid expansion for learner selection.

A grid mirrors a learner's option tree, with a list of candidate values
in place of each searched option::

    {"params": {"max_depth": [2, 4, 8], "min_samples_leaf": [1, 5]}}

expands to six learners, one per combination.
"""

import copy
from itertools import product
from typing import Any, Mapping, Sequence

from loguru import logger

from tsml_ensemble.exceptions import ConfigurationError
from tsml_ensemble.models.base import Learner
from tsml_ensemble.utils.config import set_nested

OptionPath = tuple[str, ...]


def options_grid_to_tuples(
    grid: Mapping[str, Any],
    prefix: OptionPath = (),
) -> list[tuple[OptionPath, list[Any]]]:
    """
    Flatten a nested grid into (option path, candidate values) pairs.

    Raises:
        ConfigurationError: If a leaf is not a list of distinct values,
            or a list or mapping is empty
    """
    if not isinstance(grid, Mapping):
        raise ConfigurationError(f"Options grid must be a mapping, got {type(grid).__name__}")
    if not grid:
        label = ".".join(str(part) for part in prefix) or "options grid"
        raise ConfigurationError(f"Options grid entry '{label}' is an empty mapping")

    grid_list = []
    for key, value in grid.items():
        path = prefix + (key,)
        dotted = ".".join(str(part) for part in path)

        if isinstance(value, Mapping):
            grid_list.extend(options_grid_to_tuples(value, path))
        elif isinstance(value, (list, tuple)):
            if len(value) == 0:
                raise ConfigurationError(f"Options grid entry '{dotted}' has no candidate values")
            if _has_duplicates(value):
                raise ConfigurationError(f"Options grid entry '{dotted}' repeats a value")
            grid_list.append((path, list(value)))
        else:
            raise ConfigurationError(
                f"Options grid entry '{dotted}' must be a list of values, "
                f"got {type(value).__name__}"
            )

    return grid_list


def _has_duplicates(values: Sequence[Any]) -> bool:
    return any(
        bool(values[i] == values[j])
        for i in range(len(values))
        for j in range(i + 1, len(values))
    )


def grid_size(grid: Mapping[str, Any] | None) -> int:
    """Number of learners a grid expands to."""
    if grid is None:
        return 1

    size = 1
    for _, values in options_grid_to_tuples(grid):
        size *= len(values)
    return size


def expand_options_grid(
    prototype: Learner,
    grid: Mapping[str, Any] | None,
) -> list[Learner]:
    """
    Create one learner per combination of grid values.

    Each learner starts from a deep copy of the prototype's options with
    every searched option path overwritten by its combination value.
    """
    if grid is None:
        return [prototype]

    grid_list = options_grid_to_tuples(grid)
    grid_keys = [path for path, _ in grid_list]
    grid_values = [values for _, values in grid_list]

    base_options = prototype.options
    learners = []
    for combination in product(*grid_values):
        learner_options = copy.deepcopy(base_options)
        for path, value in zip(grid_keys, combination):
            set_nested(learner_options, path, value)

        learners.append(prototype.with_options(learner_options))

    logger.debug(f"Expanded {prototype!r} into {len(learners)} candidates")
    return learners


def expand_learners(
    learners: Sequence[Learner],
    learner_options_grid: Sequence[Mapping[str, Any] | None] | None,
) -> list[Learner]:
    """
    Candidate learners for selection.

    Without a grid the learners are returned as configured. With a grid,
    entry ``i`` expands ``learners[i]``; a ``None`` entry keeps that
    prototype as a single candidate.
    """
    if learner_options_grid is None:
        return list(learners)

    if len(learner_options_grid) != len(learners):
        raise ConfigurationError(
            f"Options grid has {len(learner_options_grid)} entries "
            f"for {len(learners)} learners"
        )

    candidates = []
    for prototype, grid in zip(learners, learner_options_grid):
        candidates.extend(expand_options_grid(prototype, grid))
    return candidates
