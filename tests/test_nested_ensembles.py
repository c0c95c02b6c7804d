"""Ensembles used as members of other ensembles."""

import numpy as np

from tsml_ensemble.models.architectures import PrunedTree, RandomForest
from tsml_ensemble.models.ensemble import BestLearner, StackEnsemble, VoteEnsemble


def _tree(depth=None):
    return PrunedTree({"params": {"max_depth": depth, "random_state": 0}})


def test_vote_over_stack_and_best_learner(separable_data):
    X, y = separable_data
    stack = StackEnsemble({
        "learners": [_tree(), _tree(2)],
        "stacker": _tree(),
        "random_state": 0,
    })
    best = BestLearner({"learners": [_tree(1), _tree(3)], "random_state": 0})
    ensemble = VoteEnsemble({"learners": [stack, best, _tree()]})

    ensemble.fit(X, y)

    assert np.mean(ensemble.transform(X) == y) > 0.9
    fitted_stack, fitted_best, _ = ensemble.model.learners
    assert fitted_stack.model.stacker.is_fitted
    assert fitted_best.model.best_learner.config.params["max_depth"] == 3
    assert not stack.is_fitted and not best.is_fitted


def test_stack_over_vote_ensembles(separable_data):
    X, y = separable_data
    ensemble = StackEnsemble({
        "learners": [
            VoteEnsemble({"learners": [_tree(1), _tree(2), _tree()]}),
            RandomForest({"params": {"random_state": 0}}),
        ],
        "stacker": _tree(),
        "random_state": 1,
    })

    ensemble.fit(X, y)

    assert ensemble.model.stacker.model.n_features_in_ == 2 * 3
    assert np.mean(ensemble.transform(X) == y) > 0.9


def test_grid_over_stack_proportion(separable_data):
    X, y = separable_data
    prototype = StackEnsemble({
        "learners": [_tree()],
        "stacker": _tree(),
        "random_state": 0,
    })
    selector = BestLearner({
        "learners": [prototype],
        "learner_options_grid": [{"stacker_training_proportion": [0.2, 0.5]}],
        "random_state": 0,
    })

    selector.fit(X, y)

    proportions = [learner.config.stacker_training_proportion for learner in selector.model.learners]
    assert proportions == [0.2, 0.5]
    assert selector.model.best_learner.is_fitted
    assert np.mean(selector.transform(X) == y) > 0.9


def test_nested_base_predictions(separable_data):
    X, y = separable_data
    inner = VoteEnsemble({"name": "inner_vote", "learners": [_tree(1), _tree()]})
    ensemble = VoteEnsemble({"learners": [inner, _tree()]}).fit(X, y)

    predictions = ensemble.get_base_predictions(X)

    assert set(predictions) == {"inner_vote", "pruned_tree"}
    assert all(len(values) == len(X) for values in predictions.values())
