"""Tests for configuration utilities and learner configs."""

import pytest

from stubs import StubConfig, StubLearner
from tsml_ensemble.exceptions import ConfigurationError
from tsml_ensemble.models.architectures import PrunedTree
from tsml_ensemble.models.architectures.sklearn_learners import PrunedTreeConfig
from tsml_ensemble.utils.config import get_nested, load_config, merge_configs, set_nested


def test_merge_is_recursive():
    base = {"params": {"max_depth": 3, "criterion": "gini"}, "name": "tree"}
    override = {"params": {"max_depth": 5}}

    merged = merge_configs(base, override)

    assert merged == {"params": {"max_depth": 5, "criterion": "gini"}, "name": "tree"}


def test_merge_does_not_mutate_or_alias_inputs():
    base = {"params": {"max_depth": 3}}
    override = {"params": {"min_samples_leaf": [1, 2]}}

    merged = merge_configs(base, override)
    merged["params"]["max_depth"] = 10
    merged["params"]["min_samples_leaf"].append(3)

    assert base == {"params": {"max_depth": 3}}
    assert override == {"params": {"min_samples_leaf": [1, 2]}}


def test_later_configs_win():
    assert merge_configs({"a": 1}, {"a": 2}, {"a": 3}) == {"a": 3}


def test_set_nested_creates_intermediate_mappings():
    config = {"name": "tree"}

    set_nested(config, ("params", "max_depth"), 4)

    assert config == {"name": "tree", "params": {"max_depth": 4}}
    assert get_nested(config, ("params", "max_depth")) == 4


def test_set_nested_rejects_empty_path():
    with pytest.raises(ValueError):
        set_nested({}, (), 1)


def test_get_nested_missing_key():
    with pytest.raises(KeyError):
        get_nested({"params": {}}, ("params", "max_depth"))


def test_load_config(tmp_path):
    path = tmp_path / "learner.yaml"
    path.write_text("type: pruned_tree\nparams:\n  max_depth: 3\n")

    assert load_config(path) == {"type": "pruned_tree", "params": {"max_depth": 3}}


def test_load_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_config(path) == {}


def test_load_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_config_defaults_are_overridden_recursively():
    config = PrunedTreeConfig.from_dict({"params": {"max_depth": 2}})

    assert config.params == {"ccp_alpha": 0.0, "max_depth": 2}
    assert config.name == "pruned_tree"


def test_unknown_option_is_rejected():
    with pytest.raises(ConfigurationError, match="colour"):
        StubLearner({"colour": "red"})


def test_only_class_output_is_supported():
    with pytest.raises(ConfigurationError):
        StubLearner({"output": "probability"})


def test_empty_name_is_rejected():
    with pytest.raises(ConfigurationError):
        StubLearner({"name": ""})


def test_config_object_is_copied():
    config = PrunedTreeConfig(params={"max_depth": 2})
    learner = PrunedTree(config)
    config.params["max_depth"] = 7

    assert learner.config.params["max_depth"] == 2


def test_wrong_config_type_is_rejected():
    with pytest.raises(ConfigurationError):
        PrunedTree(StubConfig())


def test_configs_are_frozen():
    learner = PrunedTree()

    with pytest.raises(AttributeError):
        learner.config.name = "other"


def test_with_options_builds_fresh_learner():
    learner = StubLearner({"value": 3})

    other = learner.with_options({**learner.options, "value": 4})

    assert isinstance(other, StubLearner)
    assert other.config.value == 4
    assert learner.config.value == 3
    assert not other.is_fitted
