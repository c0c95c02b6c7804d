"""Tests for the label map."""

import numpy as np
import pytest

from tsml_ensemble.exceptions import InconsistentDataError, UnseenLabelError
from tsml_ensemble.models.encoders import LabelMap


def test_label_map_is_dense_bijection():
    label_map = LabelMap.from_labels(np.array([5, 3, 5, 9, 3]))

    assert label_map.num_classes == 3
    encoded = label_map.encode(np.array([3, 5, 9]))
    assert sorted(encoded.tolist()) == [0, 1, 2]
    assert np.array_equal(label_map.decode(encoded), np.array([3, 5, 9]))


def test_label_map_handles_string_labels():
    label_map = LabelMap.from_labels(["sell", "buy", "hold", "buy"])

    assert len(label_map) == 3
    assert "hold" in label_map
    assert "short" not in label_map
    assert label_map.decode(label_map.encode(["hold"]))[0] == "hold"


def test_unseen_label_is_an_error():
    label_map = LabelMap.from_labels(np.array([0, 1, 2]))

    with pytest.raises(UnseenLabelError, match="7"):
        label_map.encode(np.array([0, 7]))


def test_unseen_label_error_is_key_and_value_error():
    label_map = LabelMap.from_labels(np.array(["a", "b"]))

    with pytest.raises(KeyError):
        label_map.encode(["c"])
    with pytest.raises(ValueError):
        label_map.encode(["c"])


def test_decode_rejects_out_of_range_index():
    label_map = LabelMap.from_labels(np.array([0, 1]))

    with pytest.raises(UnseenLabelError):
        label_map.decode(np.array([2]))


def test_empty_labels_are_rejected():
    with pytest.raises(InconsistentDataError):
        LabelMap.from_labels(np.array([]))
