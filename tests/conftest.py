"""Pytest configuration and fixtures."""

import pytest
import numpy as np
import polars as pl
from loguru import logger
from sklearn.datasets import make_blobs


@pytest.fixture
def sample_features():
    """Generate sample feature data."""
    n = 200
    rng = np.random.default_rng(42)
    return rng.standard_normal((n, 5))


@pytest.fixture
def sample_labels():
    """Generate sample labels."""
    n = 200
    rng = np.random.default_rng(42)
    return rng.integers(0, 3, n)


@pytest.fixture
def separable_data():
    """Three well separated clusters, easy for any tree-based learner."""
    X, y = make_blobs(
        n_samples=240,
        centers=[[-6, -6], [0, 6], [6, -6]],
        cluster_std=1.0,
        random_state=7,
    )
    return X, y


@pytest.fixture
def binary_columns():
    """Ten rows whose first two columns are valid 0/1 labels."""
    rng = np.random.default_rng(3)
    features = rng.integers(0, 2, (10, 3))
    labels = np.array([0, 1] * 5)
    return features, labels


@pytest.fixture
def sample_frame(separable_data):
    """Separable data as a polars DataFrame."""
    X, _ = separable_data
    return pl.DataFrame({"x0": X[:, 0], "x1": X[:, 1]})


@pytest.fixture
def log_messages():
    """Capture loguru output emitted during a test."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(str(message)),
        level="DEBUG",
        format="{message}",
    )
    yield messages
    logger.remove(handler_id)
