"""Pytest configuration and shared fixtures."""
import numpy as np
import pytest
from fixtures.networks import RecordingTracker, identity_layer, random_network, write_model

from src.domain.entities.network import Network


@pytest.fixture
def luminance():
    """
    Provide a deterministic 8x8 luminance plane.

    Returns:
        np.ndarray: Values in [0, 255].
    """
    rng = np.random.default_rng(42)
    return rng.uniform(0.0, 255.0, size=(8, 8))


@pytest.fixture
def identity_network():
    """
    Provide a one-layer network that copies its input.

    Returns:
        Network: Single 1->1 layer with a centre-only 3x3 kernel.
    """
    return Network([identity_layer()])


@pytest.fixture
def two_layer_network():
    """
    Provide a 1 -> 4 -> 1 plane network with seeded random weights.

    Returns:
        Network: Two 3x3 layers.
    """
    return random_network([1, 4, 1], seed=7)


@pytest.fixture
def tracker():
    """
    Provide a tracker that records every callback.

    Returns:
        RecordingTracker: Empty recorder.
    """
    return RecordingTracker()


@pytest.fixture
def model_path(tmp_path, two_layer_network):
    """
    Write the two-layer network to a JSON model file.

    Returns:
        str: Path to the model file.
    """
    return write_model(tmp_path / "model.json", two_layer_network)
