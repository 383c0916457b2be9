"""Small hand-built networks and a recording tracker for tests."""
import json

import numpy as np

from src.domain.entities.layer import Layer
from src.domain.entities.network import Network
from src.domain.interfaces.progress_tracker import ProgressTracker

IDENTITY_KERNEL = [[0.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 0.0]]


def identity_layer() -> Layer:
    """One input plane, one output plane, centre-only kernel, zero bias."""
    return Layer(weight=[[IDENTITY_KERNEL]], bias=[0.0], n_input_plane=1, n_output_plane=1)


def random_network(plane_counts: list[int], seed: int = 0) -> Network:
    """
    Build a 3x3 network whose layer i maps plane_counts[i] to plane_counts[i + 1] planes.

    Weights are scaled down so activations stay in a sensible range.
    """
    rng = np.random.default_rng(seed)
    layers = []
    for n_in, n_out in zip(plane_counts[:-1], plane_counts[1:]):
        weight = rng.normal(0.0, 0.3, size=(n_out, n_in, 3, 3)) / n_in
        bias = rng.normal(0.0, 0.05, size=n_out)
        layers.append(Layer(weight=weight, bias=bias, n_input_plane=n_in, n_output_plane=n_out))
    return Network(layers)


def network_to_json(network: Network) -> list[dict]:
    """Serialise a network in the waifu2x model layout."""
    return [
        {
            "weight": [[kernel.tolist() for kernel in group] for group in layer.weight],
            "bias": list(layer.bias),
            "nInputPlane": layer.n_input_plane,
            "nOutputPlane": layer.n_output_plane,
            "kW": layer.k_w,
            "kH": layer.k_h,
        }
        for layer in network
    ]


def write_model(path, network: Network) -> str:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(network_to_json(network), f)
    return str(path)


class RecordingTracker(ProgressTracker):
    """Tracker that stores every callback it receives."""

    def __init__(self):
        self.started: list[tuple[int, int]] = []
        self.layers: list[int] = []
        self.progress: list[tuple[int, int]] = []
        self.ended = 0

    def on_run_start(self, total_convolutions, num_layers):
        self.started.append((total_convolutions, num_layers))

    def on_layer_start(self, index, layer):
        self.layers.append(index)

    def on_convolution_end(self, completed, total):
        self.progress.append((completed, total))

    def on_run_end(self):
        self.ended += 1
