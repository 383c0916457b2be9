"""
JSON Network Loader Implementation.

Reads models exported in the waifu2x JSON layout: an array of layer objects
with `weight`, `bias`, `nInputPlane`, `nOutputPlane`, `kW` and `kH` fields,
in execution order.
"""
import json
import logging
import os
from typing import Any

import numpy as np

from src.domain.entities.errors import ConfigurationError
from src.domain.entities.layer import Layer
from src.domain.entities.network import Network
from src.domain.interfaces.network_loader import NetworkLoader

logger = logging.getLogger(__name__)


class JsonNetworkLoader(NetworkLoader):
    """Concrete implementation for loading JSON model descriptions."""

    def load(self, path: str) -> Network:
        """
        Load and parse the JSON model at `path`.

        Parameters
        ----------
        path : str
            Filesystem path to the model file.

        Returns
        -------
        Network
            Parsed network.

        Raises
        ------
        ConfigurationError
            If the file is missing, unreadable, not valid JSON, or describes
            kernels inconsistent with their declared size.
        """
        if not os.path.exists(path):
            raise ConfigurationError(f"Model file not found at {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as err:
            raise ConfigurationError(f"Malformed model JSON in {path}: {err}") from err
        except OSError as err:
            raise ConfigurationError(f"Cannot read model file {path}: {err}") from err

        network = parse_network(data)
        logger.debug(f"Parsed {len(network)} layer(s) from {path}")
        return network


def parse_network(data: Any) -> Network:
    """
    Build a Network from decoded JSON.

    Declared plane counts are kept as-is; only kernel shapes are checked.
    """
    if not isinstance(data, list):
        raise ConfigurationError(
            f"Model description must be a JSON array of layers, got {type(data).__name__}"
        )
    return Network([_parse_layer(index, entry) for index, entry in enumerate(data)])


def _parse_layer(index: int, entry: Any) -> Layer:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Layer {index}: expected an object, got {type(entry).__name__}")

    for key in ("weight", "bias"):
        if key not in entry:
            raise ConfigurationError(f"Layer {index}: missing '{key}' field")

    k_w = _integer_field(index, entry, "kW", 3, minimum=1)
    k_h = _integer_field(index, entry, "kH", 3, minimum=1)
    if k_w != k_h or k_w % 2 == 0:
        raise ConfigurationError(
            f"Layer {index}: kernel size must be square and odd, got kW={k_w}, kH={k_h}"
        )

    weight = entry["weight"]
    try:
        kernels = [[np.asarray(kernel, dtype=np.float64) for kernel in group] for group in weight]
        bias = [float(b) for b in entry["bias"]]
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"Layer {index}: non-numeric or ragged weights: {err}") from err

    for output_index, group in enumerate(kernels):
        for input_index, kernel in enumerate(group):
            if kernel.shape != (k_h, k_w):
                raise ConfigurationError(
                    f"Layer {index}, output plane {output_index}, input plane {input_index}: "
                    f"kernel shape {kernel.shape} does not match kH x kW = ({k_h}, {k_w})"
                )

    n_output_plane = _integer_field(index, entry, "nOutputPlane", len(kernels), minimum=0)
    n_input_plane = _integer_field(
        index, entry, "nInputPlane", len(kernels[0]) if kernels else 0, minimum=0
    )
    return Layer(
        weight=kernels,
        bias=bias,
        n_input_plane=n_input_plane,
        n_output_plane=n_output_plane,
        k_w=k_w,
        k_h=k_h,
    )


def _integer_field(index: int, entry: dict, key: str, default: int, minimum: int) -> int:
    # bool is an int subclass; JSON true/false is not a count.
    value = entry.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(
            f"Layer {index}: '{key}' must be an integer >= {minimum}, got {value!r}"
        )
    return value
