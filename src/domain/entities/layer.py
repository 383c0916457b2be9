"""Layer entity - one convolution stage of a reconstruction network."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike


@dataclass(frozen=True, eq=False)
class Layer:
    """
    One convolution stage.

    Attributes
    ----------
    weight : tuple[tuple[np.ndarray, ...], ...]
        Kernels indexed [output_plane][input_plane], each of shape (k_h, k_w).
    bias : tuple[float, ...]
        One scalar per output plane.
    n_input_plane : int
        Declared input plane count. Advisory only.
    n_output_plane : int
        Declared output plane count. Advisory only.
    k_w, k_h : int
        Kernel width and height.
    """

    weight: Sequence[Sequence[ArrayLike]]
    bias: Sequence[float]
    n_input_plane: int
    n_output_plane: int
    k_w: int = 3
    k_h: int = 3

    def __post_init__(self) -> None:
        kernels = tuple(
            tuple(_read_only_kernel(kernel) for kernel in group)
            for group in self.weight
        )
        object.__setattr__(self, "weight", kernels)
        object.__setattr__(self, "bias", tuple(float(b) for b in self.bias))

    @property
    def radius(self) -> int:
        """Rows (and columns) a valid correlation removes from each side."""
        return (self.k_h - 1) // 2

    @property
    def declared_convolutions(self) -> int:
        return self.n_input_plane * self.n_output_plane

    def output_count(self) -> int:
        """Number of output planes actually produced: min(len(bias), len(weight))."""
        return min(len(self.bias), len(self.weight))

    def input_count(self, output_index: int, available_planes: int) -> int:
        """Number of input planes consumed by `output_index`: min(available, len(weight[i]))."""
        return min(available_planes, len(self.weight[output_index]))


def _read_only_kernel(kernel: ArrayLike) -> np.ndarray:
    array = np.array(kernel, dtype=np.float64)
    array.setflags(write=False)
    return array
