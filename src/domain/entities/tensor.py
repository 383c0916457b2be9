"""Tensor entity - dense 2D plane of real values."""
from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from src.domain.entities.errors import DimensionMismatch


class Tensor:
    """
    Immutable two-dimensional array of float64 values.

    Every operation returns a new Tensor backed by freshly allocated storage,
    so a single Tensor can be read by many threads at once without locking.

    Parameters
    ----------
    data : ArrayLike
        Row-major 2D data. The values are copied.
    """

    __slots__ = ("_data",)

    def __init__(self, data: ArrayLike) -> None:
        array = np.array(data, dtype=np.float64)
        if array.ndim != 2:
            raise ValueError(f"Tensor expects 2D data, got {array.ndim} dimension(s)")
        self._data = _freeze(array)

    @classmethod
    def _wrap(cls, array: np.ndarray) -> Tensor:
        # Takes ownership of an array nobody else references.
        tensor = cls.__new__(cls)
        tensor._data = _freeze(array)
        return tensor

    @property
    def shape(self) -> tuple[int, int]:
        """Return (rows, cols)."""
        return self._data.shape

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the backing data."""
        return self._data.copy()

    def pad(self, radius: int, mode: str = "edge") -> Tensor:
        """
        Extend the tensor by `radius` rows and columns on every side.

        Parameters
        ----------
        radius : int
            Number of cells added on each side.
        mode : str
            Any `numpy.pad` mode. The default, "edge", replicates the nearest
            boundary value, corners included.

        Returns
        -------
        Tensor
            Tensor of shape (rows + 2 * radius, cols + 2 * radius).
        """
        if radius < 0:
            raise ValueError(f"Padding radius must be non-negative, got {radius}")
        return Tensor._wrap(np.pad(self._data, radius, mode=mode))

    def correlate(self, kernel: ArrayLike) -> Tensor:
        """
        Valid 2D cross-correlation, stride 1, no padding.

        Each output cell is the sum of the kernel-sized neighbourhood of the
        matching input cell, multiplied elementwise by the kernel.

        Parameters
        ----------
        kernel : ArrayLike
            Square kernel with an odd side length (3x3 for the shipped models).

        Returns
        -------
        Tensor
            Tensor of shape (rows - k + 1, cols - k + 1).

        Raises
        ------
        ValueError
            If the kernel is not square with an odd side.
        DimensionMismatch
            If the tensor is smaller than the kernel.
        """
        weights = np.asarray(kernel, dtype=np.float64)
        if weights.ndim != 2 or weights.shape[0] != weights.shape[1] or weights.shape[0] % 2 == 0:
            raise ValueError(f"Kernel must be square with an odd side, got shape {weights.shape}")

        size = weights.shape[0]
        out_rows = self.rows - size + 1
        out_cols = self.cols - size + 1
        if out_rows < 1 or out_cols < 1:
            raise DimensionMismatch(
                f"Cannot correlate a {self.rows}x{self.cols} tensor with a {size}x{size} kernel"
            )

        out = np.zeros((out_rows, out_cols), dtype=np.float64)
        for dy in range(size):
            for dx in range(size):
                out += weights[dy, dx] * self._data[dy:dy + out_rows, dx:dx + out_cols]
        return Tensor._wrap(out)

    def broadcast_func(self, scalar: float, fn: Callable[[np.ndarray, float], np.ndarray]) -> Tensor:
        """Apply `fn(element, scalar)` elementwise; `fn` must accept arrays (e.g. a numpy ufunc)."""
        # fn may hand back its input (or a view of it); copy before freezing.
        return Tensor._wrap(np.array(fn(self._data, scalar), dtype=np.float64, copy=True))

    def broadcast_add(self, scalar: float) -> Tensor:
        return self.broadcast_func(scalar, np.add)

    def broadcast_mul(self, scalar: float) -> Tensor:
        return self.broadcast_func(scalar, np.multiply)

    def maximum(self, scalar: float) -> Tensor:
        return self.broadcast_func(scalar, np.maximum)

    def minimum(self, scalar: float) -> Tensor:
        return self.broadcast_func(scalar, np.minimum)

    def add(self, other: Tensor) -> Tensor:
        """
        Elementwise sum.

        Raises
        ------
        DimensionMismatch
            If the shapes differ.
        """
        if self.shape != other.shape:
            raise DimensionMismatch(f"Cannot add tensors of shape {self.shape} and {other.shape}")
        return Tensor._wrap(self._data + other._data)

    def clip(self, lo: float, hi: float) -> Tensor:
        return Tensor._wrap(np.clip(self._data, lo, hi))

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape})"


def _freeze(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array
