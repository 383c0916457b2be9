"""
Inference Engine Use-Case.

This module runs a reconstruction network over a luminance plane:
edge padding, per-layer multi-plane correlation, bias and leaky
rectification, with the correlations of each output plane executed on a
thread pool.
"""
import logging
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from src.domain.entities.errors import DimensionMismatch, ShapeInvariantViolation
from src.domain.entities.layer import Layer
from src.domain.entities.network import Network
from src.domain.entities.tensor import Tensor
from src.domain.interfaces.progress_tracker import ProgressTracker

logger = logging.getLogger(__name__)

LEAKY_SLOPE = 0.1
INTENSITY_SCALE = 255.0


def leaky_relu(plane: Tensor) -> Tensor:
    """Return max(x, 0) + 0.1 * min(x, 0) for every element."""
    return plane.maximum(0.0).add(plane.minimum(0.0).broadcast_mul(LEAKY_SLOPE))


class InferenceEngine:
    """
    Reconstructs a luminance plane with a convolutional network.

    Attributes
    ----------
    max_workers : int | None
        Size of the thread pool used for correlations. None lets
        `ThreadPoolExecutor` pick its default. Never affects the result
        beyond floating-point summation order.
    tracker : ProgressTracker | None
        Optional observer notified as convolutions complete.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        tracker: Optional[ProgressTracker] = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self.tracker = tracker

    def run(self, luminance: Tensor | ArrayLike, network: Network) -> Tensor:
        """
        Run the network over an 8-bit-range luminance plane.

        Parameters
        ----------
        luminance : Tensor | ArrayLike
            H x W plane with values in [0, 255].
        network : Network
            Layers to apply, in order.

        Returns
        -------
        Tensor
            H x W reconstructed plane with values in [0, 255].

        Raises
        ------
        ShapeInvariantViolation
            If the last layer leaves anything other than one plane.
        DimensionMismatch
            If planes of different shapes meet during accumulation.
        """
        initial = luminance if isinstance(luminance, Tensor) else Tensor(luminance)
        padded = initial.pad(network.pad_radius, "edge")
        planes = [padded.broadcast_func(INTENSITY_SCALE, np.divide)]

        progress = _RunProgress(network.total_convolutions, self.tracker)
        if self.tracker is not None:
            self.tracker.on_run_start(progress.total, len(network))

        try:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                for index, layer in enumerate(network):
                    logger.debug(
                        "Layer %d/%d: %d input plane(s) -> %d output plane(s)",
                        index + 1, len(network), len(planes), layer.output_count(),
                    )
                    if self.tracker is not None:
                        self.tracker.on_layer_start(index, layer)
                    planes = self._run_layer(pool, index, layer, planes, progress)
        finally:
            if self.tracker is not None:
                self.tracker.on_run_end()

        if len(planes) != 1:
            raise ShapeInvariantViolation(
                f"Expected exactly one plane after {len(network)} layer(s), got {len(planes)}"
            )
        return planes[0].clip(0.0, 1.0).broadcast_mul(INTENSITY_SCALE)

    def _run_layer(
        self,
        pool: Executor,
        index: int,
        layer: Layer,
        planes: list[Tensor],
        progress: "_RunProgress",
    ) -> list[Tensor]:
        outputs = [
            self._output_plane(pool, index, layer, output_index, planes, progress)
            for output_index in range(layer.output_count())
        ]
        return [leaky_relu(plane) for plane in outputs]

    def _output_plane(
        self,
        pool: Executor,
        index: int,
        layer: Layer,
        output_index: int,
        planes: list[Tensor],
        progress: "_RunProgress",
    ) -> Tensor:
        kernels = layer.weight[output_index]
        count = layer.input_count(output_index, len(planes))
        if count == 0:
            raise ShapeInvariantViolation(
                f"Layer {index}, output plane {output_index}: no input planes to correlate"
            )

        futures = [pool.submit(planes[j].correlate, kernels[j]) for j in range(count)]
        partial: Optional[Tensor] = None
        try:
            for future in as_completed(futures):
                result = future.result()
                partial = result if partial is None else partial.add(result)
                progress.advance()
        except DimensionMismatch as err:
            for future in futures:
                future.cancel()
            raise DimensionMismatch(
                f"Layer {index}, output plane {output_index} "
                f"(input shape {planes[0].shape}): {err}"
            ) from err

        return partial.broadcast_add(layer.bias[output_index])


class _RunProgress:
    """Convolution counter owned by a single run; only the coordinating thread advances it."""

    def __init__(self, total: int, tracker: Optional[ProgressTracker]) -> None:
        self.total = total
        self.completed = 0
        self.tracker = tracker

    def advance(self) -> None:
        self.completed += 1
        if self.tracker is not None:
            self.tracker.on_convolution_end(self.completed, self.total)
