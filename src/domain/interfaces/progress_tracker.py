"""
Progress Tracker Interface.

This module defines the abstract interface for observing the progress of
an inference run. Implementations can render a console progress bar,
log to a file, or stay silent.
"""
from abc import ABC, abstractmethod

from src.domain.entities.layer import Layer


class ProgressTracker(ABC):
    """
    Abstract interface for tracking inference progress.

    Trackers are pure observers: they never influence the computed result.
    All callbacks are invoked from the coordinating thread only.

    The lifecycle follows:
    1. on_run_start() - called once at the beginning
    2. For each layer:
       a. on_layer_start()
       b. For each finished convolution: on_convolution_end()
    3. on_run_end() - called once at the end, even when the run fails
    """

    @abstractmethod
    def on_run_start(self, total_convolutions: int, num_layers: int) -> None:
        """
        Called when a run begins.

        Parameters
        ----------
        total_convolutions : int
            Declared number of convolutions across the whole network.
        num_layers : int
            Number of layers in the network.
        """
        pass

    @abstractmethod
    def on_layer_start(self, index: int, layer: Layer) -> None:
        """
        Called before a layer's output planes are computed.

        Parameters
        ----------
        index : int
            Layer position in the network (0-indexed).
        layer : Layer
            The layer about to be executed.
        """
        pass

    @abstractmethod
    def on_convolution_end(self, completed: int, total: int) -> None:
        """
        Called each time a partial convolution is folded into its sum.

        Parameters
        ----------
        completed : int
            Convolutions completed so far; strictly increasing within a run.
        total : int
            Same value passed to on_run_start().
        """
        pass

    @abstractmethod
    def on_run_end(self) -> None:
        """Called when the run completes or aborts."""
        pass
