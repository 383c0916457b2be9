"""
Observability module for inference runs.

This module provides:
- ProgressTracker implementations (ConsoleProgressTracker, SilentProgressTracker)
- Progress bar integration using tqdm
"""
from tqdm import tqdm

from src.domain.entities.layer import Layer
from src.domain.interfaces.progress_tracker import ProgressTracker


class ConsoleProgressTracker(ProgressTracker):
    """
    Progress tracker with a tqdm progress bar on stderr.

    The bar counts convolutions against the network's declared total and
    shows the current layer in its description.

    Attributes
    ----------
    leave : bool
        Whether the bar stays on screen after the run.
    """

    def __init__(self, leave: bool = True) -> None:
        """
        Initialize the ConsoleProgressTracker.

        Parameters
        ----------
        leave : bool, optional
            Whether the bar stays on screen after the run. Default is True.
        """
        self.leave = leave
        self._pbar: tqdm | None = None
        self._num_layers = 0

    def on_run_start(self, total_convolutions: int, num_layers: int) -> None:
        """
        Called when a run begins. Initializes the progress bar.

        Parameters
        ----------
        total_convolutions : int
            Declared number of convolutions across the whole network.
        num_layers : int
            Number of layers in the network.
        """
        self._num_layers = num_layers
        self._pbar = tqdm(
            total=total_convolutions,
            desc="Reconstructing",
            unit="conv",
            leave=self.leave,
        )

    def on_layer_start(self, index: int, layer: Layer) -> None:
        """Show the current layer in the bar description."""
        if self._pbar is not None:
            self._pbar.set_description(f"Layer {index + 1}/{self._num_layers}")
            self._pbar.set_postfix({"planes": f"{layer.n_input_plane}->{layer.n_output_plane}"})

    def on_convolution_end(self, completed: int, total: int) -> None:
        """
        Advance the bar to `completed`.

        Parameters
        ----------
        completed : int
            Convolutions completed so far.
        total : int
            Declared total.
        """
        if self._pbar is not None and completed > self._pbar.n:
            self._pbar.update(completed - self._pbar.n)

    def on_run_end(self) -> None:
        """Called when the run completes. Closes the progress bar."""
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None


class SilentProgressTracker(ProgressTracker):
    """
    Progress tracker that produces no output.

    Useful for testing or when running in non-interactive environments
    where progress output is not desired.
    """

    def on_run_start(self, total_convolutions: int, num_layers: int) -> None:
        """No-op implementation."""
        pass

    def on_layer_start(self, index: int, layer: Layer) -> None:
        """No-op implementation."""
        pass

    def on_convolution_end(self, completed: int, total: int) -> None:
        """No-op implementation."""
        pass

    def on_run_end(self) -> None:
        """No-op implementation."""
        pass
