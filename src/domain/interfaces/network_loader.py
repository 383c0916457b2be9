from abc import ABC, abstractmethod

from src.domain.entities.network import Network


class NetworkLoader(ABC):
    """Abstract interface for reading a network description."""

    @abstractmethod
    def load(self, path: str) -> Network:
        """
        Read the network stored at `path`.

        Parameters
        ----------
        path : str
            Location of the model description.

        Returns
        -------
        Network
            Layers in execution order.

        Raises
        ------
        ConfigurationError
            If the description is missing, unreadable or malformed.
        """
        pass
