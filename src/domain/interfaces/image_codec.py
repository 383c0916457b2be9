"""
Image Codec Interface.

This module defines the boundary between the reconstruction workflow and
image files. Rasters cross it as numpy arrays of shape (H, W, 3), dtype uint8.
"""
from abc import ABC, abstractmethod

import numpy as np


class ImageCodec(ABC):
    """Abstract interface for decoding and encoding RGB rasters."""

    @abstractmethod
    def validate_save_path(self, path: str) -> None:
        """
        Check that `path` names a format this codec can write.

        This method should be called BEFORE inference to fail fast.

        Raises
        ------
        ConfigurationError
            If the output format is not supported.
        """
        pass

    @abstractmethod
    def load(self, path: str, scale: int = 1) -> np.ndarray:
        """
        Decode an image and enlarge it by an integer factor (nearest neighbour).

        Parameters
        ----------
        path : str
            Source image file.
        scale : int
            Enlargement factor applied to both dimensions.

        Returns
        -------
        np.ndarray
            RGB raster of shape (H * scale, W * scale, 3), dtype uint8.

        Raises
        ------
        ConfigurationError
            If the file is missing or cannot be decoded.
        """
        pass

    @abstractmethod
    def save(self, path: str, rgb: np.ndarray) -> None:
        """
        Encode an RGB raster, choosing the format from the file extension.

        Parameters
        ----------
        path : str
            Destination file.
        rgb : np.ndarray
            Raster of shape (H, W, 3), dtype uint8.
        """
        pass


class ColorConverter(ABC):
    """Abstract interface for RGB <-> YCbCr conversion of uint8 rasters."""

    @abstractmethod
    def to_ycbcr(self, rgb: np.ndarray) -> np.ndarray:
        """Convert an (H, W, 3) RGB raster to YCbCr, channel 0 being luminance."""
        pass

    @abstractmethod
    def to_rgb(self, ycbcr: np.ndarray) -> np.ndarray:
        """Convert an (H, W, 3) YCbCr raster back to RGB."""
        pass
