"""Recombine a reconstructed luminance plane with untouched chroma."""
import numpy as np

from src.domain.entities.errors import DimensionMismatch
from src.domain.entities.tensor import Tensor


def assemble(luminance: Tensor, chroma: np.ndarray) -> np.ndarray:
    """
    Build a YCbCr raster from a luminance plane and per-pixel chroma pairs.

    Luminance is clipped to [0, 255] and truncated toward zero; chroma is
    copied unchanged.

    Parameters
    ----------
    luminance : Tensor
        H x W reconstructed luminance in the 0-255 range.
    chroma : np.ndarray
        Array of shape (H, W, 2) holding (Cb, Cr) for each pixel.

    Returns
    -------
    np.ndarray
        Array of shape (H, W, 3), dtype uint8, channels (Y, Cb, Cr).

    Raises
    ------
    DimensionMismatch
        If the chroma grid does not match the luminance plane.
    """
    chroma = np.asarray(chroma)
    if chroma.ndim != 3 or chroma.shape[2] != 2 or chroma.shape[:2] != luminance.shape:
        raise DimensionMismatch(
            f"Chroma of shape {chroma.shape} does not match luminance {luminance.shape}"
        )

    y = np.clip(luminance.to_array(), 0.0, 255.0).astype(np.uint8)
    return np.dstack([y, chroma.astype(np.uint8)])
