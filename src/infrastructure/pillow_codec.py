"""
Pillow Image Codec Implementation.

This module provides Pillow-backed implementations of the ImageCodec and
ColorConverter interfaces. Any format Pillow can decode is accepted as
input; output is written as PNG or JPEG depending on the file extension.
"""
import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from src.domain.entities.errors import ConfigurationError
from src.domain.interfaces.image_codec import ColorConverter, ImageCodec

logger = logging.getLogger(__name__)


class PillowImageCodec(ImageCodec):
    """
    Pillow implementation of the ImageCodec interface.

    Parameters
    ----------
    jpeg_quality : int
        Quality used when writing JPEG files (1-95).
    """

    SUPPORTED_FORMATS = {".png": "PNG", ".jpg": "JPEG", ".jpeg": "JPEG"}

    def __init__(self, jpeg_quality: int = 75) -> None:
        self.jpeg_quality = jpeg_quality

    def validate_save_path(self, path: str) -> None:
        """
        Validate that the output path ends with a supported extension.

        Raises
        ------
        ConfigurationError
            If the extension is not one of .png, .jpg or .jpeg.
        """
        self._format_for(path)

    def load(self, path: str, scale: int = 1) -> np.ndarray:
        """
        Decode `path` as RGB and enlarge it `scale` times with nearest neighbour.

        Parameters
        ----------
        path : str
            Source image file.
        scale : int
            Integer enlargement factor.

        Returns
        -------
        np.ndarray
            Array of shape (H * scale, W * scale, 3), dtype uint8.

        Raises
        ------
        ConfigurationError
            If the file is missing or cannot be decoded.
        """
        if scale < 1:
            raise ValueError(f"Scale must be a positive integer, got {scale}")
        if not os.path.exists(path):
            raise ConfigurationError(f"Source image not found at {path}")

        try:
            with Image.open(path) as img:
                rgb = img.convert("RGB")
        except (UnidentifiedImageError, OSError) as err:
            raise ConfigurationError(f"Cannot decode image {path}: {err}") from err

        if scale != 1:
            width, height = rgb.size
            rgb = rgb.resize((width * scale, height * scale), resample=Image.Resampling.NEAREST)
        return np.array(rgb, dtype=np.uint8)

    def save(self, path: str, rgb: np.ndarray) -> None:
        """
        Save an RGB raster to `path`.

        Parameters
        ----------
        path : str
            Destination file; must end with .png, .jpg or .jpeg.
        rgb : np.ndarray
            Array of shape (H, W, 3), dtype uint8.
        """
        image_format = self._format_for(path)

        output_dir = os.path.dirname(path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        img = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
        if image_format == "JPEG":
            img.save(path, format=image_format, quality=self.jpeg_quality)
        else:
            img.save(path, format=image_format)

    def _format_for(self, path: str) -> str:
        ext = os.path.splitext(path)[1].lower()
        if ext not in self.SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"Unsupported output format '{ext}' for {path}. "
                f"Expected one of: {', '.join(sorted(self.SUPPORTED_FORMATS))}"
            )
        return self.SUPPORTED_FORMATS[ext]


class PillowColorConverter(ColorConverter):
    """RGB <-> YCbCr conversion using Pillow's JPEG (ITU-R BT.601) transform."""

    def to_ycbcr(self, rgb: np.ndarray) -> np.ndarray:
        img = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
        return np.array(img.convert("YCbCr"), dtype=np.uint8)

    def to_rgb(self, ycbcr: np.ndarray) -> np.ndarray:
        ycbcr = np.ascontiguousarray(ycbcr, dtype=np.uint8)
        height, width = ycbcr.shape[:2]
        img = Image.frombytes("YCbCr", (width, height), ycbcr.tobytes())
        return np.array(img.convert("RGB"), dtype=np.uint8)
