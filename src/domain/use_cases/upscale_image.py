"""
Upscale Image Use-Case.

This module wires the reconstruction workflow together: reading the model
and the source image, enlarging and converting it, running the inference
engine on the luminance channel and writing the result.
"""
import logging

import numpy as np

from src.domain.entities.tensor import Tensor
from src.domain.interfaces.image_codec import ColorConverter, ImageCodec
from src.domain.interfaces.network_loader import NetworkLoader
from src.domain.use_cases.inference_engine import InferenceEngine
from src.domain.use_cases.plane_assembler import assemble

logger = logging.getLogger(__name__)


class UpscaleImage:
    """
    Use-case for enlarging an image and reconstructing its detail.

    This use-case orchestrates the workflow of:
    1. Validating the output path and loading the network
    2. Decoding the source image, enlarged by nearest neighbour
    3. Running the engine on the luminance channel
    4. Recombining with the original chroma and saving the result

    Attributes
    ----------
    network_loader : NetworkLoader
        Reads the model description.
    image_codec : ImageCodec
        Decodes the source and encodes the result.
    color_converter : ColorConverter
        Converts between RGB and YCbCr.
    engine : InferenceEngine
        Runs the network.
    model_path : str
        Model description to load.
    input_path : str
        Source image.
    output_path : str
        Destination image; its extension selects the format.
    scale : int
        Nearest-neighbour enlargement applied before reconstruction.
    """

    def __init__(
        self,
        network_loader: NetworkLoader,
        image_codec: ImageCodec,
        color_converter: ColorConverter,
        engine: InferenceEngine,
        model_path: str,
        input_path: str,
        output_path: str,
        scale: int = 2,
    ) -> None:
        self.network_loader = network_loader
        self.image_codec = image_codec
        self.color_converter = color_converter
        self.engine = engine
        self.model_path = model_path
        self.input_path = input_path
        self.output_path = output_path
        self.scale = scale

    def run(self) -> np.ndarray:
        """
        Execute the workflow.

        Returns
        -------
        np.ndarray
            The saved RGB raster, shape (H, W, 3), dtype uint8.

        Raises
        ------
        ConfigurationError
            If the model, the source image or the output format is unusable.
            Raised before any inference work starts.
        """
        self.image_codec.validate_save_path(self.output_path)

        logger.info(f"Loading model from {self.model_path}...")
        network = self.network_loader.load(self.model_path)
        logger.info(f"Loaded network with {len(network)} layer(s).")

        logger.info(f"Loading image from {self.input_path} (scale x{self.scale})...")
        rgb = self.image_codec.load(self.input_path, scale=self.scale)
        height, width = rgb.shape[:2]
        logger.info(f"Reconstructing {width}x{height} image...")

        ycbcr = self.color_converter.to_ycbcr(rgb)
        luminance = Tensor(ycbcr[:, :, 0])
        reconstructed = self.engine.run(luminance, network)

        result = self.color_converter.to_rgb(assemble(reconstructed, ycbcr[:, :, 1:]))
        self.image_codec.save(self.output_path, result)
        logger.info(f"Saved reconstructed image to {self.output_path}")
        return result
