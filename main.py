"""
CLI entry point for enlarging an image with a reconstruction network.

Usage:
    python main.py -i small.png -m models/scale2.0x_model.json
    python main.py -i small.png -o big.jpg -m models/scale2.0x_model.json -c 4
    python main.py --config upscale.toml
"""
import argparse
import logging
import sys

from src.domain.entities.errors import ReconstructionError
from src.domain.use_cases.inference_engine import InferenceEngine
from src.domain.use_cases.upscale_image import UpscaleImage
from src.infrastructure.configuration import UpscaleConfiguration
from src.infrastructure.json_network_loader import JsonNetworkLoader
from src.infrastructure.logging import setup_logging
from src.infrastructure.observability import ConsoleProgressTracker, SilentProgressTracker
from src.infrastructure.pillow_codec import PillowColorConverter, PillowImageCodec

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv=None):
    """
    Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="waifu2x",
        description="Enlarge an image 2x and reconstruct its detail with a pretrained network.",
    )
    parser.add_argument(
        "-i",
        "--input",
        help="Input image file path",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output image file path, .png or .jpg (default: dst.png)",
    )
    parser.add_argument(
        "-m",
        "--model",
        help="Path of the JSON model",
    )
    parser.add_argument(
        "-c",
        "--cpu",
        dest="workers",
        type=int,
        help="Number of worker threads used for convolutions",
    )
    parser.add_argument(
        "--config",
        help="Path to an upscale configuration TOML file; command-line flags take precedence",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Hide the progress bar",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def build_configuration(args: argparse.Namespace) -> UpscaleConfiguration:
    """
    Merge the optional TOML file with command-line flags.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments.

    Returns
    -------
    UpscaleConfiguration
        The effective configuration.
    """
    overrides = {
        "input": args.input,
        "model": args.model,
        "output": args.output,
        "workers": args.workers,
    }
    if args.quiet:
        overrides["progress"] = False

    if args.config is not None:
        return UpscaleConfiguration.load(args.config, **overrides)

    if args.input is None or args.model is None:
        raise ValueError("Both --input and --model are required when --config is not given")
    return UpscaleConfiguration(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None) -> int:
    """
    Main entry point for reconstructing an image.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    int
        Process exit status.
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = build_configuration(args)
    except (FileNotFoundError, TypeError, ValueError) as err:
        logger.error(f"Invalid configuration: {err}")
        return 1

    tracker = ConsoleProgressTracker() if config.progress else SilentProgressTracker()
    use_case = UpscaleImage(
        network_loader=JsonNetworkLoader(),
        image_codec=PillowImageCodec(jpeg_quality=config.jpeg_quality),
        color_converter=PillowColorConverter(),
        engine=InferenceEngine(max_workers=config.workers, tracker=tracker),
        model_path=config.model,
        input_path=config.input,
        output_path=config.output,
        scale=config.scale,
    )

    try:
        use_case.run()
    except ReconstructionError as err:
        logger.error(f"Reconstruction failed: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
