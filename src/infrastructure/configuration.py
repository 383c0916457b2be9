import os
import tomllib
from dataclasses import dataclass, fields
from typing import Any


@dataclass
class UpscaleConfiguration:
    """Configuration for one image reconstruction run."""

    input: str
    model: str
    output: str = "dst.png"
    workers: int | None = None  # None lets the thread pool choose
    scale: int = 2
    jpeg_quality: int = 75
    progress: bool = True

    def __post_init__(self):
        """Reject values the engine or the codec cannot use."""
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.scale < 1:
            raise ValueError(f"scale must be at least 1, got {self.scale}")
        if not 1 <= self.jpeg_quality <= 95:
            raise ValueError(f"jpeg_quality must be between 1 and 95, got {self.jpeg_quality}")

    @classmethod
    def load(cls, config_path: str, **overrides: Any) -> "UpscaleConfiguration":
        """
        Load upscale configuration from a TOML file.

        Parameters
        ----------
        config_path : str
            Filesystem path to a TOML file containing an "upscale" table.
        **overrides : Any
            Field values taking precedence over the file. None values are ignored.

        Returns
        -------
        UpscaleConfiguration
            Instance populated from the "upscale" table and the overrides.

        Raises
        ------
        FileNotFoundError
            If no file exists at `config_path`.
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found at {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        upscale_data = data.get("upscale", {})
        merged = {**upscale_data, **{k: v for k, v in overrides.items() if v is not None}}
        known = {f.name for f in fields(cls)}
        unknown = set(merged) - known
        if unknown:
            raise ValueError(f"Unknown upscale configuration key(s): {', '.join(sorted(unknown))}")
        return cls(**merged)
