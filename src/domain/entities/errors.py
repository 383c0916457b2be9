"""Error taxonomy for image reconstruction."""


class ReconstructionError(Exception):
    """Base class for every failure raised while reconstructing an image."""


class ConfigurationError(ReconstructionError):
    """
    A model file or source image is missing, unreadable or malformed.

    Raised before any inference starts.
    """


class ShapeInvariantViolation(ReconstructionError):
    """The network did not reduce the plane set to exactly one plane."""


class DimensionMismatch(ReconstructionError, ValueError):
    """Two tensors with incompatible shapes were combined."""
