"""Network entity - ordered, read-only sequence of layers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from src.domain.entities.layer import Layer


@dataclass(frozen=True, eq=False)
class Network:
    """Ordered sequence of layers, in execution order."""

    layers: Sequence[Layer]

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", tuple(self.layers))

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.layers)

    @property
    def pad_radius(self) -> int:
        """
        Padding needed so the final plane matches the input size.

        Each valid correlation shrinks a plane by `layer.radius` on every side,
        so for 3x3 kernels this equals the number of layers.
        """
        return sum(layer.radius for layer in self.layers)

    @property
    def total_convolutions(self) -> int:
        """Sum of nInputPlane * nOutputPlane over all layers, used for progress."""
        return sum(layer.declared_convolutions for layer in self.layers)
