from __future__ import annotations


class ZeroVectorError(ValueError):
    """A vector with (near) zero length was asked for its direction."""


class InvalidRadiusError(ValueError):
    def __init__(self, radius: float) -> None:
        super().__init__(f"Sphere radius must be positive, got {radius}")
        self.radius = radius


class InvalidScaleError(ValueError):
    def __init__(self, scale: float) -> None:
        super().__init__(f"Cube scale must be positive, got {scale}")
        self.scale = scale


class InvalidRefractiveIndexError(ValueError):
    def __init__(self, refractive_index: float) -> None:
        super().__init__(f"Refractive index must be positive, got {refractive_index}")
        self.refractive_index = refractive_index


class DiracBsdfError(NotImplementedError):
    """The material scatters through a Dirac delta, so its BSDF has no finite value."""
