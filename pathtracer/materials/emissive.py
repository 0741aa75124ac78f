from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pathtracer.materials.material import Material, MaterialKind
from pathtracer.typings.color import black
from pathtracer.typings.hit import RayIntersection, SurfaceSide
from pathtracer.typings.ray import Ray

if TYPE_CHECKING:
    from pathtracer.renderer import Context


class Emissive(Material):
    """Area-light surface: emits `radiance` from its front side and scatters nothing."""

    def __init__(self, radiance: np.ndarray) -> None:
        self.radiance: np.ndarray = np.asarray(radiance, dtype=float)

    def material_kind(self) -> MaterialKind:
        return MaterialKind.EMISSIVE

    def bsdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> np.ndarray:
        return black()

    def shade(self, context: Context, ray: Ray, intersection: RayIntersection, depth: int) -> np.ndarray:
        if intersection.side == SurfaceSide.BACK:
            return black()
        return self.radiance.copy()
