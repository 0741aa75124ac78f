from __future__ import annotations

from typing import TYPE_CHECKING

from pathtracer.sampling.light_sampling import LightSampling, RandomSource
from pathtracer.surfaces.shape import Shape, ShapeId
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import Ray
from pathtracer.typings.samples import LightSample

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


class EmptySampler(LightSampling):
    """Stands in for "no light source": never samples, zero density everywhere."""

    def id(self) -> ShapeId | None:
        return None

    def shape(self) -> Shape | None:
        return None

    def light_sample(
        self,
        ray: Ray,
        intersection: RayIntersection,
        material: Material,
        rng: RandomSource,
    ) -> LightSample | None:
        return None

    def light_pdf(self, intersection: RayIntersection, ray_next: Ray) -> float:
        return 0.0
