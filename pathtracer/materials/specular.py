from __future__ import annotations

from pathtracer.materials.material import DiracMaterial, MaterialKind, reflected_ray
from pathtracer.sampling.light_sampling import RandomSource
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import Ray


class Specular(DiracMaterial):
    """Perfect mirror tinted by `color`. Consumes no randomness."""

    def material_kind(self) -> MaterialKind:
        return MaterialKind.SPECULAR

    def next_ray_from(self, ray: Ray, intersection: RayIntersection, rng: RandomSource) -> Ray:
        return reflected_ray(ray, intersection)
