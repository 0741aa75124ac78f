from __future__ import annotations

import math

import numpy as np

from pathtracer.errors import InvalidRefractiveIndexError
from pathtracer.materials.material import DiracMaterial, MaterialKind, reflected_ray
from pathtracer.sampling.light_sampling import RandomSource
from pathtracer.typings.hit import RayIntersection, SurfaceSide
from pathtracer.typings.ray import Ray
from pathtracer.utils.vector_operations import normalize_vector, vector_dot, vector_length_squared


class Refractive(DiracMaterial):
    """Smooth dielectric.

    Each shading event draws one uniform number and compares it with the
    Schlick reflectance to pick between mirror reflection and Snell
    refraction. Refraction falls back to reflection on total internal
    reflection.
    """

    def __init__(self, color: np.ndarray, refractive_index: float) -> None:
        if not refractive_index > 0.0:
            raise InvalidRefractiveIndexError(refractive_index)
        super().__init__(color)
        self.refractive_index: float = float(refractive_index)

    def material_kind(self) -> MaterialKind:
        return MaterialKind.REFRACTIVE

    def next_ray_from(self, ray: Ray, intersection: RayIntersection, rng: RandomSource) -> Ray:
        return self.next_ray(ray, intersection, float(rng.random()))

    def next_ray(self, ray: Ray, intersection: RayIntersection, reflection_determination: float) -> Ray:
        cos_i = abs(vector_dot(ray.direction, intersection.normal))
        if intersection.side == SurfaceSide.FRONT:
            ri = self.refractive_index
        else:
            ri = 1.0 / self.refractive_index

        if reflection_determination < schlick_reflectance(cos_i, ri):
            return reflected_ray(ray, intersection)
        refracted = self._refracted_ray(ray, intersection, cos_i, ri)
        if refracted is None:
            return reflected_ray(ray, intersection)
        return refracted

    @staticmethod
    def _refracted_ray(ray: Ray, intersection: RayIntersection, cos_i: float, ri: float) -> Ray | None:
        normal = intersection.normal
        perpendicular = (ray.direction + cos_i * normal) / ri

        tmp = 1.0 - vector_length_squared(perpendicular)
        if tmp < 0.0: # total internal reflection
            return None

        parallel = -math.sqrt(tmp) * normal
        return Ray(intersection.position, normalize_vector(parallel + perpendicular))


def schlick_reflectance(cos_i: float, refractive_index: float) -> float:
    r0 = ((1.0 - refractive_index) / (1.0 + refractive_index)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos_i) ** 5
