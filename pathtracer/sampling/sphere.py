from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from pathtracer.errors import ZeroVectorError
from pathtracer.sampling.light_sampling import LightSampling, RandomSource
from pathtracer.surfaces.shape import ShapeId
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import Ray
from pathtracer.typings.samples import LightSample
from pathtracer.utils.vector_operations import (
    normalize_vector,
    rotation_between,
    vector_dot,
    vector_length_squared,
    z_direction,
)

if TYPE_CHECKING:
    from pathtracer.materials.material import Material
    from pathtracer.surfaces.sphere import Sphere

# Rounding slack when testing whether a direction lies inside the cone.
CONE_COSINE_TOLERANCE: float = 1e-8


class SphereSampler(LightSampling):
    """Samples directions uniformly over the cone a sphere subtends from a shading point."""

    def __init__(self, shape_id: ShapeId, sphere: Sphere) -> None:
        self._id = shape_id
        self._sphere = sphere

    def id(self) -> ShapeId | None:
        return self._id

    def shape(self) -> Sphere | None:
        return self._sphere

    def light_sample(
        self,
        ray: Ray,
        intersection: RayIntersection,
        material: Material,
        rng: RandomSource,
    ) -> LightSample | None:
        # A Dirac material has no finite kernel to weight the light with.
        if material.material_kind().is_dirac:
            return None

        to_center = self._sphere.center - intersection.position
        cos_max = self._cos_max_half_cone_angle(to_center)

        azimuth = float(rng.random()) * 2.0 * math.pi
        z = 1.0 + float(rng.random()) * (cos_max - 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - z * z))
        local_direction = np.array([math.cos(azimuth) * sin_theta, math.sin(azimuth) * sin_theta, z])

        rotation = rotation_between(z_direction(), self._cone_axis(to_center))
        direction = normalize_vector(rotation @ local_direction)
        ray_next = Ray(intersection.position, direction)

        bsdf = material.bsdf(ray, intersection, ray_next)
        if not np.any(bsdf):
            return None

        cosine = vector_dot(direction, intersection.normal)
        pdf = 1.0 / _cone_solid_angle(cos_max)
        coefficient = bsdf * cosine / pdf
        return LightSample(ray_next, coefficient, pdf, self._id)

    def light_pdf(self, intersection: RayIntersection, ray_next: Ray) -> float:
        to_center = self._sphere.center - intersection.position
        cos_max = self._cos_max_half_cone_angle(to_center)

        cos_ray_center = vector_dot(ray_next.direction, self._cone_axis(to_center))
        if cos_ray_center >= cos_max - CONE_COSINE_TOLERANCE:
            return 1.0 / _cone_solid_angle(cos_max)
        return 0.0

    def _cos_max_half_cone_angle(self, to_center: np.ndarray) -> float:
        distance_squared = vector_length_squared(to_center)
        radius_squared = self._sphere.radius * self._sphere.radius
        if distance_squared < radius_squared:
            # Inside the light: it covers every direction.
            return -1.0
        return math.sqrt(max(0.0, 1.0 - radius_squared / distance_squared))

    @staticmethod
    def _cone_axis(to_center: np.ndarray) -> np.ndarray:
        try:
            return normalize_vector(to_center)
        except ZeroVectorError:
            return z_direction()


def _cone_solid_angle(cos_max: float) -> float:
    return 2.0 * math.pi * (1.0 - cos_max)
