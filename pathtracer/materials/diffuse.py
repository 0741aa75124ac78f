from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from pathtracer.materials.material import CoefSampling, Material, MaterialKind
from pathtracer.sampling.light_sampling import RandomSource
from pathtracer.typings.color import black
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.typings.samples import CoefSample
from pathtracer.utils.vector_operations import normalize_vector, orthonormal_basis, vector_dot

if TYPE_CHECKING:
    from pathtracer.renderer import Context


class Diffuse(Material, CoefSampling):
    """Lambertian reflector.

    Shading combines one light sample (next-event estimation) with one
    cosine-weighted BSDF sample using the balance heuristic, so a light
    reached by both strategies is never counted twice.
    """

    def __init__(self, albedo: np.ndarray) -> None:
        self.albedo: np.ndarray = np.asarray(albedo, dtype=float)

    def material_kind(self) -> MaterialKind:
        return MaterialKind.DIFFUSE

    def bsdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> np.ndarray:
        if vector_dot(ray_next.direction, intersection.normal) <= 0.0:
            return black()
        return self.albedo / math.pi

    def shade(self, context: Context, ray: Ray, intersection: RayIntersection, depth: int) -> np.ndarray:
        renderer = context.renderer
        # both the light ray and the BSDF ray would land past the ceiling
        if renderer.exceeds_depth(context, depth + 1):
            return black()
        radiance = self._shade_light_sample(context, ray, intersection, depth)

        sample = self.coef_sample(ray, intersection, context.rng)
        hit = renderer.intersect(sample.ray, DisRange.positive())
        incoming = renderer.shade_hit(context, sample.ray, hit, depth + 1)

        weight = 1.0
        if hit is not None:
            sampler = renderer.scene.sampler_for(hit.shape_id)
            if sampler is not None:
                light_pdf = sampler.light_pdf(intersection, sample.ray) / len(renderer.scene.light_samplers())
                weight = sample.pdf / (sample.pdf + light_pdf)
        return radiance + weight * sample.coefficient * incoming

    def _shade_light_sample(
        self,
        context: Context,
        ray: Ray,
        intersection: RayIntersection,
        depth: int,
    ) -> np.ndarray:
        renderer = context.renderer
        samplers = renderer.scene.light_samplers()
        if not samplers:
            return black()

        index = min(int(context.rng.random() * len(samplers)), len(samplers) - 1)
        sample = samplers[index].light_sample(ray, intersection, self, context.rng)
        if sample is None:
            return black()

        hit = renderer.intersect(sample.ray, DisRange.positive())
        if hit is None or hit.shape_id != sample.shape_id:
            return black() # occluded

        light_pdf = sample.pdf / len(samplers)
        weight = light_pdf / (light_pdf + self.coef_pdf(ray, intersection, sample.ray))
        emitted = renderer.shade_hit(context, sample.ray, hit, depth + 1)
        return weight * len(samplers) * sample.coefficient * emitted

    def coef_sample(self, ray: Ray, intersection: RayIntersection, rng: RandomSource) -> CoefSample:
        # cosine-weighted hemisphere around the normal
        azimuth = 2.0 * math.pi * float(rng.random())
        r2 = float(rng.random())
        sin_theta = math.sqrt(r2)
        local_x = math.cos(azimuth) * sin_theta
        local_y = math.sin(azimuth) * sin_theta
        local_z = math.sqrt(1.0 - r2)

        tangent, bitangent, normal = orthonormal_basis(intersection.normal)
        direction = normalize_vector(local_x * tangent + local_y * bitangent + local_z * normal)
        ray_next = Ray(intersection.position, direction)
        return CoefSample(ray_next, self.albedo.copy(), self.coef_pdf(ray, intersection, ray_next))

    def coef_pdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> float:
        return max(vector_dot(ray_next.direction, intersection.normal), 0.0) / math.pi
