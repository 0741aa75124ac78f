from __future__ import annotations

import math

import numpy as np

from pathtracer.errors import InvalidRadiusError
from pathtracer.sampling.sphere import SphereSampler
from pathtracer.surfaces.shape import Shape, ShapeId, ShapeKind
from pathtracer.typings.hit import RayIntersection, SurfaceSide
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.utils.bounding_box import BoundingBox
from pathtracer.utils.vector_operations import vector_dot


class Sphere(Shape):
    def __init__(self, center: np.ndarray, radius: float) -> None:
        if not radius > 0.0:
            raise InvalidRadiusError(radius)
        self.center: np.ndarray = np.asarray(center, dtype=float)
        self.radius: float = float(radius)

    def shape_kind(self) -> ShapeKind:
        return ShapeKind.SPHERE

    def hit(self, ray: Ray, distance_range: DisRange) -> RayIntersection | None:
        origin_to_center = ray.origin - self.center
        quadratic_a = vector_dot(ray.direction, ray.direction)
        half_b = vector_dot(origin_to_center, ray.direction)
        quadratic_c = vector_dot(origin_to_center, origin_to_center) - self.radius * self.radius

        discriminant = half_b * half_b - quadratic_a * quadratic_c
        if discriminant < 0.0:
            return None

        sqrt_discriminant = math.sqrt(discriminant)
        for hit_distance in (
            (-half_b - sqrt_discriminant) / quadratic_a,
            (-half_b + sqrt_discriminant) / quadratic_a,
        ):
            if hit_distance > 0.0 and distance_range.contains(hit_distance):
                return self._intersection_at(ray, hit_distance)
        return None

    def _intersection_at(self, ray: Ray, hit_distance: float) -> RayIntersection:
        hit_point = ray.at(hit_distance)
        outward_normal = (hit_point - self.center) / self.radius
        if vector_dot(outward_normal, ray.direction) > 0.0:
            # leaving the sphere: the ray started inside
            return RayIntersection(hit_distance, hit_point, -outward_normal, SurfaceSide.BACK)
        return RayIntersection(hit_distance, hit_point, outward_normal, SurfaceSide.FRONT)

    def bounding_box(self) -> BoundingBox | None:
        offset = np.full(3, self.radius)
        return BoundingBox(self.center - offset, self.center + offset)

    def get_sampler(self, shape_id: ShapeId) -> SphereSampler:
        return SphereSampler(shape_id, self)
