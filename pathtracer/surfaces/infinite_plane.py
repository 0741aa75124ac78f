from __future__ import annotations

import numpy as np

from pathtracer.surfaces.shape import Shape, ShapeKind
from pathtracer.typings.hit import RayIntersection, SurfaceSide
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.utils.bounding_box import BoundingBox
from pathtracer.utils.vector_operations import normalize_vector, vector_dot


class Plane(Shape):
    def __init__(self, point: np.ndarray, normal: np.ndarray) -> None:
        self.point: np.ndarray = np.asarray(point, dtype=float)
        self.normal: np.ndarray = normalize_vector(normal)

    def shape_kind(self) -> ShapeKind:
        return ShapeKind.PLANE

    def hit(self, ray: Ray, distance_range: DisRange) -> RayIntersection | None:
        return intersect_plane(ray, distance_range, self.point, self.normal)

    def bounding_box(self) -> BoundingBox | None:
        return None


def intersect_plane(
    ray: Ray,
    distance_range: DisRange,
    point: np.ndarray,
    normal: np.ndarray,
) -> RayIntersection | None:
    direction_dot_normal = vector_dot(ray.direction, normal)
    if direction_dot_normal == 0.0: # parallel, including a ray lying in the plane
        return None

    hit_distance = vector_dot(point - ray.origin, normal) / direction_dot_normal
    if hit_distance <= 0.0 or not distance_range.contains(hit_distance):
        return None

    hit_point = ray.at(hit_distance)
    if direction_dot_normal < 0.0:
        return RayIntersection(hit_distance, hit_point, normal, SurfaceSide.FRONT)
    return RayIntersection(hit_distance, hit_point, -normal, SurfaceSide.BACK)
