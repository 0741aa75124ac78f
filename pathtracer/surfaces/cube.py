from __future__ import annotations

import numpy as np

from pathtracer.errors import InvalidScaleError
from pathtracer.surfaces.shape import Shape, ShapeKind
from pathtracer.typings.hit import RayIntersection, SurfaceSide
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.utils.bounding_box import BoundingBox
from pathtracer.utils.vector_operations import vector_dot


class Cube(Shape):
    """Axis-aligned cube of edge length `scale` centered at `position`."""

    def __init__(self, position: np.ndarray, scale: float) -> None:
        if not scale > 0.0:
            raise InvalidScaleError(scale)
        self.position: np.ndarray = np.asarray(position, dtype=float)
        self.scale: float = float(scale)

    def shape_kind(self) -> ShapeKind:
        return ShapeKind.CUBE

    def hit(self, ray: Ray, distance_range: DisRange) -> RayIntersection | None:
        half_scale = 0.5 * self.scale
        box_min = self.position - half_scale
        box_max = self.position + half_scale
        t_entry = -float("inf")
        t_exit = float("inf")

        for axis in range(3):
            direction_component = float(ray.direction[axis])
            origin_component = float(ray.origin[axis])
            if direction_component == 0.0:
                if origin_component < box_min[axis] or origin_component > box_max[axis]:
                    return None
                continue

            inverse_direction = 1.0 / direction_component
            t_near = (float(box_min[axis]) - origin_component) * inverse_direction
            t_far = (float(box_max[axis]) - origin_component) * inverse_direction
            if t_near > t_far:
                t_near, t_far = t_far, t_near

            t_entry = max(t_entry, t_near)
            t_exit = min(t_exit, t_far)
            if t_exit < t_entry:
                return None

        for hit_distance in (t_entry, t_exit):
            if hit_distance > 0.0 and distance_range.contains(hit_distance):
                return self._intersection_at(ray, hit_distance)
        return None

    def _intersection_at(self, ray: Ray, hit_distance: float) -> RayIntersection:
        hit_point = ray.at(hit_distance)

        # Face normal from whichever slab the point lies closest to.
        local_position = hit_point - self.position
        face_distances = np.abs(np.abs(local_position) - 0.5 * self.scale)
        closest_axis = int(np.argmin(face_distances))

        outward_normal = np.zeros(3, dtype=float)
        outward_normal[closest_axis] = 1.0 if local_position[closest_axis] >= 0 else -1.0

        if vector_dot(outward_normal, ray.direction) > 0.0:
            return RayIntersection(hit_distance, hit_point, -outward_normal, SurfaceSide.BACK)
        return RayIntersection(hit_distance, hit_point, outward_normal, SurfaceSide.FRONT)

    def bounding_box(self) -> BoundingBox | None:
        half_scale = 0.5 * self.scale
        return BoundingBox(self.position - half_scale, self.position + half_scale)
