from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from pathtracer.materials.material import Material
from pathtracer.sampling.light_sampling import LightSampling
from pathtracer.surfaces.shape import Shape, ShapeId, ShapeKind
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.utils.bounding_box import BoundingBox

# Hits closer than this to the ray origin are the surface the ray just left.
SELF_INTERSECTION_EPSILON: float = 1e-6


@dataclass(frozen=True, slots=True)
class Entity:
    shape_id: ShapeId
    shape: Shape
    material: Material


@dataclass(frozen=True, slots=True)
class SceneHit:
    shape_id: ShapeId
    intersection: RayIntersection
    material: Material


class Scene:
    """Shapes paired with materials, plus the registry of sampleable lights."""

    def __init__(self) -> None:
        self.entities: List[Entity] = []
        self._kind_counts: Dict[ShapeKind, int] = {}
        self._samplers: Dict[ShapeId, LightSampling] = {}

    def add(self, shape: Shape, material: Material, light: bool = False) -> ShapeId:
        kind = shape.shape_kind()
        shape_id = ShapeId(kind, self._kind_counts.get(kind, 0))
        self._kind_counts[kind] = shape_id.index + 1
        self.entities.append(Entity(shape_id, shape, material))

        if light:
            # shapes without a sampler still emit when hit, they just can't be sampled directly
            sampler = shape.get_sampler(shape_id)
            if sampler is not None:
                self._samplers[shape_id] = sampler
        return shape_id

    def find_closest_hit(self, ray: Ray, distance_range: DisRange) -> SceneHit | None:
        if distance_range.end < SELF_INTERSECTION_EPSILON or (
            distance_range.end == SELF_INTERSECTION_EPSILON and not distance_range.include_end
        ):
            # nothing left once self-intersections are excluded
            return None
        distance_range = distance_range.advance_start(SELF_INTERSECTION_EPSILON)
        best_hit: SceneHit | None = None
        for entity in self.entities:
            intersection = entity.shape.hit(ray, distance_range)
            if intersection is None:
                continue
            if best_hit is None or intersection.distance < best_hit.intersection.distance:
                best_hit = SceneHit(entity.shape_id, intersection, entity.material)
        return best_hit

    def light_samplers(self) -> List[LightSampling]:
        return list(self._samplers.values())

    def sampler_for(self, shape_id: ShapeId) -> LightSampling | None:
        return self._samplers.get(shape_id)

    def bounding_box(self) -> BoundingBox | None:
        boxes = [box for box in (entity.shape.bounding_box() for entity in self.entities) if box is not None]
        if not boxes:
            return None
        return BoundingBox.from_boxes(boxes)
