from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.utils.bounding_box import BoundingBox

if TYPE_CHECKING:
    from pathtracer.sampling.light_sampling import LightSampling


class ShapeKind(str, Enum):
    PLANE = "plane"
    SPHERE = "sphere"
    CUBE = "cube"


@dataclass(frozen=True, slots=True)
class ShapeId:
    """Stable handle of a shape inside a scene: its kind plus a per-kind index."""

    kind: ShapeKind
    index: int


class Shape(ABC):
    @abstractmethod
    def shape_kind(self) -> ShapeKind:
        ...

    @abstractmethod
    def hit(self, ray: Ray, distance_range: DisRange) -> RayIntersection | None:
        """Nearest intersection with a positive distance inside `distance_range`."""

    @abstractmethod
    def bounding_box(self) -> BoundingBox | None:
        """None for shapes of infinite extent."""

    def get_sampler(self, shape_id: ShapeId) -> LightSampling | None:
        """Light sampler treating this shape as an area light, if the shape supports it."""
        return None
