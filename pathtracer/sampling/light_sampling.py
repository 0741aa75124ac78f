from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

from pathtracer.surfaces.shape import Shape, ShapeId
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import Ray
from pathtracer.typings.samples import LightSample

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


class RandomSource(Protocol):
    """Anything drawing uniform floats in [0, 1), e.g. numpy.random.Generator."""

    def random(self) -> float:
        ...


class LightSampling(ABC):
    """Next-event estimation over one shape treated as an area light."""

    @abstractmethod
    def id(self) -> ShapeId | None:
        ...

    @abstractmethod
    def shape(self) -> Shape | None:
        ...

    @abstractmethod
    def light_sample(
        self,
        ray: Ray,
        intersection: RayIntersection,
        material: Material,
        rng: RandomSource,
    ) -> LightSample | None:
        ...

    @abstractmethod
    def light_pdf(self, intersection: RayIntersection, ray_next: Ray) -> float:
        """Solid-angle density with which `light_sample` would pick `ray_next`."""
