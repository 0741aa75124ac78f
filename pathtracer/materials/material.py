from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from pathtracer.errors import DiracBsdfError
from pathtracer.sampling.light_sampling import RandomSource
from pathtracer.typings.hit import RayIntersection
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.typings.samples import CoefSample
from pathtracer.utils.vector_operations import normalize_vector, reflect_vector

if TYPE_CHECKING:
    from pathtracer.renderer import Context


class MaterialKind(str, Enum):
    SPECULAR = "specular"
    REFRACTIVE = "refractive"
    DIFFUSE = "diffuse"
    EMISSIVE = "emissive"

    @property
    def is_dirac(self) -> bool:
        """True when the material scatters into a single direction and has no finite BSDF."""
        return self in (MaterialKind.SPECULAR, MaterialKind.REFRACTIVE)


class Material(ABC):
    @abstractmethod
    def material_kind(self) -> MaterialKind:
        ...

    @abstractmethod
    def bsdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> np.ndarray:
        """Per-channel scattering kernel from `ray` into `ray_next`."""

    @abstractmethod
    def shade(self, context: Context, ray: Ray, intersection: RayIntersection, depth: int) -> np.ndarray:
        """Radiance leaving the surface back along `ray`."""

    def as_dyn(self) -> Material:
        return self


class CoefSampling(ABC):
    @abstractmethod
    def coef_sample(self, ray: Ray, intersection: RayIntersection, rng: RandomSource) -> CoefSample:
        ...

    @abstractmethod
    def coef_pdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> float:
        ...


class DiracMaterial(Material, CoefSampling):
    """Base for materials scattering into exactly one direction per sample.

    The sampled pdf is reported as 1: the delta is collapsed into a
    deterministic direction whose coefficient is already fully weighted.
    """

    def __init__(self, color: np.ndarray) -> None:
        self.color: np.ndarray = np.asarray(color, dtype=float)

    def bsdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> np.ndarray:
        raise DiracBsdfError(f"{type(self).__name__} BSDF is a Dirac delta and can't be evaluated")

    def shade(self, context: Context, ray: Ray, intersection: RayIntersection, depth: int) -> np.ndarray:
        sample = self.coef_sample(ray, intersection, context.rng)
        radiance = context.renderer.trace(context, sample.ray, DisRange.positive(), depth + 1)
        return sample.coefficient * radiance

    def coef_sample(self, ray: Ray, intersection: RayIntersection, rng: RandomSource) -> CoefSample:
        ray_next = self.next_ray_from(ray, intersection, rng)
        return CoefSample(ray_next, self.color.copy(), self.coef_pdf(ray, intersection, ray_next))

    def coef_pdf(self, ray: Ray, intersection: RayIntersection, ray_next: Ray) -> float:
        return 1.0

    @abstractmethod
    def next_ray_from(self, ray: Ray, intersection: RayIntersection, rng: RandomSource) -> Ray:
        ...


def reflected_ray(ray: Ray, intersection: RayIntersection) -> Ray:
    # a unit direction mirrored about a unit normal stays non-zero
    direction = normalize_vector(reflect_vector(ray.direction, intersection.normal))
    return Ray(intersection.position, direction)
