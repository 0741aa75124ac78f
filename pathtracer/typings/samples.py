from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pathtracer.surfaces.shape import ShapeId
from pathtracer.typings.ray import Ray


@dataclass(frozen=True, slots=True)
class CoefSample:
    """A scattering direction drawn from a material, already weighted by its pdf."""

    ray: Ray
    coefficient: np.ndarray
    pdf: float


@dataclass(frozen=True, slots=True)
class LightSample:
    """A direction toward a light source, drawn for next-event estimation."""

    ray: Ray
    coefficient: np.ndarray
    pdf: float
    shape_id: ShapeId
