from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class SurfaceSide(str, Enum):
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True, slots=True)
class RayIntersection:
    """Where a ray struck a surface.

    `normal` is unit length and already faces the incoming ray; together with
    `side` it tells a material whether the ray is entering or leaving.
    """

    distance: float
    position: np.ndarray
    normal: np.ndarray
    side: SurfaceSide
