from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Ray:
    """Origin point plus a unit-length direction."""

    origin: np.ndarray
    direction: np.ndarray

    def at(self, distance: float) -> np.ndarray:
        return self.origin + distance * self.direction


@dataclass(frozen=True, slots=True)
class DisRange:
    """Interval of hit distances a query accepts along a ray.

    An empty interval is rejected at construction, so a ray can never be
    traced with nothing to find.
    """

    start: float = 0.0
    end: float = math.inf
    include_start: bool = False
    include_end: bool = False

    def __post_init__(self) -> None:
        if math.isnan(self.start) or math.isnan(self.end):
            raise ValueError("Distance range bounds must not be NaN")
        if self.start > self.end or (
            self.start == self.end and not (self.include_start and self.include_end)
        ):
            raise ValueError(f"Empty distance range: {self}")

    @classmethod
    def positive(cls) -> DisRange:
        return cls(0.0, math.inf, include_start=False, include_end=False)

    def contains(self, distance: float) -> bool:
        if distance < self.start or (distance == self.start and not self.include_start):
            return False
        if distance > self.end or (distance == self.end and not self.include_end):
            return False
        return True

    def advance_start(self, minimum: float) -> DisRange:
        if minimum <= self.start:
            return self
        return DisRange(minimum, self.end, include_start=True, include_end=self.include_end)
