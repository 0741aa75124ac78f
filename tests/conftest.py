"""Pytest configuration for path tracer tests.

Provides a deterministic random source and a few reusable scene pieces.
"""

from typing import Iterable

import numpy as np
import pytest

from pathtracer.typings.hit import RayIntersection, SurfaceSide


class FixedRng:
    """Random source replaying a fixed sequence of draws, cycling when exhausted."""

    def __init__(self, values: Iterable[float]) -> None:
        self.values = [float(v) for v in values]
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def rng():
    """Seeded numpy generator, so stochastic tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def fixed_rng():
    """Factory for FixedRng instances."""
    return FixedRng


@pytest.fixture
def floor_intersection():
    """Front-side hit on the y=0 plane at the origin, seen from above."""
    return RayIntersection(
        distance=1.0,
        position=np.array([0.0, 0.0, 0.0]),
        normal=np.array([0.0, 1.0, 0.0]),
        side=SurfaceSide.FRONT,
    )
