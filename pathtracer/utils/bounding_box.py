from __future__ import annotations

from typing import Sequence

import numpy as np


class BoundingBox:
    """Axis-aligned bounding box."""

    __slots__ = ("min", "max")

    def __init__(self, min_point: np.ndarray, max_point: np.ndarray) -> None:
        self.min = np.asarray(min_point, dtype=float)
        self.max = np.asarray(max_point, dtype=float)
        if np.any(self.min > self.max):
            raise ValueError(f"Bounding box min {self.min} exceeds max {self.max}")

    @staticmethod
    def from_boxes(boxes: Sequence["BoundingBox"]) -> "BoundingBox":
        if not boxes:
            raise ValueError("Cannot bound an empty set of boxes")
        min_points = np.array([box.min for box in boxes])
        max_points = np.array([box.max for box in boxes])
        return BoundingBox(np.min(min_points, axis=0), np.max(max_points, axis=0))

    @property
    def centroid(self) -> np.ndarray:
        return (self.min + self.max) * 0.5

    def contains(self, point: np.ndarray) -> bool:
        point = np.asarray(point, dtype=float)
        return bool(np.all(point >= self.min) and np.all(point <= self.max))

    def __repr__(self) -> str:
        return f"BoundingBox(min={self.min.tolist()}, max={self.max.tolist()})"
