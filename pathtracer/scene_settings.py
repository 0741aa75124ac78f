import numpy as np

from pathtracer.typings.color import as_color


class SceneSettings:
    def __init__(self, background_color: np.ndarray, max_depth: float, samples_per_pixel: float = 1) -> None:
        self.background_color: np.ndarray = as_color(background_color)
        self.max_depth: int = int(max_depth)
        self.samples_per_pixel: int = int(samples_per_pixel)
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
