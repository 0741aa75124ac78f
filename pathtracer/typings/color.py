from __future__ import annotations

from typing import Sequence

import numpy as np


def as_color(rgb: Sequence[float] | np.ndarray) -> np.ndarray:
    color = np.asarray(rgb, dtype=float)
    if color.shape != (3,):
        raise ValueError(f"Color needs exactly 3 components, got shape {color.shape}")
    return color


def black() -> np.ndarray:
    return np.zeros(3, dtype=float)


def white() -> np.ndarray:
    return np.ones(3, dtype=float)
