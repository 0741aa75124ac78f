from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from pathtracer.camera import Camera
from pathtracer.sampling.light_sampling import RandomSource
from pathtracer.scene import Scene, SceneHit
from pathtracer.scene_settings import SceneSettings
from pathtracer.typings.color import black
from pathtracer.typings.ray import DisRange, Ray
from pathtracer.utils.vector_operations import clamp_color01, color_to_uint8


@dataclass(slots=True)
class RenderStats:
    rays: int = 0
    hits: int = 0
    depth_cutoffs: int = 0

    def as_dict(self) -> dict:
        return {"rays": self.rays, "hits": self.hits, "depth_cutoffs": self.depth_cutoffs}


class Context:
    """State of one in-flight estimate: the renderer and the random source it exclusively owns."""

    def __init__(self, renderer: Renderer, rng: RandomSource, stats: RenderStats | None = None) -> None:
        self.renderer = renderer
        self.rng = rng
        self.stats = stats if stats is not None else RenderStats()


class Renderer:
    def __init__(self, scene: Scene, settings: SceneSettings) -> None:
        self.scene = scene
        self.settings = settings

    def exceeds_depth(self, context: Context, depth: int) -> bool:
        """True (and counted as a cutoff) when `depth` is past the recursion ceiling."""
        if depth > self.settings.max_depth:
            context.stats.depth_cutoffs += 1
            return True
        return False

    def trace(self, context: Context, ray: Ray, distance_range: DisRange, depth: int) -> np.ndarray:
        """Radiance arriving at `ray.origin` from along `ray`."""
        if self.exceeds_depth(context, depth):
            return black()
        return self.shade_hit(context, ray, self.intersect(ray, distance_range), depth)

    def intersect(self, ray: Ray, distance_range: DisRange) -> SceneHit | None:
        return self.scene.find_closest_hit(ray, distance_range)

    def shade_hit(self, context: Context, ray: Ray, hit: SceneHit | None, depth: int) -> np.ndarray:
        if self.exceeds_depth(context, depth):
            return black()
        context.stats.rays += 1
        if hit is None:
            return self.settings.background_color.copy()
        context.stats.hits += 1
        return hit.material.shade(context, ray, hit.intersection, depth)


def render_image(
    camera: Camera,
    renderer: Renderer,
    width: int,
    height: int,
    samples_per_pixel: int,
    rng: RandomSource,
    stats: RenderStats | None = None,
) -> np.ndarray:
    """Average `samples_per_pixel` jittered estimates per pixel; one random stream for the whole image."""
    context = Context(renderer, rng, stats)
    image = np.zeros((height, width, 3), dtype=float)

    for i in range(height):
        for j in range(width):
            color = np.zeros(3, dtype=float)
            for sample_index in range(samples_per_pixel):
                jitter = (0.5, 0.5) if samples_per_pixel == 1 else (float(rng.random()), float(rng.random()))
                ray = camera.generate_ray(i, j, width, height, jitter)
                radiance = renderer.trace(context, ray, DisRange.positive(), 0)
                # a single NaN/inf path would poison the whole pixel
                color += np.where(np.isfinite(radiance), radiance, 0.0)
            image[i, j, :] = color / samples_per_pixel

    return clamp_color01(image)


def save_image(image_array: np.ndarray, output_path: str) -> None:
    image = Image.fromarray(color_to_uint8(image_array))
    image.save(output_path)
