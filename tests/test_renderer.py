"""Unit tests for the renderer and image driver.

Tests cover:
- Background radiance on a miss
- The maximum depth ceiling
- Mirror and glass recursion
- Next-event estimation under a sphere light
- Per-pixel averaging, determinism and clamping
- Image saving via Pillow
"""

import numpy as np
import pytest
from PIL import Image

from pathtracer.camera import Camera
from pathtracer.materials.diffuse import Diffuse
from pathtracer.materials.emissive import Emissive
from pathtracer.materials.refractive import Refractive
from pathtracer.materials.specular import Specular
from pathtracer.renderer import Context, Renderer, RenderStats, render_image, save_image
from pathtracer.scene import Scene
from pathtracer.scene_settings import SceneSettings
from pathtracer.surfaces.infinite_plane import Plane
from pathtracer.surfaces.sphere import Sphere
from pathtracer.typings.ray import DisRange, Ray

BACKGROUND = np.array([0.2, 0.4, 0.6])
DOWN_RAY = Ray(np.array([0.0, 1.0, 0.0]), np.array([0.0, -1.0, 0.0]))


def _mirror_floor_renderer(max_depth):
    scene = Scene()
    scene.add(Plane(np.zeros(3), np.array([0.0, 1.0, 0.0])), Specular(np.full(3, 0.5)))
    return Renderer(scene, SceneSettings(BACKGROUND, max_depth))


def _lit_floor_renderer():
    scene = Scene()
    scene.add(Plane(np.zeros(3), np.array([0.0, 1.0, 0.0])), Diffuse(np.full(3, 0.5)))
    scene.add(Sphere(np.array([0.0, 3.0, 0.0]), 0.5), Emissive(np.full(3, 10.0)), light=True)
    return Renderer(scene, SceneSettings(np.zeros(3), 4))


class _CountingRenderer(Renderer):
    """Renderer that records how many scene queries it made."""

    def __init__(self, renderer, max_depth):
        super().__init__(renderer.scene, SceneSettings(renderer.settings.background_color, max_depth))
        self.intersect_calls = 0

    def intersect(self, ray, distance_range):
        self.intersect_calls += 1
        return super().intersect(ray, distance_range)


class TestTrace:
    def test_miss_returns_background(self, rng):
        renderer = Renderer(Scene(), SceneSettings(BACKGROUND, 3))
        context = Context(renderer, rng)

        result = renderer.trace(context, DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_allclose(result, BACKGROUND)
        assert context.stats.rays == 1
        assert context.stats.hits == 0

    def test_background_is_not_aliased(self, rng):
        renderer = Renderer(Scene(), SceneSettings(BACKGROUND, 3))
        result = renderer.trace(Context(renderer, rng), DOWN_RAY, DisRange.positive(), 0)
        result[:] = 0.0
        np.testing.assert_allclose(renderer.settings.background_color, BACKGROUND)

    def test_mirror_reflects_background(self, rng):
        renderer = _mirror_floor_renderer(2)
        context = Context(renderer, rng)

        result = renderer.trace(context, DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_allclose(result, 0.5 * BACKGROUND)
        assert context.stats.as_dict() == {"rays": 2, "hits": 1, "depth_cutoffs": 0}

    def test_depth_ceiling_returns_black(self, rng):
        renderer = _mirror_floor_renderer(0)
        context = Context(renderer, rng)

        result = renderer.trace(context, DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_allclose(result, np.zeros(3))
        assert context.stats.depth_cutoffs == 1

    def test_trace_beyond_ceiling_does_not_intersect(self, rng):
        renderer = _mirror_floor_renderer(1)
        context = Context(renderer, rng)

        result = renderer.trace(context, DOWN_RAY, DisRange.positive(), 2)
        np.testing.assert_allclose(result, np.zeros(3))
        assert context.stats.rays == 0

    def test_glass_sphere_passes_light_through(self, rng):
        scene = Scene()
        scene.add(Sphere(np.array([0.0, -3.0, 0.0]), 1.0), Refractive(np.ones(3), 1.5))
        renderer = Renderer(scene, SceneSettings(np.ones(3), 8))
        context = Context(renderer, rng)

        # every branch ends on the white background, attenuated by a white tint
        result = renderer.trace(context, DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_allclose(result, np.ones(3))
        assert context.stats.hits >= 1

    def test_diffuse_floor_sees_sphere_light(self, rng):
        renderer = _lit_floor_renderer()
        result = renderer.trace(Context(renderer, rng), DOWN_RAY, DisRange.positive(), 0)

        assert np.all(np.isfinite(result))
        assert np.all(result > 0.0)

    def test_unlit_diffuse_floor_is_black(self, rng):
        scene = Scene()
        scene.add(Plane(np.zeros(3), np.array([0.0, 1.0, 0.0])), Diffuse(np.full(3, 0.5)))
        renderer = Renderer(scene, SceneSettings(np.zeros(3), 4))

        result = renderer.trace(Context(renderer, rng), DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_allclose(result, np.zeros(3))

    def test_short_range_misses_instead_of_raising(self, rng):
        renderer = _mirror_floor_renderer(2)
        context = Context(renderer, rng)

        result = renderer.trace(context, DOWN_RAY, DisRange(0.0, 5e-7), 0)
        np.testing.assert_allclose(result, BACKGROUND)
        assert context.stats.hits == 0

    def test_diffuse_at_ceiling_skips_scattering(self, fixed_rng):
        renderer = _CountingRenderer(_lit_floor_renderer(), max_depth=0)
        rng = fixed_rng([0.5])
        context = Context(renderer, rng)

        result = renderer.trace(context, DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_allclose(result, np.zeros(3))
        assert renderer.intersect_calls == 1
        assert rng.calls == 0
        assert context.stats.depth_cutoffs == 1

    def test_seeded_traces_are_reproducible(self):
        renderer = _lit_floor_renderer()
        first = renderer.trace(Context(renderer, np.random.default_rng(7)), DOWN_RAY, DisRange.positive(), 0)
        second = renderer.trace(Context(renderer, np.random.default_rng(7)), DOWN_RAY, DisRange.positive(), 0)
        np.testing.assert_array_equal(first, second)


class TestRenderImage:
    @pytest.fixture
    def camera(self):
        return Camera(np.array([0.0, 1.0, -4.0]), np.array([0.0, 1.0, 0.0]), np.array([0.0, 1.0, 0.0]), 1.0, 2.0)

    def test_shape_and_range(self, camera, rng):
        image = render_image(camera, _lit_floor_renderer(), 5, 4, 2, rng)

        assert image.shape == (4, 5, 3)
        assert np.all(image >= 0.0)
        assert np.all(image <= 1.0)

    def test_same_seed_same_image(self, camera):
        renderer = _lit_floor_renderer()
        first = render_image(camera, renderer, 4, 4, 2, np.random.default_rng(3))
        second = render_image(camera, renderer, 4, 4, 2, np.random.default_rng(3))
        np.testing.assert_array_equal(first, second)

    def test_empty_scene_is_background(self, camera, rng):
        renderer = Renderer(Scene(), SceneSettings(BACKGROUND, 2))
        image = render_image(camera, renderer, 3, 2, 1, rng)
        np.testing.assert_allclose(image, np.broadcast_to(BACKGROUND, (2, 3, 3)))

    def test_overbright_background_is_clamped(self, camera, rng):
        renderer = Renderer(Scene(), SceneSettings(np.array([5.0, 0.5, -1.0]), 2))
        image = render_image(camera, renderer, 2, 2, 1, rng)
        np.testing.assert_allclose(image[0, 0], [1.0, 0.5, 0.0])

    def test_stats_are_collected(self, camera, rng):
        renderer = Renderer(Scene(), SceneSettings(BACKGROUND, 2))
        stats = RenderStats()
        render_image(camera, renderer, 3, 2, 2, rng, stats)
        assert stats.rays == 3 * 2 * 2


class TestSaveImage:
    def test_writes_png(self, tmp_path):
        image_array = np.zeros((2, 3, 3))
        image_array[0, 0] = [1.0, 0.5, 0.0]
        output_path = tmp_path / "out.png"

        save_image(image_array, str(output_path))

        with Image.open(output_path) as image:
            assert image.size == (3, 2)
            assert image.getpixel((0, 0)) == (255, 128, 0)
