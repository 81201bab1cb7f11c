"""Tests for the parallel renderer.

Tests cover:
- RenderSettings validation
- Framebuffer shape, value range and row-major layout
- Identical output for every worker count
- Pass timing results and callbacks
"""

import numpy as np
import pytest

WIDTH = 24
HEIGHT = 18


@pytest.fixture
def default_renderer():
    from phongtrace.core.renderer import Renderer
    from phongtrace.scene.default_scene import create_default_scene

    _, camera = create_default_scene()
    return Renderer(WIDTH, HEIGHT, camera)


class TestBackend:
    """Tests for the backend configuration used by every pass."""

    def test_fast_math_disabled(self):
        """Test contraction is off, so worker counts compile to the same arithmetic."""
        import taichi as ti

        cfg = ti.lang.impl.current_cfg()
        assert cfg.fast_math is False
        assert cfg.default_fp == ti.f64


class TestRenderSettings:
    """Tests for render configuration."""

    def test_defaults(self):
        from phongtrace.core.renderer import RenderSettings

        settings = RenderSettings()
        assert (settings.width, settings.height) == (1024, 768)
        assert settings.worker_counts == (1, 2, 4, 8)
        assert settings.max_workers == 8

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -5},
            {"worker_counts": ()},
            {"worker_counts": (1, 0)},
        ],
    )
    def test_invalid_settings(self, kwargs):
        from phongtrace.core.renderer import RenderSettings

        with pytest.raises(ValueError):
            RenderSettings(**kwargs)


class TestRenderPass:
    """Tests for full-image render passes."""

    def test_framebuffer_shape_and_range(self, default_renderer):
        result = default_renderer.render_pass(2)

        assert result.num_workers == 2
        assert result.seconds >= 0.0
        assert result.framebuffer.shape == (WIDTH * HEIGHT, 3)
        assert np.all(result.framebuffer >= 0.0)
        assert np.all(result.framebuffer <= 1.0)

    def test_same_image_for_every_worker_count(self, default_renderer):
        """Test parallel passes are bitwise identical to the serial pass."""
        results = default_renderer.run_passes((1, 2, 3, 4))

        reference = results[0].framebuffer
        for result in results[1:]:
            np.testing.assert_array_equal(result.framebuffer, reference)

    def test_row_major_layout(self, default_renderer):
        """Test pixel (i, j) is stored at index j * width + i."""
        framebuffer = default_renderer.render(num_workers=2)

        for i, j in [(0, 0), (WIDTH - 1, 0), (5, 7), (0, HEIGHT - 1), (WIDTH - 1, HEIGHT - 1)]:
            expected = default_renderer.render_pixel(i, j)
            np.testing.assert_allclose(framebuffer[j * WIDTH + i], expected, rtol=0, atol=1e-12)

    def test_fresh_framebuffer_per_pass(self, default_renderer):
        first = default_renderer.render_pass(1)
        second = default_renderer.render_pass(1)

        assert first.framebuffer is not second.framebuffer
        first.framebuffer[:] = 0.0
        assert np.any(second.framebuffer != 0.0)

    def test_invalid_worker_count(self, default_renderer):
        with pytest.raises(ValueError):
            default_renderer.render_pass(0)

    def test_run_passes_callback_order(self, default_renderer):
        seen = []
        results = default_renderer.run_passes((2, 1), callback=lambda r: seen.append(r.num_workers))

        assert seen == [2, 1]
        assert [r.num_workers for r in results] == [2, 1]


class TestRenderContent:
    """Tests for what the rendered image shows."""

    def test_empty_scene_is_background(self):
        """Test every pixel of an empty scene shows the gradient."""
        from phongtrace.camera.pinhole import PinholeCamera
        from phongtrace.core.constants import BACKGROUND_BOTTOM, BACKGROUND_TOP
        from phongtrace.core.renderer import Renderer

        renderer = Renderer(4, 4, PinholeCamera(fov=90.0))
        image = renderer.render(1).reshape(4, 4, 3)

        top = np.array(BACKGROUND_TOP)
        bottom = np.array(BACKGROUND_BOTTOM)
        # Upper rows lean toward the top color
        assert np.linalg.norm(image[0, 0] - top) < np.linalg.norm(image[3, 0] - top)
        assert np.linalg.norm(image[3, 0] - bottom) < np.linalg.norm(image[0, 0] - bottom)
        # Symmetric columns see the same y direction
        np.testing.assert_allclose(image[1, 0], image[1, 3])

    def test_center_pixel_sees_sphere(self):
        from phongtrace.camera.pinhole import PinholeCamera
        from phongtrace.core.renderer import Renderer
        from phongtrace.scene.manager import Scene

        scene = Scene()
        red = scene.add_material(color=(1.0, 0.0, 0.0), kd=1.0, ks=0.0)
        scene.add_sphere(center=(0.0, 0.0, -5.0), radius=1.0, material_id=red)
        scene.ambient = (0.5, 0.5, 0.5)

        renderer = Renderer(3, 3, PinholeCamera())
        color = renderer.render_pixel(1, 1)
        # Ambient only, no lights
        assert color == pytest.approx((0.5, 0.0, 0.0))
