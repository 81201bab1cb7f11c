"""Unit tests for the pinhole camera module.

Tests cover:
- Camera setup (scale and aspect)
- Primary ray directions for center and corner pixels
- Image orientation (row 0 at the top)
- Dictionary round trip of the configuration
"""

import math

import pytest
import taichi as ti


def _direction(i, j, width, height):
    from phongtrace.camera.pinhole import primary_direction
    from phongtrace.core.ray import real

    result = ti.Vector.field(3, dtype=real, shape=())

    @ti.kernel
    def test_kernel(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32):
        result[None] = primary_direction(i, j, width, height)

    test_kernel(i, j, width, height)
    d = result[None]
    return (float(d[0]), float(d[1]), float(d[2]))


class TestCameraSetup:
    """Tests for camera setup."""

    def test_scale_and_aspect(self):
        from phongtrace.camera.pinhole import PinholeCamera, get_camera_info, setup_camera

        setup_camera(PinholeCamera(eye=(1.0, 2.0, 3.0), fov=60.0), 1024, 768)

        info = get_camera_info()
        assert info["eye"] == pytest.approx((1.0, 2.0, 3.0))
        assert info["scale"] == pytest.approx(math.tan(math.radians(30.0)))
        assert info["aspect"] == pytest.approx(1024 / 768)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 5)])
    def test_rejects_non_positive_size(self, width, height):
        from phongtrace.camera.pinhole import PinholeCamera, setup_camera

        with pytest.raises(ValueError):
            setup_camera(PinholeCamera(), width, height)


class TestPrimaryRays:
    """Tests for primary ray directions."""

    def test_corner_pixel_direction(self):
        """Test the formula for the top-left pixel with fov 90 (scale 1)."""
        from phongtrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(fov=90.0), 4, 2)

        # x = (2 * 0.125 - 1) * 2 * 1 = -1.5, y = (1 - 2 * 0.25) * 1 = 0.5
        norm = math.sqrt(1.5**2 + 0.5**2 + 1.0)
        assert _direction(0, 0, 4, 2) == pytest.approx((-1.5 / norm, 0.5 / norm, -1.0 / norm))

    def test_directions_are_unit_length(self):
        from phongtrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(fov=60.0), 16, 9)
        for i, j in [(0, 0), (15, 8), (7, 4), (3, 6)]:
            d = _direction(i, j, 16, 9)
            assert math.sqrt(sum(c * c for c in d)) == pytest.approx(1.0, abs=1e-12)

    def test_row_zero_is_top(self):
        """Test rows go top to bottom and columns left to right."""
        from phongtrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(), 10, 10)
        top_left = _direction(0, 0, 10, 10)
        bottom_right = _direction(9, 9, 10, 10)
        assert top_left[0] < 0.0 and top_left[1] > 0.0
        assert bottom_right[0] > 0.0 and bottom_right[1] < 0.0
        assert top_left[2] < 0.0 and bottom_right[2] < 0.0

    def test_look_at_does_not_rotate_rays(self):
        """Test the camera always looks down -z."""
        from phongtrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(look_at=(1.0, 0.0, 0.0), up=(0.0, 0.0, 1.0)), 3, 3)
        assert _direction(1, 1, 3, 3) == pytest.approx((0.0, 0.0, -1.0))

    def test_primary_ray_origin_is_eye(self):
        from phongtrace.camera.pinhole import PinholeCamera, get_primary_ray, setup_camera
        from phongtrace.core.ray import real

        setup_camera(PinholeCamera(eye=(0.5, -1.0, 2.0)), 8, 8)
        result = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = get_primary_ray(3, 5, 8, 8).origin

        test_kernel()
        o = result[None]
        assert (o[0], o[1], o[2]) == pytest.approx((0.5, -1.0, 2.0))


class TestCameraConfig:
    """Tests for camera configuration serialization."""

    def test_dict_round_trip(self):
        from phongtrace.camera.pinhole import PinholeCamera

        camera = PinholeCamera(eye=(1.0, 2.0, 3.0), look_at=(0.0, 0.0, 0.0), fov=45.0)
        assert PinholeCamera.from_dict(camera.to_dict()) == camera

    def test_from_dict_defaults(self):
        from phongtrace.camera.pinhole import PinholeCamera

        assert PinholeCamera.from_dict({}) == PinholeCamera()
