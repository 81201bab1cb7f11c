"""Unit tests for the Ray dataclass and vector utilities.

Tests cover:
- Ray construction and ray_at
- normalize, including the zero vector
- dot, cross and reflect_about
- Color clamping
"""

import math

import pytest
import taichi as ti


class TestRay:
    """Tests for Ray construction and evaluation."""

    def test_ray_at(self):
        """Test point along the ray at parameter t."""
        from phongtrace.core.ray import make_ray, ray_at, real, vec3

        result = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        p = result[None]
        assert p[0] == pytest.approx(1.0)
        assert p[1] == pytest.approx(2.0)
        assert p[2] == pytest.approx(-2.0)


class TestVectorUtilities:
    """Tests for vector helper functions."""

    def test_normalize_unit_length(self):
        """Test normalized vectors have unit length and keep direction."""
        from phongtrace.core.ray import length, normalize, real, vec3

        result = ti.Vector.field(3, dtype=real, shape=())
        result_len = ti.field(dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            n = normalize(vec3(3.0, 4.0, 12.0))
            result[None] = n
            result_len[None] = length(n)

        test_kernel()
        n = result[None]
        assert result_len[None] == pytest.approx(1.0, abs=1e-12)
        assert n[0] == pytest.approx(3.0 / 13.0)
        assert n[1] == pytest.approx(4.0 / 13.0)
        assert n[2] == pytest.approx(12.0 / 13.0)

    def test_normalize_zero_vector(self):
        """Test that normalizing the zero vector returns the zero vector."""
        from phongtrace.core.ray import normalize, real, vec3

        result = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, 0.0))

        test_kernel()
        n = result[None]
        assert (n[0], n[1], n[2]) == (0.0, 0.0, 0.0)
        assert not any(math.isnan(float(n[k])) for k in range(3))

    def test_dot_and_cross(self):
        from phongtrace.core.ray import cross, dot, real, vec3

        result_dot = ti.field(dtype=real, shape=())
        result_cross = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            result_dot[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))
            result_cross[None] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        assert result_dot[None] == pytest.approx(12.0)
        c = result_cross[None]
        assert (c[0], c[1], c[2]) == pytest.approx((0.0, 0.0, 1.0))

    def test_reflect_about_normal(self):
        """Test 2(n.v)n - v mirrors a vector about the normal."""
        from phongtrace.core.ray import real, reflect_about, vec3

        result = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect_about(vec3(1.0, 1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert (r[0], r[1], r[2]) == pytest.approx((-1.0, 1.0, 0.0))

    def test_clamp01(self):
        from phongtrace.core.ray import clamp01, real, vec3

        result = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = clamp01(vec3(-0.5, 0.25, 3.0))

        test_kernel()
        c = result[None]
        assert (c[0], c[1], c[2]) == pytest.approx((0.0, 0.25, 1.0))
