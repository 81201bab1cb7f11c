"""Ray data structure and vector utilities.

This module provides the Ray dataclass and the vector helpers used by the
intersection and shading code. All operations are Taichi functions meant to
be called from within kernels. Vectors are 64-bit (``vec3``); component-wise
multiplication of two vectors is plain ``a * b`` on Taichi vectors.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend()
    >>> from phongtrace.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def probe() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)  # (0, 0, -5)
"""

import taichi as ti
import taichi.math as tm

# Scalar and 3D vector types used throughout the renderer
real = ti.f64
vec3 = ti.types.vector(3, real)


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Expected to be unit
            length; callers normalize before building a ray for intersection.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: real) -> vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return tm.cross(a, b)


@ti.func
def length(v: vec3) -> real:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Unlike ``tm.normalize``, a zero-length input is a defined case: it
    returns the zero vector instead of dividing by zero.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or (0, 0, 0) if v has
        length exactly zero.
    """
    result = vec3(0.0, 0.0, 0.0)
    norm = length(v)
    if norm != 0.0:
        result = v / norm
    return result


@ti.func
def reflect_about(v: vec3, normal: vec3) -> vec3:
    """Mirror a vector pointing away from the surface about the normal.

    This is the Phong form ``2 (n . v) n - v``: for a vector toward the light
    it gives the direction of the reflected light. The normal should be unit
    length.
    """
    return 2.0 * tm.dot(normal, v) * normal - v


@ti.func
def clamp01(v: vec3) -> vec3:
    """Clamp each channel of a color to [0, 1]."""
    return tm.clamp(v, 0.0, 1.0)
