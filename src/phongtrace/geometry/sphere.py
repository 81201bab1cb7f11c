"""Sphere primitive with ray-sphere intersection.

The intersection solves the full quadratic

    a*t^2 + b*t + c = 0

obtained from |origin + t * direction - center| = radius, with

    a = dot(direction, direction)
    b = 2 * dot(origin - center, direction)
    c = dot(origin - center, origin - center) - radius^2

and keeps the nearest root beyond the caller's threshold.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend()
    >>> from phongtrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from phongtrace.core.ray import Ray, normalize, real, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive).
    """

    center: vec3
    radius: real


@ti.dataclass
class PrimitiveHit:
    """Result of a single primitive intersection test.

    Attributes:
        hit: 1 if the ray hits the primitive beyond the threshold, 0 otherwise.
        t: The parametric distance of the hit. Only valid if hit == 1.
    """

    hit: ti.i32
    t: real


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: real) -> PrimitiveHit:
    """Test for ray-sphere intersection.

    Takes the smaller root if it exceeds ``t_min``, otherwise the larger root
    if it exceeds ``t_min``. A negative discriminant or two roots at or below
    ``t_min`` report no hit. When the origin is inside the sphere the smaller
    root is behind the ray and the larger root (the exit point) is returned.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.
        t_min: Threshold a root must strictly exceed to count as a hit.

    Returns:
        A PrimitiveHit with the nearest valid distance.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    b = 2.0 * tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    disc = b * b - 4.0 * a * c

    did_hit = 0
    hit_t = 0.0

    if disc >= 0.0:
        sqrt_d = ti.sqrt(disc)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        if t1 > t_min:
            did_hit = 1
            hit_t = t1
        elif t2 > t_min:
            did_hit = 1
            hit_t = t2

    return PrimitiveHit(hit=did_hit, t=hit_t)


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Outward unit normal of a sphere at a surface point."""
    return normalize(point - sphere.center)

