"""Infinite plane primitive with ray-plane intersection.

A plane is defined by a point on the plane and a unit normal. The normal is
normalized on the Python side (``normalize_tuple``) before it is stored, so
stored planes always carry a unit normal.

Ray-plane intersection:

    denom = dot(normal, direction)
    t = dot(point - origin, normal) / denom

A (near-)parallel ray, ``|denom| < EPSILON``, never hits.
"""

import math

import taichi as ti
import taichi.math as tm

from phongtrace.core.constants import EPSILON
from phongtrace.core.ray import Ray, real, vec3

from .sphere import PrimitiveHit


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        point: Any point on the plane (vec3).
        normal: Unit normal of the plane (vec3).
    """

    point: vec3
    normal: vec3


@ti.func
def hit_plane(ray: Ray, plane: Plane, t_min: real) -> PrimitiveHit:
    """Test for ray-plane intersection.

    Args:
        ray: The ray to test.
        plane: The plane to test against.
        t_min: Threshold the distance must strictly exceed to count as a hit.

    Returns:
        A PrimitiveHit. Parallel rays and hits at or behind ``t_min`` miss.
    """
    did_hit = 0
    hit_t = 0.0

    denom = tm.dot(plane.normal, ray.direction)
    if ti.abs(denom) >= EPSILON:
        t = tm.dot(plane.point - ray.origin, plane.normal) / denom
        if t > t_min:
            did_hit = 1
            hit_t = t

    return PrimitiveHit(hit=did_hit, t=hit_t)


def normalize_tuple(v: tuple[float, float, float]) -> tuple[float, float, float]:
    """Normalize a Python-side vector.

    Args:
        v: The vector to normalize.

    Returns:
        The unit vector, or (0, 0, 0) for a zero-length input.
    """
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)
