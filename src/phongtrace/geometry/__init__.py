"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection

Intersection routines are Taichi functions (@ti.func) of the form:
    rec = hit_shape(ray, shape, t_min)  # rec.hit, rec.t
"""

from .plane import Plane, hit_plane, normalize_tuple
from .sphere import PrimitiveHit, Sphere, hit_sphere, sphere_normal

__all__ = [
    "Sphere",
    "PrimitiveHit",
    "hit_sphere",
    "sphere_normal",
    "Plane",
    "hit_plane",
    "normalize_tuple",
]
