"""Scene-level nearest-hit resolution.

This module stores the scene's spheres and planes in Taichi fields and
provides ``trace_scene``, which scans every primitive (spheres first, then
planes, each in insertion order) and keeps the closest hit. There is no
acceleration structure; cost is linear in the number of primitives.

Ties are resolved by scan order: a candidate replaces the current hit only if
it is strictly closer, so among primitives at the same distance the first one
scanned wins.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend()
    >>> from phongtrace.materials.phong import add_material
    >>> from phongtrace.scene.intersection import add_sphere, trace_ray
    >>> mat = add_material()
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, material_id=mat)
    >>> trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)).t
    4.0
"""

from dataclasses import dataclass

import taichi as ti

from phongtrace.core.constants import EPSILON, T_MAX, T_MIN
from phongtrace.core.ray import Ray, ray_at, real, vec3
from phongtrace.geometry.plane import Plane, hit_plane, normalize_tuple
from phongtrace.geometry.sphere import Sphere, hit_sphere, sphere_normal
from phongtrace.materials.phong import Material, get_material, make_default_material


@ti.dataclass
class HitInfo:
    """Record of a ray-scene intersection.

    Attributes:
        hit: 1 if any primitive was hit within (t_min, t_max), 0 otherwise.
        t: Parametric distance of the nearest hit. Equals the query's t_max
            on a miss.
        position: The hit point, origin + t * direction.
        normal: Unit surface normal at the hit point. Sphere normals point
            away from the center; plane normals are the stored plane normal.
        mat: Copy of the hit primitive's material.
    """

    hit: ti.i32
    t: real
    position: vec3
    normal: vec3
    mat: Material


# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_PLANES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=real, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=real, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Plane storage
plane_points = ti.Vector.field(3, dtype=real, shape=MAX_PLANES)
plane_normals = ti.Vector.field(3, dtype=real, shape=MAX_PLANES)
plane_material_ids = ti.field(dtype=ti.i32, shape=MAX_PLANES)
num_planes = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive counts to zero. The actual field data is not
    cleared but will be overwritten when new primitives are added.
    """
    num_spheres[None] = 0
    num_planes[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    material_id: int = 0,
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def add_plane(
    point: tuple[float, float, float],
    normal: tuple[float, float, float],
    material_id: int = 0,
) -> int:
    """Add an infinite plane to the scene.

    The normal is normalized before it is stored.

    Args:
        point: Any point on the plane.
        normal: The plane normal (any nonzero length).
        material_id: The material ID to associate with this plane.

    Returns:
        The index of the added plane.

    Raises:
        RuntimeError: If the maximum number of planes is exceeded.
    """
    idx = num_planes[None]
    if idx >= MAX_PLANES:
        raise RuntimeError(f"Maximum number of planes ({MAX_PLANES}) exceeded")
    unit_normal = normalize_tuple(normal)
    plane_points[idx] = [point[0], point[1], point[2]]
    plane_normals[idx] = [unit_normal[0], unit_normal[1], unit_normal[2]]
    plane_material_ids[idx] = material_id
    num_planes[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_plane_count() -> int:
    """Get the number of planes in the scene."""
    return int(num_planes[None])


@ti.func
def _make_miss_record(t_max: real) -> HitInfo:
    """Create a HitInfo indicating no intersection within t_max."""
    return HitInfo(
        hit=0,
        t=t_max,
        position=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        mat=make_default_material(),
    )


@ti.func
def trace_scene(ray: Ray, t_min: real, t_max: real) -> HitInfo:
    """Find the nearest primitive hit along a ray.

    Every primitive is tested with the shared ``EPSILON`` threshold and a
    candidate is accepted when ``t_min < t < closest_t``.

    Args:
        ray: The ray to trace. Its direction should be unit length.
        t_min: Candidates at or below this distance are rejected.
        t_max: Initial closest distance; candidates at or beyond it are
            rejected.

    Returns:
        The HitInfo of the nearest hit, or a miss record with t == t_max.
    """
    result = _make_miss_record(t_max)
    closest_t = t_max

    for i in range(num_spheres[None]):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray, sphere, EPSILON)
        if rec.hit == 1 and rec.t < closest_t and rec.t > t_min:
            closest_t = rec.t
            position = ray_at(ray, rec.t)
            result = HitInfo(
                hit=1,
                t=rec.t,
                position=position,
                normal=sphere_normal(sphere, position),
                mat=get_material(sphere_material_ids[i]),
            )

    for i in range(num_planes[None]):
        plane = Plane(point=plane_points[i], normal=plane_normals[i])
        rec = hit_plane(ray, plane, EPSILON)
        if rec.hit == 1 and rec.t < closest_t and rec.t > t_min:
            closest_t = rec.t
            result = HitInfo(
                hit=1,
                t=rec.t,
                position=ray_at(ray, rec.t),
                normal=plane.normal,
                mat=get_material(plane_material_ids[i]),
            )

    return result


# =============================================================================
# Python-side queries
# =============================================================================


@dataclass
class TraceResult:
    """Python copy of a HitInfo, returned by ``trace_ray``.

    Attributes:
        hit: Whether any primitive was hit.
        t: Distance to the nearest hit, or t_max on a miss.
        position: The hit point.
        normal: The unit surface normal at the hit point.
        color: Material color of the hit primitive.
        kd: Material diffuse coefficient.
        ks: Material specular coefficient.
        shininess: Material specular exponent.
    """

    hit: bool
    t: float
    position: tuple[float, float, float]
    normal: tuple[float, float, float]
    color: tuple[float, float, float]
    kd: float
    ks: float
    shininess: float


_result_hit = ti.field(dtype=ti.i32, shape=())
_result_t = ti.field(dtype=real, shape=())
_result_position = ti.Vector.field(3, dtype=real, shape=())
_result_normal = ti.Vector.field(3, dtype=real, shape=())
_result_color = ti.Vector.field(3, dtype=real, shape=())
_result_coefficients = ti.Vector.field(3, dtype=real, shape=())


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3, t_min: real, t_max: real):
    """Trace one ray and store the hit record in the result fields."""
    # Nested in a one-iteration loop so the primitive scans stay serial
    for _ in range(1):
        rec = trace_scene(Ray(origin=origin, direction=direction), t_min, t_max)
        _result_hit[None] = rec.hit
        _result_t[None] = rec.t
        _result_position[None] = rec.position
        _result_normal[None] = rec.normal
        _result_color[None] = rec.mat.color
        _result_coefficients[None] = vec3(rec.mat.kd, rec.mat.ks, rec.mat.shininess)


def _to_tuple(v) -> tuple[float, float, float]:
    return (float(v[0]), float(v[1]), float(v[2]))


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> TraceResult:
    """Trace a single ray from Python.

    This is a convenience for inspection and testing. The render loop calls
    ``trace_scene`` directly inside its kernel.

    Args:
        origin: The ray origin.
        direction: The ray direction. Not normalized here.
        t_min: Minimum accepted distance.
        t_max: Maximum accepted distance.

    Returns:
        A TraceResult with the nearest hit.
    """
    _trace_single_ray(
        vec3(origin[0], origin[1], origin[2]),
        vec3(direction[0], direction[1], direction[2]),
        t_min,
        t_max,
    )
    coefficients = _result_coefficients[None]
    return TraceResult(
        hit=bool(_result_hit[None]),
        t=float(_result_t[None]),
        position=_to_tuple(_result_position[None]),
        normal=_to_tuple(_result_normal[None]),
        color=_to_tuple(_result_color[None]),
        kd=float(coefficients[0]),
        ks=float(coefficients[1]),
        shininess=float(coefficients[2]),
    )
