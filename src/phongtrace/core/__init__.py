"""Core rendering module.

Components:
    constants: Shared epsilon, shadow bias, trace range and render defaults
    ray: Ray data structure and vector utilities
    shading: Phong shading with hard shadows and the background gradient
    renderer: Parallel row loop, timed passes per worker count

All compute-intensive operations are Taichi functions and kernels.
"""

from .constants import (
    BACKGROUND_BOTTOM,
    BACKGROUND_TOP,
    DEFAULT_WORKER_COUNTS,
    EPSILON,
    ROW_BATCH_SIZE,
    SHADOW_BIAS,
    T_MAX,
    T_MIN,
)
from .ray import (
    Ray,
    clamp01,
    cross,
    dot,
    length,
    make_ray,
    normalize,
    ray_at,
    real,
    reflect_about,
    vec3,
)

# Note: shading and renderer are NOT imported here to avoid circular imports
# (they depend on the scene module, which depends on core.ray).
# Import them directly from phongtrace.core.shading / phongtrace.core.renderer.

__all__ = [
    "EPSILON",
    "SHADOW_BIAS",
    "T_MIN",
    "T_MAX",
    "BACKGROUND_BOTTOM",
    "BACKGROUND_TOP",
    "ROW_BATCH_SIZE",
    "DEFAULT_WORKER_COUNTS",
    "Ray",
    "ray_at",
    "make_ray",
    "real",
    "vec3",
    "dot",
    "cross",
    "length",
    "normalize",
    "reflect_about",
    "clamp01",
]
