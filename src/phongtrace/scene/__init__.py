"""Scene module for scene storage and nearest-hit queries.

Components:
    intersection: Sphere/plane storage, HitInfo and nearest-hit tracing
    lights: Point light and ambient storage
    manager: Python-side Scene owning materials, primitives and lights
    default_scene: The hardcoded benchmark scene and camera

Scene data lives in Taichi fields (Structure-of-Arrays layout) and is read
only while a render runs.
"""

from .default_scene import create_default_camera, create_default_scene
from .intersection import (
    MAX_PLANES,
    MAX_SPHERES,
    HitInfo,
    TraceResult,
    add_plane,
    add_sphere,
    clear_scene,
    get_plane_count,
    get_sphere_count,
    trace_ray,
    trace_scene,
)
from .lights import (
    DEFAULT_AMBIENT,
    MAX_LIGHTS,
    PointLight,
    add_point_light,
    clear_lights,
    get_light_count,
    set_ambient,
)
from .manager import (
    LightInfo,
    MaterialInfo,
    PlaneInfo,
    Scene,
    SceneConfig,
    SphereInfo,
)

__all__ = [
    # Intersection module
    "HitInfo",
    "TraceResult",
    "add_sphere",
    "add_plane",
    "clear_scene",
    "get_sphere_count",
    "get_plane_count",
    "trace_scene",
    "trace_ray",
    "MAX_SPHERES",
    "MAX_PLANES",
    # Lights module
    "PointLight",
    "add_point_light",
    "clear_lights",
    "get_light_count",
    "set_ambient",
    "DEFAULT_AMBIENT",
    "MAX_LIGHTS",
    # Manager module
    "Scene",
    "SceneConfig",
    "MaterialInfo",
    "SphereInfo",
    "PlaneInfo",
    "LightInfo",
    # Default scene
    "create_default_scene",
    "create_default_camera",
]
