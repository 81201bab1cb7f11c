"""Camera module.

Components:
    pinhole: Pinhole camera with fixed -z forward primary ray generation
"""

from .pinhole import (
    PinholeCamera,
    get_camera_eye,
    get_camera_info,
    get_primary_ray,
    primary_direction,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "primary_direction",
    "get_primary_ray",
    "get_camera_eye",
    "get_camera_info",
]
