"""Pinhole camera model for primary ray generation.

The camera always looks down -z from its eye position. ``look_at`` and ``up``
are part of the configuration but are not used to orient the ray basis.

For pixel (i, j) of a width x height image, with
``scale = tan(radians(fov) / 2)`` and ``aspect = width / height``:

    x = (2 * ((i + 0.5) / width) - 1) * aspect * scale
    y = (1 - 2 * ((j + 0.5) / height)) * scale
    direction = normalize(x, y, -1)

Row j = 0 is the top of the image.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend()
    >>> from phongtrace.camera.pinhole import PinholeCamera, setup_camera
    >>> camera = PinholeCamera(eye=(0.0, 0.0, 0.0), look_at=(0.0, 0.0, -1.0))
    >>> setup_camera(camera, 1024, 768)
"""

import math
from dataclasses import dataclass

import taichi as ti

from phongtrace.core.ray import Ray, make_ray, normalize, real, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole camera.

    Attributes:
        eye: Camera position in world space (x, y, z).
        look_at: Point the camera is aimed at. Stored, not applied.
        up: Up direction. Stored, not applied.
        fov: Vertical field of view in degrees.
    """

    eye: tuple[float, float, float] = (0.0, 0.0, 0.0)
    look_at: tuple[float, float, float] = (0.0, 0.0, -1.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    fov: float = 60.0

    def to_dict(self) -> dict[str, list[float] | float]:
        """Export the camera configuration (for JSON serialization)."""
        return {
            "eye": list(self.eye),
            "look_at": list(self.look_at),
            "up": list(self.up),
            "fov": self.fov,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PinholeCamera":
        """Build a camera from a dictionary, using defaults for missing keys."""
        default = cls()
        eye = data.get("eye", default.eye)
        look_at = data.get("look_at", default.look_at)
        up = data.get("up", default.up)
        return cls(
            eye=(eye[0], eye[1], eye[2]),
            look_at=(look_at[0], look_at[1], look_at[2]),
            up=(up[0], up[1], up[2]),
            fov=data.get("fov", default.fov),
        )


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_eye = ti.Vector.field(3, dtype=real, shape=())
_camera_scale = ti.field(dtype=real, shape=())
_camera_aspect = ti.field(dtype=real, shape=())


def setup_camera(camera: PinholeCamera, width: int, height: int) -> None:
    """Initialize camera state for an image size.

    Args:
        camera: Camera configuration.
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    _camera_eye[None] = [camera.eye[0], camera.eye[1], camera.eye[2]]
    _camera_scale[None] = math.tan(math.radians(camera.fov * 0.5))
    _camera_aspect[None] = width / height


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def primary_direction(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Unit direction of the primary ray through the center of pixel (i, j).

    Args:
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
    """
    scale = _camera_scale[None]
    u = (ti.cast(i, real) + 0.5) / ti.cast(width, real)
    v = (ti.cast(j, real) + 0.5) / ti.cast(height, real)
    x = (2.0 * u - 1.0) * _camera_aspect[None] * scale
    y = (1.0 - 2.0 * v) * scale
    return normalize(vec3(x, y, -1.0))


@ti.func
def get_primary_ray(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Primary ray from the eye through the center of pixel (i, j)."""
    return make_ray(_camera_eye[None], primary_direction(i, j, width, height))


@ti.func
def get_camera_eye() -> vec3:
    """Get the camera position in world space."""
    return _camera_eye[None]


def get_camera_info() -> dict[str, float | tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with eye, scale and aspect.
    """
    eye = _camera_eye[None]
    return {
        "eye": (float(eye[0]), float(eye[1]), float(eye[2])),
        "scale": float(_camera_scale[None]),
        "aspect": float(_camera_aspect[None]),
    }
