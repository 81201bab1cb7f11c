"""Point lights and ambient light storage.

Point lights have a position and a per-channel intensity that is not
normalized. The ambient color is a single scene-wide value.
"""

import taichi as ti

from phongtrace.core.ray import real, vec3

MAX_LIGHTS = 64

# Scene-wide ambient color when none is configured
DEFAULT_AMBIENT = (0.1, 0.1, 0.1)


@ti.dataclass
class PointLight:
    """A point light source.

    Attributes:
        position: Light position in world space.
        intensity: Radiant intensity per RGB channel.
    """

    position: vec3
    intensity: vec3


light_positions = ti.Vector.field(3, dtype=real, shape=MAX_LIGHTS)
light_intensities = ti.Vector.field(3, dtype=real, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

_ambient = ti.Vector.field(3, dtype=real, shape=())


def clear_lights() -> None:
    """Remove all point lights and reset the ambient color to the default."""
    num_lights[None] = 0
    set_ambient(DEFAULT_AMBIENT)


def add_point_light(
    position: tuple[float, float, float],
    intensity: tuple[float, float, float],
) -> int:
    """Add a point light.

    Args:
        position: Light position in world space.
        intensity: Per-channel intensity.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = [position[0], position[1], position[2]]
    light_intensities[idx] = [intensity[0], intensity[1], intensity[2]]
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of point lights."""
    return int(num_lights[None])


def set_ambient(color: tuple[float, float, float]) -> None:
    """Set the scene-wide ambient color."""
    _ambient[None] = [color[0], color[1], color[2]]


def get_ambient_python() -> tuple[float, float, float]:
    """Get the ambient color from Python."""
    a = _ambient[None]
    return (float(a[0]), float(a[1]), float(a[2]))


@ti.func
def get_ambient() -> vec3:
    """Get the ambient color inside a kernel."""
    return _ambient[None]


@ti.func
def get_light(light_idx: ti.i32) -> PointLight:
    """Get a point light by index."""
    return PointLight(
        position=light_positions[light_idx],
        intensity=light_intensities[light_idx],
    )
