"""Phong material model and material registry.

A Phong material carries a base color, a diffuse coefficient ``kd``, a
specular coefficient ``ks`` and a specular exponent ``shininess``. Materials
are registered once in Taichi fields and referenced by primitives through an
integer material ID. ``get_material`` builds a ``Material`` value from the
registry, so every hit record holds its own copy of the material rather than
a reference into scene storage.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend()
    >>> from phongtrace.materials.phong import add_material
    >>> red = add_material(color=(0.8, 0.1, 0.1), kd=0.7, ks=0.3, shininess=64.0)
"""

import taichi as ti

from phongtrace.core.ray import real, vec3

# Defaults of an unconfigured material
DEFAULT_COLOR = (1.0, 1.0, 1.0)
DEFAULT_KD = 0.8
DEFAULT_KS = 0.2
DEFAULT_SHININESS = 32.0


@ti.dataclass
class Material:
    """Phong material properties.

    Attributes:
        color: Linear RGB base color. Expected in [0, 1] but not clamped.
        kd: Diffuse coefficient.
        ks: Specular coefficient.
        shininess: Phong specular exponent.
    """

    color: vec3
    kd: real
    ks: real
    shininess: real


@ti.func
def make_default_material() -> Material:
    """Create a Material with the default parameters."""
    return Material(
        color=vec3(DEFAULT_COLOR[0], DEFAULT_COLOR[1], DEFAULT_COLOR[2]),
        kd=DEFAULT_KD,
        ks=DEFAULT_KS,
        shininess=DEFAULT_SHININESS,
    )


# =============================================================================
# Material Field Storage
# =============================================================================

MAX_MATERIALS = 256

material_colors = ti.Vector.field(3, dtype=real, shape=MAX_MATERIALS)
material_kd = ti.field(dtype=real, shape=MAX_MATERIALS)
material_ks = ti.field(dtype=real, shape=MAX_MATERIALS)
material_shininess = ti.field(dtype=real, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(
    color: tuple[float, float, float] = DEFAULT_COLOR,
    kd: float = DEFAULT_KD,
    ks: float = DEFAULT_KS,
    shininess: float = DEFAULT_SHININESS,
) -> int:
    """Add a Phong material to the registry.

    Args:
        color: Base color as (R, G, B). Values outside [0, 1] are accepted;
            the final shaded color is clamped instead.
        kd: Diffuse coefficient.
        ks: Specular coefficient.
        shininess: Specular exponent.

    Returns:
        The material ID of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_colors[idx] = [color[0], color[1], color[2]]
    material_kd[idx] = kd
    material_ks[idx] = ks
    material_shininess[idx] = shininess
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of registered materials."""
    return int(num_materials[None])


def is_valid_material_id(material_id: int) -> bool:
    """Check whether a material ID refers to a registered material."""
    return 0 <= material_id < num_materials[None]


@ti.func
def get_material(material_id: ti.i32) -> Material:
    """Build a Material value from the registry.

    Args:
        material_id: The index of the material in the registry.

    Returns:
        A copy of the registered material's properties.
    """
    return Material(
        color=material_colors[material_id],
        kd=material_kd[material_id],
        ks=material_ks[material_id],
        shininess=material_shininess[material_id],
    )
