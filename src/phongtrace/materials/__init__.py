"""Material models.

Components:
    phong: Phong material (color, kd, ks, shininess) and the material registry
"""

from .phong import (
    DEFAULT_COLOR,
    DEFAULT_KD,
    DEFAULT_KS,
    DEFAULT_SHININESS,
    MAX_MATERIALS,
    Material,
    add_material,
    clear_materials,
    get_material,
    get_material_count,
    is_valid_material_id,
    make_default_material,
)

__all__ = [
    "Material",
    "make_default_material",
    "add_material",
    "clear_materials",
    "get_material",
    "get_material_count",
    "is_valid_material_id",
    "MAX_MATERIALS",
    "DEFAULT_COLOR",
    "DEFAULT_KD",
    "DEFAULT_KS",
    "DEFAULT_SHININESS",
]
