"""Scene manager coordinating materials, primitives and lights.

The Scene class is the Python-side owner of everything the renderer reads:
it registers Phong materials, spheres, planes and point lights into the
Taichi fields, tracks what it added, and converts the scene to and from a
plain dictionary for JSON scene files.

A scene is built before rendering and not modified while a render runs.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend()
    >>> from phongtrace.scene.manager import Scene
    >>> scene = Scene()
    >>> red = scene.add_material(color=(0.8, 0.1, 0.1), kd=0.7, ks=0.3, shininess=64.0)
    >>> scene.add_sphere(center=(0.0, 0.0, -5.0), radius=1.0, material_id=red)
    >>> scene.add_point_light(position=(5.0, 7.0, -3.0), intensity=(1.0, 1.0, 1.0))
    >>> scene.trace((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)).t
    4.0
"""

from dataclasses import dataclass, field
from typing import Any

from phongtrace.core.constants import T_MAX, T_MIN
from phongtrace.geometry.plane import normalize_tuple
from phongtrace.materials.phong import (
    DEFAULT_COLOR,
    DEFAULT_KD,
    DEFAULT_KS,
    DEFAULT_SHININESS,
    MAX_MATERIALS,
    add_material,
    clear_materials,
    get_material_count,
    is_valid_material_id,
)
from phongtrace.scene.intersection import (
    MAX_PLANES,
    MAX_SPHERES,
    TraceResult,
    add_plane,
    add_sphere,
    clear_scene,
    get_plane_count,
    get_sphere_count,
    trace_ray,
)
from phongtrace.scene.lights import (
    DEFAULT_AMBIENT,
    MAX_LIGHTS,
    add_point_light,
    clear_lights,
    get_ambient_python,
    get_light_count,
    set_ambient,
)

Vec3Tuple = tuple[float, float, float]


def _as_vec3(values: Any, name: str) -> Vec3Tuple:
    """Convert a 3-element sequence to a float tuple.

    Raises:
        ValueError: If values does not have exactly three elements.
    """
    if len(values) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The material ID.
        color: Base color.
        kd: Diffuse coefficient.
        ks: Specular coefficient.
        shininess: Specular exponent.
    """

    material_id: int
    color: Vec3Tuple
    kd: float
    ks: float
    shininess: float


@dataclass
class SphereInfo:
    """Information about a sphere in the scene."""

    sphere_index: int
    center: Vec3Tuple
    radius: float
    material_id: int


@dataclass
class PlaneInfo:
    """Information about a plane in the scene.

    Attributes:
        plane_index: The index in the plane storage arrays.
        point: A point on the plane.
        normal: The unit normal as stored.
        material_id: The material ID assigned to the plane.
    """

    plane_index: int
    point: Vec3Tuple
    normal: Vec3Tuple
    material_id: int


@dataclass
class LightInfo:
    """Information about a point light in the scene."""

    light_index: int
    position: Vec3Tuple
    intensity: Vec3Tuple


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations.
        planes: List of plane configurations.
        lights: List of point light configurations.
        ambient: Ambient color.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    planes: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    ambient: list[float] = field(default_factory=lambda: list(DEFAULT_AMBIENT))


class Scene:
    """Scene of spheres, planes and point lights with Phong materials.

    Creating a Scene clears the global scene fields, so only one Scene is
    live at a time.

    Attributes:
        materials: MaterialInfo for every registered material.
        spheres: SphereInfo for every sphere, in scan order.
        planes: PlaneInfo for every plane, in scan order.
        lights: LightInfo for every point light.
    """

    def __init__(self) -> None:
        """Initialize an empty scene with the default ambient color."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []
        self.planes: list[PlaneInfo] = []
        self.lights: list[LightInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_scene()
        clear_materials()
        clear_lights()
        self.materials.clear()
        self.spheres.clear()
        self.planes.clear()
        self.lights.clear()

    def clear(self) -> None:
        """Clear the entire scene (primitives, materials and lights).

        The ambient color is reset to the default.
        """
        self._clear_all()

    # =========================================================================
    # Materials and Lights
    # =========================================================================

    def add_material(
        self,
        color: Vec3Tuple = DEFAULT_COLOR,
        kd: float = DEFAULT_KD,
        ks: float = DEFAULT_KS,
        shininess: float = DEFAULT_SHININESS,
    ) -> int:
        """Register a Phong material.

        Args:
            color: Base color as (R, G, B).
            kd: Diffuse coefficient.
            ks: Specular coefficient.
            shininess: Specular exponent.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
        """
        color = _as_vec3(color, "color")
        material_id = add_material(color, kd, ks, shininess)
        self.materials.append(
            MaterialInfo(
                material_id=material_id,
                color=color,
                kd=kd,
                ks=ks,
                shininess=shininess,
            )
        )
        return material_id

    def add_point_light(self, position: Vec3Tuple, intensity: Vec3Tuple) -> int:
        """Add a point light.

        Returns:
            The index of the added light.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
        """
        position = _as_vec3(position, "position")
        intensity = _as_vec3(intensity, "intensity")
        light_index = add_point_light(position, intensity)
        self.lights.append(
            LightInfo(light_index=light_index, position=position, intensity=intensity)
        )
        return light_index

    @property
    def ambient(self) -> Vec3Tuple:
        """The scene-wide ambient color."""
        return get_ambient_python()

    @ambient.setter
    def ambient(self, color: Vec3Tuple) -> None:
        set_ambient(_as_vec3(color, "ambient"))

    # =========================================================================
    # Primitives
    # =========================================================================

    def _check_material_id(self, material_id: int) -> None:
        if not is_valid_material_id(material_id):
            raise ValueError(f"Invalid material_id: {material_id}")

    def add_sphere(self, center: Vec3Tuple, radius: float, material_id: int) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere.
            radius: The radius of the sphere.
            material_id: A registered material ID.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of spheres is exceeded.
            ValueError: If material_id is invalid or radius is not positive.
        """
        self._check_material_id(material_id)
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")

        center = _as_vec3(center, "center")
        sphere_index = add_sphere(center, radius, material_id)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=center,
                radius=radius,
                material_id=material_id,
            )
        )
        return sphere_index

    def add_plane(self, point: Vec3Tuple, normal: Vec3Tuple, material_id: int) -> int:
        """Add an infinite plane to the scene.

        Args:
            point: A point on the plane.
            normal: The plane normal. Normalized before it is stored.
            material_id: A registered material ID.

        Returns:
            The index of the added plane.

        Raises:
            RuntimeError: If the maximum number of planes is exceeded.
            ValueError: If material_id is invalid or normal has zero length.
        """
        self._check_material_id(material_id)
        unit_normal = normalize_tuple(_as_vec3(normal, "normal"))
        if unit_normal == (0.0, 0.0, 0.0):
            raise ValueError("Plane normal must have nonzero length")

        point = _as_vec3(point, "point")
        plane_index = add_plane(point, unit_normal, material_id)
        self.planes.append(
            PlaneInfo(
                plane_index=plane_index,
                point=point,
                normal=unit_normal,
                material_id=material_id,
            )
        )
        return plane_index

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return get_material_count()

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_plane_count(self) -> int:
        """Get the number of planes in the scene."""
        return get_plane_count()

    def get_light_count(self) -> int:
        """Get the number of point lights in the scene."""
        return get_light_count()

    def get_primitive_count(self) -> int:
        """Get the total number of primitives in the scene."""
        return self.get_sphere_count() + self.get_plane_count()

    # =========================================================================
    # Queries
    # =========================================================================

    def trace(
        self,
        origin: Vec3Tuple,
        direction: Vec3Tuple,
        t_min: float = T_MIN,
        t_max: float = T_MAX,
    ) -> TraceResult:
        """Find the nearest hit along a ray.

        Args:
            origin: The ray origin.
            direction: The ray direction (should be unit length).
            t_min: Hits at or below this distance are ignored.
            t_max: Hits at or beyond this distance are ignored.

        Returns:
            A TraceResult; ``hit`` is False and ``t == t_max`` on a miss.
        """
        return trace_ray(origin, direction, t_min, t_max)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig(ambient=list(self.ambient))

        for mat in self.materials:
            config.materials.append(
                {
                    "color": list(mat.color),
                    "kd": mat.kd,
                    "ks": mat.ks,
                    "shininess": mat.shininess,
                }
            )

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )

        for plane in self.planes:
            config.planes.append(
                {
                    "point": list(plane.point),
                    "normal": list(plane.normal),
                    "material_id": plane.material_id,
                }
            )

        for light in self.lights:
            config.lights.append(
                {
                    "position": list(light.position),
                    "intensity": list(light.intensity),
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene first. Materials are loaded before
        primitives so that material IDs in the configuration are valid.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()
        self.ambient = _as_vec3(config.ambient, "ambient")

        for mat_config in config.materials:
            self.add_material(
                color=_as_vec3(mat_config.get("color", DEFAULT_COLOR), "color"),
                kd=float(mat_config.get("kd", DEFAULT_KD)),
                ks=float(mat_config.get("ks", DEFAULT_KS)),
                shininess=float(mat_config.get("shininess", DEFAULT_SHININESS)),
            )

        for sphere_config in config.spheres:
            self.add_sphere(
                center=_as_vec3(sphere_config.get("center", (0.0, 0.0, 0.0)), "center"),
                radius=float(sphere_config.get("radius", 1.0)),
                material_id=int(sphere_config.get("material_id", 0)),
            )

        for plane_config in config.planes:
            self.add_plane(
                point=_as_vec3(plane_config.get("point", (0.0, 0.0, 0.0)), "point"),
                normal=_as_vec3(plane_config.get("normal", (0.0, 1.0, 0.0)), "normal"),
                material_id=int(plane_config.get("material_id", 0)),
            )

        for light_config in config.lights:
            if "position" not in light_config:
                raise ValueError("Point light configuration requires a position")
            self.add_point_light(
                position=_as_vec3(light_config["position"], "position"),
                intensity=_as_vec3(light_config.get("intensity", (1.0, 1.0, 1.0)), "intensity"),
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
            "planes": config.planes,
            "lights": config.lights,
            "ambient": config.ambient,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'materials', 'spheres', 'planes', 'lights'
                and 'ambient' keys. Missing keys are treated as empty.

        Raises:
            ValueError: If the data contains invalid entries.
        """
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
            planes=data.get("planes", []),
            lights=data.get("lights", []),
            ambient=data.get("ambient", list(DEFAULT_AMBIENT)),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_planes() -> int:
        """Get the maximum number of planes supported."""
        return MAX_PLANES

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_MATERIALS

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of point lights supported."""
        return MAX_LIGHTS
