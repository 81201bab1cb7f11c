"""The benchmark scene.

Three colored spheres above a gray floor plane, lit by a white key light and
a dimmer fill light, seen from the origin looking down -z.

Primitives in scan order (material ID in parentheses):
    sphere 0: red (0)   at (-1.2, 0.5, -6.0), radius 1.0
    sphere 1: blue (2)  at (1.2, 0.2, -5.0), radius 0.8
    sphere 2: green (1) at (0.0, -0.5, -4.0), radius 0.6
    plane 0:  gray (3)  floor y = -1.5
"""

from phongtrace.camera.pinhole import PinholeCamera
from phongtrace.scene.manager import Scene

# =============================================================================
# Materials
# =============================================================================

RED = {"color": (0.8, 0.1, 0.1), "kd": 0.7, "ks": 0.3, "shininess": 64.0}
GREEN = {"color": (0.1, 0.8, 0.1), "kd": 0.7, "ks": 0.3, "shininess": 32.0}
BLUE = {"color": (0.1, 0.1, 0.8), "kd": 0.7, "ks": 0.3, "shininess": 16.0}
GRAY = {"color": (0.7, 0.7, 0.7), "kd": 0.8, "ks": 0.2, "shininess": 8.0}

FLOOR_Y = -1.5

# =============================================================================
# Camera
# =============================================================================

CAMERA_EYE = (0.0, 0.0, 0.0)
CAMERA_LOOK_AT = (0.0, 0.0, -1.0)
CAMERA_UP = (0.0, 1.0, 0.0)
CAMERA_FOV = 60.0


def create_default_camera() -> PinholeCamera:
    """Create the benchmark camera."""
    return PinholeCamera(eye=CAMERA_EYE, look_at=CAMERA_LOOK_AT, up=CAMERA_UP, fov=CAMERA_FOV)


def create_default_scene() -> tuple[Scene, PinholeCamera]:
    """Create the benchmark scene.

    Returns:
        A tuple of (scene, camera).

    Example:
        >>> scene, camera = create_default_scene()
        >>> scene.get_sphere_count(), scene.get_plane_count(), scene.get_light_count()
        (3, 1, 2)
    """
    scene = Scene()

    red = scene.add_material(**RED)
    green = scene.add_material(**GREEN)
    blue = scene.add_material(**BLUE)
    gray = scene.add_material(**GRAY)

    scene.add_sphere(center=(-1.2, 0.5, -6.0), radius=1.0, material_id=red)
    scene.add_sphere(center=(1.2, 0.2, -5.0), radius=0.8, material_id=blue)
    scene.add_sphere(center=(0.0, -0.5, -4.0), radius=0.6, material_id=green)
    scene.add_plane(point=(0.0, FLOOR_Y, 0.0), normal=(0.0, 1.0, 0.0), material_id=gray)

    scene.add_point_light(position=(5.0, 7.0, -3.0), intensity=(1.0, 1.0, 1.0))
    scene.add_point_light(position=(-4.0, 4.0, -2.0), intensity=(0.4, 0.4, 0.4))

    scene.ambient = (0.1, 0.1, 0.1)

    return scene, create_default_camera()
