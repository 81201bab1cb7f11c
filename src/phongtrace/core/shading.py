"""Phong shading with hard shadows, and the background gradient.

For a hit with material (color, kd, ks, shininess) the outgoing color is

    ambient * color * kd
      + sum over unshadowed lights of (diffuse + specular) * intensity

with

    diffuse  = color * kd * max(0, N . L)
    specular = intensity * ks * max(0, R . V) ^ shininess

where L points to the light, R is L mirrored about N and V points to the
eye. The specular term is multiplied by the light intensity twice, once in
``specular`` and once when the light's contribution is added. The result is
clamped to [0, 1] per channel.

A light is skipped when a shadow ray toward it hits anything at all, even an
occluder beyond the light itself.
"""

import taichi as ti
import taichi.math as tm

from phongtrace.core.constants import BACKGROUND_BOTTOM, BACKGROUND_TOP, SHADOW_BIAS, T_MAX
from phongtrace.core.ray import Ray, clamp01, normalize, real, reflect_about, vec3
from phongtrace.scene.intersection import HitInfo, trace_scene
from phongtrace.scene.lights import get_ambient, get_light, num_lights


@ti.func
def in_shadow(position: vec3, normal: vec3, to_light: vec3) -> ti.i32:
    """Check whether anything blocks the direction toward a light.

    The shadow ray starts ``SHADOW_BIAS`` above the surface so it does not
    hit the surface it leaves.

    Args:
        position: The shaded point.
        normal: Unit surface normal at the point.
        to_light: Unit direction from the point toward the light.

    Returns:
        1 if the shadow ray hits any primitive, 0 otherwise.
    """
    shadow_ray = Ray(origin=position + normal * SHADOW_BIAS, direction=to_light)
    rec = trace_scene(shadow_ray, SHADOW_BIAS, T_MAX)
    return rec.hit


@ti.func
def shade(ray: Ray, hit: HitInfo, eye: vec3) -> vec3:
    """Compute the Phong color of a hit point.

    Args:
        ray: The ray that produced the hit.
        hit: The hit record. Must have hit == 1.
        eye: The eye position used for the view vector.

    Returns:
        The clamped RGB color.
    """
    mat = hit.mat
    color = get_ambient() * mat.color * mat.kd

    for light_idx in range(num_lights[None]):
        light = get_light(light_idx)
        to_light = normalize(light.position - hit.position)

        if in_shadow(hit.position, hit.normal, to_light) == 0:
            n_dot_l = tm.max(0.0, tm.dot(hit.normal, to_light))
            diffuse = mat.color * mat.kd * n_dot_l

            view = normalize(eye - hit.position)
            reflected = normalize(reflect_about(to_light, hit.normal))
            r_dot_v = tm.max(0.0, tm.dot(reflected, view))
            specular = light.intensity * mat.ks * r_dot_v**mat.shininess

            color += (diffuse + specular) * light.intensity

    return clamp01(color)


@ti.func
def background(direction: vec3) -> vec3:
    """Vertical background gradient for rays that hit nothing.

    Blends from ``BACKGROUND_BOTTOM`` at direction.y == -1 to
    ``BACKGROUND_TOP`` at direction.y == 1.
    """
    t = 0.5 * (direction.y + 1.0)
    bottom = vec3(BACKGROUND_BOTTOM[0], BACKGROUND_BOTTOM[1], BACKGROUND_BOTTOM[2])
    top = vec3(BACKGROUND_TOP[0], BACKGROUND_TOP[1], BACKGROUND_TOP[2])
    return clamp01(bottom * (1.0 - t) + top * t)


@ti.func
def shade_ray(ray: Ray, eye: vec3, t_min: real, t_max: real) -> vec3:
    """Trace a ray and return its shaded color or the background."""
    rec = trace_scene(ray, t_min, t_max)
    color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 1:
        color = shade(ray, rec, eye)
    else:
        color = background(ray.direction)
    return color
