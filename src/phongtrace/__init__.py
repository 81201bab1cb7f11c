"""Taichi-based Phong ray caster for parallel rendering benchmarks.

This package renders a fixed scene of spheres and planes with one primary ray
per pixel, Phong shading and hard shadows. The per-pixel loop runs on the
Taichi CPU backend and can be repeated with different worker counts.

Subpackages:
    core: Vector utilities, constants, shading and the parallel render loop
    geometry: Sphere and plane primitives with ray intersection
    materials: Phong material model and material registry
    scene: Primitive/light storage, nearest-hit tracing and the Scene manager
    camera: Pinhole camera with fixed -z forward ray generation
    preview: Framebuffer export (PPM, PNG)

Taichi must be initialized before importing the subpackages, since they
declare fields at import time. Use ``phongtrace.backend.init_backend``.
"""

__version__ = "0.1.0"
