"""Output utilities for rendered framebuffers.

Components:
    export: 8-bit conversion and PPM/PNG writers

This module does not touch Taichi and can be imported before ti.init().
"""

from .export import (
    SUPPORTED_FORMATS,
    compute_rmse,
    format_ppm,
    framebuffer_to_image,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    "SUPPORTED_FORMATS",
    "framebuffer_to_image",
    "image_to_uint8",
    "format_ppm",
    "save_ppm",
    "save_png",
    "save_image",
    "compute_rmse",
]
