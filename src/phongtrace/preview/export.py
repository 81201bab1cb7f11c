"""Framebuffer export utilities.

This module converts the renderer's flat, row-major framebuffer into 8-bit
images and writes them to disk.

Each channel is mapped linearly: ``round(255 * clamp(c, 0, 1))``. No gamma
correction or tone mapping is applied.

Supported formats:
    - PPM (plaintext P3), one line of pixel triples per scanline
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from phongtrace.preview.export import save_image
    >>> result = renderer.render_pass(4)
    >>> save_image(result.framebuffer, renderer.width, renderer.height, "out.ppm")
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

ImageFormat = Literal["ppm", "png"]

SUPPORTED_FORMATS: tuple[str, ...] = ("ppm", "png")


def framebuffer_to_image(
    framebuffer: npt.NDArray[np.floating],
    width: int,
    height: int,
) -> npt.NDArray[np.float64]:
    """Reshape a flat framebuffer into an image array.

    Args:
        framebuffer: Colors of shape (width * height, 3), pixel (i, j) at
            index j * width + i.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Array of shape (height, width, 3); row 0 is the top of the image.

    Raises:
        ValueError: If the framebuffer size does not match width * height.
    """
    data = np.asarray(framebuffer, dtype=np.float64)
    if data.shape != (width * height, 3):
        raise ValueError(
            f"Framebuffer shape {data.shape} does not match {width}x{height} RGB image"
        )
    return data.reshape(height, width, 3)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert linear [0, 1] colors to 8-bit values.

    Values are clamped to [0, 1] first, then scaled by 255 and rounded to
    the nearest integer (halves round up).

    Args:
        image: Array of any shape holding color channels.

    Returns:
        Array of the same shape with dtype uint8.
    """
    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    return np.floor(clamped * 255.0 + 0.5).astype(np.uint8)


def format_ppm(pixels: npt.NDArray[np.uint8]) -> str:
    """Format an 8-bit RGB image as plaintext PPM (P3).

    Args:
        pixels: Array of shape (height, width, 3).

    Returns:
        The file contents: a ``P3`` header with dimensions and max value,
        then one line of ``r g b`` triples per scanline.
    """
    height, width, _ = pixels.shape
    lines = ["P3", f"{width} {height}", "255"]
    for row in pixels:
        lines.append(" ".join(f"{r} {g} {b}" for r, g, b in row))
    return "\n".join(lines) + "\n"


def save_ppm(
    framebuffer: npt.NDArray[np.floating],
    width: int,
    height: int,
    filepath: str | Path,
) -> Path:
    """Save a framebuffer as a plaintext PPM file.

    Args:
        framebuffer: Flat row-major framebuffer of shape (width * height, 3).
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path.

    Returns:
        The path written.
    """
    pixels = image_to_uint8(framebuffer_to_image(framebuffer, width, height))
    path = Path(filepath)
    path.write_text(format_ppm(pixels))
    return path


def save_png(
    framebuffer: npt.NDArray[np.floating],
    width: int,
    height: int,
    filepath: str | Path,
) -> Path:
    """Save a framebuffer as an 8-bit RGB PNG file.

    Args:
        framebuffer: Flat row-major framebuffer of shape (width * height, 3).
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path.

    Returns:
        The path written.
    """
    pixels = image_to_uint8(framebuffer_to_image(framebuffer, width, height))
    path = Path(filepath)
    PILImage.fromarray(pixels).save(path, format="PNG")
    return path


def save_image(
    framebuffer: npt.NDArray[np.floating],
    width: int,
    height: int,
    filepath: str | Path,
    *,
    image_format: ImageFormat | None = None,
) -> Path:
    """Save a framebuffer, choosing the format from the file extension.

    Args:
        framebuffer: Flat row-major framebuffer of shape (width * height, 3).
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path.
        image_format: "ppm" or "png". Defaults to the file extension.

    Returns:
        The path written.

    Raises:
        ValueError: If the format is not supported.
    """
    path = Path(filepath)
    fmt = (image_format or path.suffix.lstrip(".")).lower()
    if fmt == "ppm":
        return save_ppm(framebuffer, width, height, path)
    if fmt == "png":
        return save_png(framebuffer, width, height, path)
    raise ValueError(
        f"Unsupported image format: {fmt!r} (expected one of {', '.join(SUPPORTED_FORMATS)})"
    )


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two framebuffers or images.

    Args:
        image_a: First array.
        image_b: Second array (must have the same shape as image_a).

    Returns:
        RMSE value (0 for identical inputs).

    Raises:
        ValueError: If shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
