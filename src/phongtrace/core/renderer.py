"""Parallel per-pixel render loop.

The render kernel is a fork-join loop over image rows. Its outermost loop is
parallelized by the Taichi CPU backend: ``ti.loop_config(parallelize=n,
block_dim=ROW_BATCH_SIZE)`` runs it on ``n`` threads that claim rows in
batches of ``ROW_BATCH_SIZE`` from a shared counter, so busy rows (many
shadow rays) do not hold up the other workers. Each pixel reads only the
scene and camera and writes only its own framebuffer slot ``j * width + i``,
so no locking is needed.

The worker count is a compile-time parameter of the loop, so each distinct
count gets its own compiled kernel. ``render_pass`` compiles the kernel with
an empty launch before starting the timer.

Example:
    >>> from phongtrace.backend import init_backend
    >>> init_backend(max_workers=8)
    >>> from phongtrace.core.renderer import Renderer
    >>> from phongtrace.scene.default_scene import create_default_scene
    >>> scene, camera = create_default_scene()
    >>> renderer = Renderer(320, 240, camera)
    >>> for result in renderer.run_passes((1, 2, 4, 8)):
    ...     print(f"Threads={result.num_workers} Time(s)={result.seconds}")
"""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from phongtrace.camera.pinhole import (
    PinholeCamera,
    get_camera_eye,
    get_primary_ray,
    setup_camera,
)
from phongtrace.core.constants import DEFAULT_WORKER_COUNTS, ROW_BATCH_SIZE, T_MAX, T_MIN
from phongtrace.core.ray import real, vec3
from phongtrace.core.shading import shade_ray

# =============================================================================
# Configuration
# =============================================================================


@dataclass
class RenderSettings:
    """Image size and the worker counts to benchmark.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        worker_counts: Worker counts, one render pass each, in order.

    Raises:
        ValueError: On construction, if any value is not positive or no
            worker count is given.
    """

    width: int = 1024
    height: int = 768
    worker_counts: tuple[int, ...] = DEFAULT_WORKER_COUNTS

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        self.worker_counts = tuple(self.worker_counts)
        if not self.worker_counts:
            raise ValueError("At least one worker count is required")
        for count in self.worker_counts:
            if count <= 0:
                raise ValueError(f"Worker counts must be positive, got {count}")

    @property
    def max_workers(self) -> int:
        """The largest requested worker count."""
        return max(self.worker_counts)


@dataclass
class PassResult:
    """Outcome of one render pass.

    Attributes:
        num_workers: Worker count used for the pass.
        seconds: Wall-clock render time, excluding kernel compilation.
        framebuffer: Row-major colors of shape (width * height, 3).
    """

    num_workers: int
    seconds: float
    framebuffer: npt.NDArray[np.float64]


# Callback receives each PassResult as soon as its pass finishes
PassCallback = Callable[[PassResult], None]


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.func
def render_pixel_impl(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Color of pixel (i, j): shaded hit or background."""
    ray = get_primary_ray(i, j, width, height)
    return shade_ray(ray, get_camera_eye(), T_MIN, T_MAX)


@ti.kernel
def _render_rows(
    framebuffer: ti.types.ndarray(dtype=vec3, ndim=1),
    width: ti.i32,
    height: ti.i32,
    num_workers: ti.template(),
):
    """Render rows [0, height) into a flat row-major framebuffer."""
    ti.loop_config(parallelize=num_workers, block_dim=ROW_BATCH_SIZE)
    for j in range(height):
        for i in range(width):
            framebuffer[j * width + i] = render_pixel_impl(i, j, width, height)


_pixel_result = ti.Vector.field(3, dtype=real, shape=())


@ti.kernel
def _render_single_pixel(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32):
    """Render one pixel into the result field."""
    # Nested in a one-iteration loop so the scene scans stay serial
    for _ in range(1):
        _pixel_result[None] = render_pixel_impl(i, j, width, height)


# =============================================================================
# Public Rendering API
# =============================================================================


class Renderer:
    """Renders the current scene at a fixed image size.

    The scene is whatever the global scene fields hold (see
    ``phongtrace.scene.manager.Scene``); it must not change during a pass.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        camera: The camera configuration.
    """

    def __init__(self, width: int, height: int, camera: PinholeCamera) -> None:
        """Configure the camera for the image size.

        Raises:
            ValueError: If width or height is not positive.
        """
        setup_camera(camera, width, height)
        self._width = width
        self._height = height
        self._camera = camera

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def camera(self) -> PinholeCamera:
        """Get the camera configuration."""
        return self._camera

    def _new_framebuffer(self):
        return ti.Vector.ndarray(3, real, shape=self._width * self._height)

    def render_pass(self, num_workers: int) -> PassResult:
        """Render the full image once with a given worker count.

        A fresh framebuffer is allocated for every pass.

        Args:
            num_workers: Number of CPU threads for the row loop.

        Returns:
            The PassResult with timing and framebuffer.

        Raises:
            ValueError: If num_workers is not positive.
        """
        if num_workers <= 0:
            raise ValueError(f"Worker count must be positive, got {num_workers}")
        # The camera fields are shared, so reapply this renderer's image size
        setup_camera(self._camera, self._width, self._height)
        framebuffer = self._new_framebuffer()

        # Compile outside the timed region
        _render_rows(framebuffer, self._width, 0, num_workers)
        ti.sync()

        start_time = time.perf_counter()
        _render_rows(framebuffer, self._width, self._height, num_workers)
        ti.sync()
        elapsed = time.perf_counter() - start_time

        return PassResult(
            num_workers=num_workers,
            seconds=elapsed,
            framebuffer=framebuffer.to_numpy(),
        )

    def render(self, num_workers: int = 1) -> npt.NDArray[np.float64]:
        """Render the image and return the framebuffer.

        Returns:
            Row-major colors of shape (width * height, 3), each in [0, 1].
        """
        return self.render_pass(num_workers).framebuffer

    def run_passes(
        self,
        worker_counts: Sequence[int] = DEFAULT_WORKER_COUNTS,
        callback: PassCallback | None = None,
    ) -> list[PassResult]:
        """Render once per worker count, sequentially.

        Args:
            worker_counts: Worker counts in the order to run them.
            callback: Optional function called after each pass.

        Returns:
            One PassResult per worker count, in order.
        """
        results = []
        for num_workers in worker_counts:
            result = self.render_pass(num_workers)
            if callback is not None:
                callback(result)
            results.append(result)
        return results

    def render_pixel(self, i: int, j: int) -> tuple[float, float, float]:
        """Render a single pixel.

        Used for testing and debugging individual pixels.

        Args:
            i: Pixel column (0 = left).
            j: Pixel row (0 = top).

        Returns:
            The (R, G, B) color.
        """
        setup_camera(self._camera, self._width, self._height)
        _render_single_pixel(i, j, self._width, self._height)
        color = _pixel_result[None]
        return (float(color[0]), float(color[1]), float(color[2]))

    def __repr__(self) -> str:
        return f"Renderer(width={self.width}, height={self.height})"
