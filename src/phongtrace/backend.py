"""Taichi backend initialization.

All kernels in this package work on 64-bit reals, so Taichi is initialized
with ``default_fp=ti.f64`` to keep literal constants in kernels at the same
precision as the fields they are combined with. Fast math is disabled so
the render kernel gives bit-identical results for every worker count.
"""

import taichi as ti


def init_backend(max_workers: int | None = None, *, debug: bool = False) -> None:
    """Initialize the Taichi CPU backend.

    Must be called once per process before importing modules that declare
    Taichi fields (everything under ``phongtrace.core``, ``geometry``,
    ``materials``, ``scene`` and ``camera``).

    Args:
        max_workers: Size of the CPU thread pool. Per-pass worker counts above
            this value are capped by the pool. Defaults to the hardware
            concurrency chosen by Taichi.
        debug: Enable Taichi debug mode (bounds checking).
    """
    kwargs = {}
    if max_workers is not None:
        kwargs["cpu_max_num_threads"] = max_workers
    # Fast math would let each worker count's kernel contract floats differently
    ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False, debug=debug, **kwargs)
