"""Command-line benchmark renderer.

Renders the scene once per worker count, prints the wall-clock time of each
pass and saves each framebuffer as an image.

Usage:
    phongtrace [WIDTH HEIGHT [WORKERS ...]] [options]

Options:
    --output-dir DIR    Directory for rendered images (default: img_output)
    --format FORMAT     Image format, ppm or png (default: ppm)
    --scene PATH        JSON scene file (default: built-in scene)
    --no-save           Render and time only, do not write images
    --quiet             Only print the per-pass timing lines

Example:
    phongtrace 320 240 1 4 --format png
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from phongtrace.backend import init_backend
from phongtrace.preview.export import SUPPORTED_FORMATS

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 768
DEFAULT_WORKERS = (1, 2, 4, 8)
DEFAULT_OUTPUT_DIR = "img_output"


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="phongtrace",
        description="Render a Phong-shaded scene once per worker count and time each pass.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "width",
        type=_positive_int,
        nargs="?",
        default=None,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "height",
        type=_positive_int,
        nargs="?",
        default=None,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "workers",
        type=_positive_int,
        nargs="*",
        help="Worker counts, one pass each (default: 1 2 4 8)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for rendered images (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--format",
        dest="image_format",
        choices=SUPPORTED_FORMATS,
        default="ppm",
        help="Image format (default: ppm)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file with materials, spheres, planes, lights, ambient and camera",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write images",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the per-pass timing lines",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Width and height are given together or not at all. Worker counts are
    only accepted after both.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.width is None:
        args.width = DEFAULT_WIDTH
        args.height = DEFAULT_HEIGHT
    elif args.height is None:
        parser.error("HEIGHT is required when WIDTH is given")
    if not args.workers:
        args.workers = list(DEFAULT_WORKERS)
    return args


def load_scene_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON scene file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scene file {path} must contain a JSON object")
    return data


def run(
    width: int,
    height: int,
    worker_counts: list[int],
    output_dir: str = DEFAULT_OUTPUT_DIR,
    image_format: str = "ppm",
    scene_data: dict[str, Any] | None = None,
    save: bool = True,
    quiet: bool = False,
) -> list[Path]:
    """Render one pass per worker count and save the results.

    The Taichi backend must already be initialized.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        worker_counts: Worker counts, one pass each, in order.
        output_dir: Directory for rendered images.
        image_format: "ppm" or "png".
        scene_data: Scene dictionary (see ``Scene.from_dict``) with an
            optional "camera" entry. Uses the built-in scene when None.
        save: Write each framebuffer to ``output_parallel_<workers>.<ext>``.
        quiet: Only print the per-pass timing lines.

    Returns:
        Paths of the images written.
    """
    # Lazy imports so the backend is initialized before fields are declared
    from phongtrace.camera.pinhole import PinholeCamera
    from phongtrace.core.renderer import PassResult, Renderer, RenderSettings
    from phongtrace.preview.export import save_image
    from phongtrace.scene.default_scene import create_default_scene
    from phongtrace.scene.manager import Scene

    settings = RenderSettings(width=width, height=height, worker_counts=tuple(worker_counts))

    if scene_data is None:
        scene, camera = create_default_scene()
    else:
        scene = Scene()
        scene.from_dict(scene_data)
        camera = PinholeCamera.from_dict(scene_data.get("camera", {}))

    if not quiet:
        print(
            f"Rendering {settings.width}x{settings.height}: "
            f"{scene.get_sphere_count()} spheres, {scene.get_plane_count()} planes, "
            f"{scene.get_light_count()} lights"
        )

    out_dir = Path(output_dir)
    if save:
        out_dir.mkdir(parents=True, exist_ok=True)

    renderer = Renderer(settings.width, settings.height, camera)
    written: list[Path] = []

    def on_pass(result: PassResult) -> None:
        print(f"Threads={result.num_workers} Time(s)={result.seconds:.6f}", flush=True)
        if save:
            path = out_dir / f"output_parallel_{result.num_workers}.{image_format}"
            save_image(
                result.framebuffer,
                settings.width,
                settings.height,
                path,
                image_format=image_format,
            )
            written.append(path)
            if not quiet:
                print(f"  Saved to: {path}")

    renderer.run_passes(settings.worker_counts, callback=on_pass)
    return written


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        scene_data = load_scene_file(args.scene) if args.scene else None
        init_backend(max_workers=max(args.workers))
        run(
            width=args.width,
            height=args.height,
            worker_counts=args.workers,
            output_dir=args.output_dir,
            image_format=args.image_format,
            scene_data=scene_data,
            save=not args.no_save,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
