#!/usr/bin/env python3
"""Render a scene file (or the built-in demo scene) with the Whitted ray tracer.

Usage:
    python -m examples.render_scene [SCENE] [options]

Arguments:
    SCENE               Scene file (.yaml, .yml or .json). Renders the
                        built-in demo scene when omitted.

Options:
    --width WIDTH       Demo scene width in pixels (default: 640)
    --height HEIGHT     Demo scene height in pixels (default: 480)
    --max-depth DEPTH   Override the scene's reflection/refraction depth
    --output OUTPUT     Output file path (default: render.png)
    --display MODE      none, window (Taichi GGUI) or matplotlib (default: none)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_scene examples/scenes/three_spheres.yaml --output spheres.png
    python -m examples.render_scene --width 320 --height 240 --display matplotlib
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

# Allow running the script directly from a checkout
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

DISPLAY_MODES = ("none", "window", "matplotlib")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Build the argument parser and parse ``argv``."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scene",
        nargs="?",
        default=None,
        help="Scene file (.yaml, .yml or .json); omit to render the demo scene",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Demo scene width in pixels (default: 640)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Demo scene height in pixels (default: 480)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Override the scene's reflection/refraction depth",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--display",
        choices=DISPLAY_MODES,
        default="none",
        help="Show the result: none, window (Taichi GGUI) or matplotlib (default: none)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_world(
    scene_path: str | None,
    width: int = 640,
    height: int = 480,
    max_depth: int | None = None,
):
    """Load the scene file, or build the demo scene when no path is given."""
    from src.whitted.scene.loader import load_world
    from src.whitted.scene.presets import create_demo_world

    if scene_path is None:
        world = create_demo_world(width=width, height=height)
    else:
        world = load_world(scene_path)

    if max_depth is not None:
        world = dataclasses.replace(world, max_recursions=max_depth)
    return world


def render_scene(
    scene_path: str | None = None,
    *,
    width: int = 640,
    height: int = 480,
    max_depth: int | None = None,
    output_path: str = "render.png",
    display: str = "none",
    quiet: bool = False,
) -> Path:
    """Render a scene and save it as a PNG.

    Args:
        scene_path: Scene file to load, or None for the demo scene.
        width: Demo scene width in pixels.
        height: Demo scene height in pixels.
        max_depth: Optional override of the scene's recursion depth.
        output_path: Where to write the PNG.
        display: How to show the result ("none", "window", "matplotlib").
        quiet: Print nothing when True.

    Returns:
        The path of the written PNG.
    """
    from src.whitted.core.engine import Engine
    from src.whitted.preview.display import show_preview
    from src.whitted.preview.export import save_png

    world = build_world(scene_path, width, height, max_depth)
    engine = Engine(world)
    pixels_width, pixels_height = world.camera.get_pixel_size()

    if not quiet:
        source = scene_path if scene_path is not None else "demo scene"
        print(f"Rendering {source} ({pixels_width}x{pixels_height})...")

    started = time.time()

    if display == "window":
        import taichi as ti

        from src.whitted.preview.interactive import InteractivePreview

        ti.init(arch=ti.cpu)
        preview = InteractivePreview(pixels_width, pixels_height)
        image = preview.run_progressive(engine)
    else:

        def report_row(rows_done: int, rows: int) -> None:
            print(
                f"\r  Row {rows_done}/{rows} ({100.0 * rows_done / rows:.0f}%) "
                f"{time.time() - started:.1f}s",
                end="",
                flush=True,
            )

        image = engine.generate(callback=None if quiet else report_row)
        if not quiet:
            print()

    output_file = Path(output_path)
    save_png(image, output_file)
    if not quiet:
        print(f"Saved to: {output_file.resolve()} ({time.time() - started:.2f}s)")

    if display == "matplotlib":
        show_preview(image, title=output_file.name)

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_scene(
            args.scene,
            width=args.width,
            height=args.height,
            max_depth=args.max_depth,
            output_path=args.output,
            display=args.display,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
