#!/usr/bin/env python3
"""
PhongForge - A Python Ray Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path

from phongforge.vec3 import Point, Vector, Color
from phongforge.transformations import (
    translation, scaling, rotation_x, rotation_y, chain, view_transform
)
from phongforge.camera import Camera
from phongforge.objects import SceneObject
from phongforge.materials import Material
from phongforge.patterns import StripePattern
from phongforge.lights import PointLight
from phongforge.world import World
from phongforge.renderer import RenderSettings
from phongforge.scene_parser import load_scene, SceneParseError


def wall_material() -> Material:
    return Material.from_color(Color(1.0, 0.9, 0.9), specular=0.0)


def create_demo_scene() -> World:
    """Three spheres in a room built from flattened spheres."""
    green = Color(0.5, 1.0, 0.1)
    objects = [
        # Floor and walls
        SceneObject.sphere(scaling(10, 0.01, 10), wall_material()),
        SceneObject.sphere(
            chain(scaling(10, 0.01, 10), rotation_x(math.pi / 2),
                  rotation_y(-math.pi / 4), translation(0, 0, 5)),
            wall_material(),
        ),
        SceneObject.sphere(
            chain(scaling(10, 0.01, 10), rotation_x(math.pi / 2),
                  rotation_y(math.pi / 4), translation(0, 0, 5)),
            wall_material(),
        ),
        # Spheres
        SceneObject.sphere(
            translation(-0.5, 1, 0.5),
            Material.from_color(Color(0.1, 1.0, 0.5), diffuse=0.7, specular=0.3),
        ),
        SceneObject.sphere(
            scaling(0.5, 0.5, 0.5) >> translation(1.5, 0.5, -0.5),
            Material.from_color(green, diffuse=0.7, specular=0.3),
        ),
        SceneObject.sphere(
            scaling(0.33, 0.33, 0.33) >> translation(-1.5, 0.33, -0.75),
            Material.from_color(green, diffuse=0.7, specular=0.3),
        ),
    ]
    light = PointLight(Point(-10, 10, -10), Color(1, 1, 1))
    return World([light], objects)


def create_patterns_scene() -> World:
    """Striped spheres on a plane floor in front of two plane walls."""
    white = Color.white()
    wall = Material(
        pattern=StripePattern(Color(1.0, 0.9, 0.9), Color(0.8, 0.7, 0.7),
                              rotation_y(math.pi / 2)),
        specular=0.0,
    )
    objects = [
        SceneObject.plane(material=wall),
        SceneObject.plane(
            chain(rotation_x(math.pi / 2), rotation_y(-math.pi / 4), translation(0, 0, 5)),
            wall,
        ),
        SceneObject.plane(
            chain(rotation_x(math.pi / 2), rotation_y(math.pi / 4), translation(0, 0, 5)),
            wall,
        ),
        SceneObject.sphere(
            translation(-0.5, 1, 0.5),
            Material(
                pattern=StripePattern(white, Color(1, 0, 0), scaling(0.2, 0.2, 0.2)),
                diffuse=0.7, specular=0.3,
            ),
        ),
        SceneObject.sphere(
            scaling(0.5, 0.5, 0.5) >> translation(1.5, 0.5, -0.5),
            Material(
                pattern=StripePattern(white, Color(0, 0, 1),
                                      scaling(0.5, 0.5, 0.5) >> rotation_y(math.pi / 4)),
                diffuse=0.7, specular=0.3,
            ),
        ),
        SceneObject.sphere(
            scaling(0.33, 0.33, 0.33) >> translation(-1.5, 0.33, -0.75),
            Material.from_color(Color(1, 0.8, 0.1), diffuse=0.7, specular=0.3),
        ),
    ]
    light = PointLight(Point(-10, 10, -10), Color(1, 1, 1))
    return World([light], objects)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='PhongForge - A Python Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.ppm
  python main.py --scene patterns --width 1000 --height 500 --output patterns.png
  python main.py --scene scenes/room.yaml --processes --threads 8
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 200)')
    parser.add_argument('--fov', type=float, default=None,
                        help='Field of view in degrees (default: 60)')
    parser.add_argument('--threads', type=int, default=None, help='Number of workers (0=auto, 1=sequential)')
    parser.add_argument('--processes', action='store_true', help='Use worker processes instead of threads')
    parser.add_argument('--tile-size', type=int, default=None, help='Tile edge in pixels (default: 16)')
    parser.add_argument('--output', type=str, default='output/render.ppm',
                        help='Output filename (.ppm or any format Pillow writes)')
    parser.add_argument('--scene', type=str, default='demo',
                        help='Built-in scene (demo, patterns) or path to a YAML/JSON scene file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Print header
    print("=" * 60)
    print("PhongForge Ray Tracer")
    print("=" * 60)

    # Create scene
    print(f"\nLoading scene: {args.scene}")
    if args.scene in ('demo', 'patterns'):
        world = create_demo_scene() if args.scene == 'demo' else create_patterns_scene()
        camera = Camera(400, 200, math.pi / 3).with_transform(
            view_transform(Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0))
        )
        settings = RenderSettings()
    else:
        try:
            world, camera, settings = load_scene(args.scene)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    # Command line overrides
    if args.width or args.height or args.fov:
        camera = Camera(
            args.width or camera.hsize,
            args.height or camera.vsize,
            math.radians(args.fov) if args.fov else camera.field_of_view,
            camera.transform,
        )
    settings = RenderSettings(
        tile_size=args.tile_size if args.tile_size is not None else settings.tile_size,
        num_threads=args.threads if args.threads is not None else settings.num_threads,
        use_processes=args.processes or settings.use_processes,
    )

    print(f"\nRender Settings:")
    print(f"  Resolution: {camera.hsize}x{camera.vsize}")
    print(f"  Field of view: {math.degrees(camera.field_of_view):.1f} degrees")
    print(f"  Tile size: {settings.tile_size}")
    print(f"  Workers: {settings.num_threads} ({'processes' if settings.use_processes else 'threads'})")
    print(f"  Objects in scene: {len(world.objects)}")
    print(f"  Lights in scene: {len(world.lights)}")

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    # Render
    print("\nRendering...")
    start_time = time.time()

    canvas = camera.render(world, settings, progress_callback)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Pixels per second: {(camera.hsize * camera.vsize) / max(elapsed, 1e-9):.0f}")

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Save image
    print(f"\nSaving to: {args.output}")
    canvas.save(output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
