#!/usr/bin/env python3
"""
lumenforge - A Python Monte Carlo Path Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from lumenforge.vec3 import Vec3, Color, Point3
from lumenforge.camera import Camera
from lumenforge.shapes import Sphere, HittableList
from lumenforge.materials import Lambertian, Metal, Dielectric
from lumenforge.renderer import Renderer, RenderSettings
from lumenforge.sampling import make_rng
from lumenforge.scene_parser import load_scene, SceneParseError
from lumenforge.logging_config import setup_logging

logger = logging.getLogger("lumenforge.main")


def create_random_scene(seed: int = 0) -> HittableList:
    """Create the classic scene: three large spheres among many small ones."""
    rng = make_rng(seed)
    world = HittableList()

    ground_material = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -1000, 0), 1000, ground_material))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = Vec3.random(rng) * Vec3.random(rng)
                sphere_material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                albedo = Vec3.random(rng, 0.5, 1)
                fuzz = rng.uniform(0, 0.5)
                sphere_material = Metal(albedo, fuzz)
            else:
                # glass
                sphere_material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, sphere_material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return world


def create_three_spheres() -> HittableList:
    """Diffuse, hollow glass and fuzzy metal spheres on a diffuse ground."""
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    left = Dielectric(1.5)
    right = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, left))
    # Negative radius turns the inner sphere into a hollow shell
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), -0.45, left))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, right))

    return world


def build_builtin_scene(name: str, settings: RenderSettings):
    """Return (world, camera) for one of the built-in scenes."""
    if name == 'three':
        look_from = Point3(3, 3, 2)
        look_at = Point3(0, 0, -1)
        camera = Camera(
            look_from=look_from,
            look_at=look_at,
            vup=Vec3(0, 1, 0),
            vfov=20,
            aspect_ratio=settings.aspect_ratio,
            aperture=2.0,
            focus_dist=(look_from - look_at).length()
        )
        return create_three_spheres(), camera

    camera = Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=settings.aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )
    return create_random_scene(settings.seed), camera


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='lumenforge - A Python Monte Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --scene three --samples 50 --output three.ppm
  python main.py --scene-file scenes/glass.yaml --output glass.png
        '''
    )

    parser.add_argument('--width', type=int, default=400, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=225, help='Image height (default: 225)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50, help='Max ray depth (default: 50)')
    parser.add_argument('--seed', type=int, default=0, help='Seed for scene and pixel sampling')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='demo', choices=['demo', 'three'],
                        help='Built-in scene to render (default: demo)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML/JSON scene file (overrides --scene and size options)')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.scene_file:
        try:
            world, camera, settings = load_scene(args.scene_file)
        except SceneParseError as e:
            logger.error("%s", e)
            return 1
    else:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            seed=args.seed
        )
        world, camera = build_builtin_scene(args.scene, settings)

    logger.info("Objects in scene: %d", len(world))

    renderer = Renderer(settings)

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    start_time = time.time()
    image = renderer.render(world, camera)
    elapsed = time.time() - start_time
    print()
    logger.info("Samples per second: %.0f",
                (settings.width * settings.height * settings.samples_per_pixel) / max(elapsed, 1e-9))

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    renderer.save_image(image, str(output_path))

    return 0


if __name__ == '__main__':
    sys.exit(main())
