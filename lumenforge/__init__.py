"""
lumenforge - A Python Monte Carlo Path Tracer

Physically based building blocks for recursive path tracing:
- Thin-lens camera with depth of field
- Lambertian, metal and dielectric scattering
- Reproducible per-pixel random streams
- Sphere scenes loaded from YAML/JSON
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .sampling import make_rng, pixel_rng, thread_rng, random_double
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric, reflectance
from .camera import Camera
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .logging_config import setup_logging
