"""
Scene description parser.

Reads YAML or JSON scene files with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  aperture: 0.1
  focus_dist: 10

render:
  width: 400
  height: 225
  samples: 100
  max_depth: 50
  seed: 7

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    ir: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: glass
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import yaml

from .vec3 import Vec3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (.yaml, .yml or .json)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        data = self._mapping(data, 'scene')

        # Settings come first: the camera defaults its aspect ratio from them
        if 'render' in data:
            self._parse_settings(self._mapping(data['render'], 'render'))
        else:
            self.settings = RenderSettings()

        # Materials before objects (objects reference them)
        if 'materials' in data:
            self._parse_materials(self._mapping(data['materials'], 'materials'))

        if 'objects' in data:
            self._parse_objects(data['objects'])

        self._parse_camera(self._mapping(data.get('camera', {}), 'camera'))

        logger.debug("Parsed %d materials and %d objects",
                     len(self.materials), len(self.objects))
        return self.objects, self.camera, self.settings

    @staticmethod
    def _mapping(data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"{what} must be a mapping, got: {data!r}")
        return data

    @staticmethod
    def _number(value: Any, what: str, kind=float):
        """Convert a scalar field, reporting bad values as SceneParseError."""
        if isinstance(value, bool):
            raise SceneParseError(f"{what} must be a number, got: {value!r}")
        try:
            return kind(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise SceneParseError(f"{what} must be a number, got: {value!r}") from e

    def _parse_vec3(self, data: Any, what: str = 'vector') -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(self._number(c, what) for c in data))
        elif isinstance(data, dict):
            return Vec3(
                self._number(data.get('x', 0), what),
                self._number(data.get('y', 0), what),
                self._number(data.get('z', 0), what)
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, r/g/b mapping or #rrggbb string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._number(c, 'color') for c in data))
        elif isinstance(data, dict):
            return Color(
                self._number(data.get('r', 0), 'color'),
                self._number(data.get('g', 0), 'color'),
                self._number(data.get('b', 0), 'color')
            )
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    channels = [int(data[i:i + 2], 16) / 255.0 for i in (1, 3, 5)]
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(*channels)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _build_material(self, mat_data: Any) -> Material:
        mat_data = self._mapping(mat_data, 'material')
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            return Lambertian(self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5])))

        if mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            return Metal(albedo, self._number(mat_data.get('fuzz', 0.0), 'fuzz'))

        if mat_type == 'dielectric':
            return Dielectric(self._number(mat_data.get('ir', 1.5), 'ir'))

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        if isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: Any) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError(f"objects must be a list, got: {objects_data!r}")

        for obj_data in objects_data:
            obj_data = self._mapping(obj_data, 'object')
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]), 'center')
            radius = self._number(obj_data.get('radius', 1.0), 'radius')
            self.objects.add(Sphere(center, radius, material))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        self.camera = Camera(
            look_from=self._parse_vec3(camera_data.get('look_from', [0, 0, 5]), 'look_from'),
            look_at=self._parse_vec3(camera_data.get('look_at', [0, 0, 0]), 'look_at'),
            vup=self._parse_vec3(camera_data.get('vup', [0, 1, 0]), 'vup'),
            vfov=self._number(camera_data.get('vfov', 60), 'vfov'),
            aspect_ratio=self._number(
                camera_data.get('aspect_ratio', self.settings.aspect_ratio), 'aspect_ratio'),
            aperture=self._number(camera_data.get('aperture', 0.0), 'aperture'),
            focus_dist=self._number(camera_data.get('focus_dist', 1.0), 'focus_dist')
        )

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        self.settings = RenderSettings(
            width=self._number(settings_data.get('width', 400), 'width', int),
            height=self._number(settings_data.get('height', 225), 'height', int),
            samples_per_pixel=self._number(settings_data.get('samples', 100), 'samples', int),
            max_depth=self._number(settings_data.get('max_depth', 50), 'max_depth', int),
            seed=self._number(settings_data.get('seed', 0), 'seed', int),
            gamma=self._number(settings_data.get('gamma', 2.0), 'gamma')
        )


def load_scene(filepath: str) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to load a scene file."""
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary."""
    parser = SceneParser()
    return parser.parse_dict(data)
