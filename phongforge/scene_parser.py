"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library (solid colors and stripe patterns)
- Objects (shapes with transforms and materials)
- Point lights

Transforms are lists of steps applied in the order written. Angles in
scene files (rotations and field of view) are in degrees.

Example scene file:
```yaml
camera:
  width: 200
  height: 100
  field_of_view: 60
  from: [0, 1.5, -5]
  to: [0, 1, 0]
  up: [0, 1, 0]

render:
  tile_size: 16
  threads: 0
  processes: false

materials:
  wall:
    color: [1, 0.9, 0.9]
    specular: 0
  striped:
    pattern:
      type: stripe
      colors: [[1, 1, 1], [0.2, 0.2, 0.2]]
      transform:
        - [scale, 0.25, 0.25, 0.25]

objects:
  - type: plane
    material: wall
  - type: sphere
    material: striped
    transform:
      - [translate, -0.5, 1, 0.5]

lights:
  - position: [-10, 10, -10]
    intensity: [1, 1, 1]
```
"""

from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import yaml

from .vec3 import Point, Vector, Color
from .matrix import Matrix, SingularMatrixError
from .camera import Camera
from .objects import SceneObject
from .shapes import Shape
from .materials import Material
from .patterns import Pattern, SolidPattern, StripePattern
from .lights import PointLight
from .renderer import RenderSettings
from .world import World
from . import transformations

logger = logging.getLogger(__name__)

MATERIAL_COEFFICIENTS = ('ambient', 'diffuse', 'specular', 'shininess')


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: list[SceneObject] = []
        self.lights: list[PointLight] = []
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[World, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera, settings)
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
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file {filepath} must contain a mapping at the top level")

        logger.info("Loading scene from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[World, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, camera, settings)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(self._require_mapping(data['materials'], 'materials'))

        if 'objects' in data:
            self._parse_objects(self._require_list(data['objects'], 'objects'))

        if 'lights' in data:
            self._parse_lights(self._require_list(data['lights'], 'lights'))

        self._parse_camera(self._require_mapping(data.get('camera', {}), 'camera'))
        self._parse_settings(self._require_mapping(data.get('render', {}), 'render'))

        world = World(self.lights, self.objects)
        logger.debug("Parsed %r with %d materials", world, len(self.materials))
        return world, self.camera, self.settings

    @staticmethod
    def _require_mapping(data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"{what} must be a mapping, got: {data!r}")
        return data

    @staticmethod
    def _require_list(data: Any, what: str) -> list:
        if not isinstance(data, list):
            raise SceneParseError(f"{what} must be a list, got: {data!r}")
        return data

    @staticmethod
    def _number(value: Any, what: str, kind=float):
        """Convert a scalar field, reporting bad values as SceneParseError."""
        try:
            return kind(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid {what}: {value!r}") from e

    def _parse_point(self, data: Any) -> Point:
        return Point(*self._parse_triple(data, 'Point', ('x', 'y', 'z')))

    def _parse_vector(self, data: Any) -> Vector:
        return Vector(*self._parse_triple(data, 'Vector', ('x', 'y', 'z')))

    def _parse_triple(self, data: Any, kind: str, keys: Tuple[str, str, str]) -> Tuple[float, float, float]:
        """Parse three floats from a list or a mapping."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"{kind} must have 3 components, got {len(data)}")
                return float(data[0]), float(data[1]), float(data[2])
            elif isinstance(data, dict):
                return tuple(float(data.get(k, 0)) for k in keys)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse {kind} from: {data}") from e
        raise SceneParseError(f"Cannot parse {kind} from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an r/g/b mapping or a hex string."""
        if isinstance(data, str):
            hex_color = data[1:] if data.startswith('#') else ''
            if len(hex_color) == 6:
                try:
                    r = int(hex_color[0:2], 16) / 255.0
                    g = int(hex_color[2:4], 16) / 255.0
                    b = int(hex_color[4:6], 16) / 255.0
                    return Color(r, g, b)
                except ValueError:
                    pass
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return Color(*self._parse_triple(data, 'Color', ('r', 'g', 'b')))

    def _parse_transform(self, steps: Any) -> Matrix:
        """Build a transform from steps such as ``[translate, 1, 2, 3]``."""
        if steps is None:
            return transformations.identity()
        if not isinstance(steps, list):
            raise SceneParseError(f"Transform must be a list of steps, got: {steps}")

        result = transformations.identity()
        for step in steps:
            if not isinstance(step, list) or not step:
                raise SceneParseError(f"Invalid transform step: {step}")
            op, args = str(step[0]).lower(), step[1:]
            try:
                values = [float(a) for a in args]
            except (TypeError, ValueError) as e:
                raise SceneParseError(f"Invalid transform arguments: {step}") from e

            result = result >> self._transform_step(op, values, step)
        return result

    def _transform_step(self, op: str, values: list[float], step: list) -> Matrix:
        expected = {
            'translate': 3, 'scale': 3, 'shear': 6,
            'rotate_x': 1, 'rotate_y': 1, 'rotate_z': 1,
        }
        if op not in expected:
            raise SceneParseError(f"Unknown transform: {op}")
        if len(values) != expected[op]:
            raise SceneParseError(f"Transform {op} takes {expected[op]} values, got {step}")

        if op == 'translate':
            return transformations.translation(*values)
        elif op == 'scale':
            return transformations.scaling(*values)
        elif op == 'shear':
            return transformations.shearing(*values)
        elif op == 'rotate_x':
            return transformations.rotation_x(math.radians(values[0]))
        elif op == 'rotate_y':
            return transformations.rotation_y(math.radians(values[0]))
        else:
            return transformations.rotation_z(math.radians(values[0]))

    def _parse_pattern(self, data: Any) -> Pattern:
        data = self._require_mapping(data, 'pattern')
        pattern_type = str(data.get('type', 'solid')).lower()

        if pattern_type == 'solid':
            return SolidPattern(self._parse_color(data.get('color', [1, 1, 1])))

        elif pattern_type == 'stripe':
            colors = data.get('colors', [[1, 1, 1], [0, 0, 0]])
            if not isinstance(colors, list) or len(colors) != 2:
                raise SceneParseError(f"Stripe pattern needs exactly 2 colors, got: {colors}")
            return StripePattern(
                self._parse_color(colors[0]),
                self._parse_color(colors[1]),
                self._parse_transform(data.get('transform')),
            )

        else:
            raise SceneParseError(f"Unknown pattern type: {pattern_type}")

    def _parse_material(self, mat_data: Any) -> Material:
        mat_data = self._require_mapping(mat_data, 'material')

        if 'pattern' in mat_data:
            pattern = self._parse_pattern(mat_data['pattern'])
        else:
            pattern = SolidPattern(self._parse_color(mat_data.get('color', [1, 1, 1])))

        coefficients = {
            name: self._number(mat_data[name], f"material {name}")
            for name in MATERIAL_COEFFICIENTS if name in mat_data
        }
        try:
            return Material(pattern=pattern, **coefficients)
        except ValueError as e:
            raise SceneParseError(str(e)) from e

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return Material()
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            obj_data = self._require_mapping(obj_data, 'object')
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            try:
                shape = Shape(obj_type)
            except ValueError:
                raise SceneParseError(f"Unknown object type: {obj_type}") from None

            transform = self._parse_transform(obj_data.get('transform'))
            if not transform.is_invertible():
                raise SceneParseError(f"Transform of {obj_type} is not invertible: {transform}")

            self.objects.append(SceneObject(
                shape=shape,
                transform=transform,
                material=self._get_material(obj_data.get('material')),
            ))

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        for light_data in lights_data:
            light_data = self._require_mapping(light_data, 'light')
            light_type = str(light_data.get('type', 'point')).lower()

            if light_type == 'point':
                position = self._parse_point(light_data.get('position', [0, 5, 0]))
                intensity = self._parse_color(light_data.get('intensity', [1, 1, 1]))
                self.lights.append(PointLight(position, intensity))

            else:
                raise SceneParseError(f"Unknown light type: {light_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        width = self._number(camera_data.get('width', 400), 'camera width', int)
        height = self._number(camera_data.get('height', 200), 'camera height', int)
        fov = math.radians(self._number(camera_data.get('field_of_view', 60), 'field_of_view'))
        from_ = self._parse_point(camera_data.get('from', [0, 0, -5]))
        to = self._parse_point(camera_data.get('to', [0, 0, 0]))
        up = self._parse_vector(camera_data.get('up', [0, 1, 0]))

        try:
            view = transformations.view_transform(from_, to, up)
            self.camera = Camera(width, height, fov, view)
        except (ValueError, SingularMatrixError) as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        tile_size = self._number(settings_data.get('tile_size', 16), 'tile_size', int)
        threads = self._number(settings_data.get('threads', 0), 'threads', int)
        try:
            self.settings = RenderSettings(
                tile_size=tile_size,
                num_threads=threads,
                use_processes=bool(settings_data.get('processes', False)),
            )
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: str) -> Tuple[World, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[World, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
