"""Tests for scene file parsing."""

import json
import math

import pytest

from phongforge.vec3 import Point, Vector, Color
from phongforge.shapes import Shape
from phongforge.materials import Material
from phongforge.patterns import SolidPattern, StripePattern
from phongforge.lights import PointLight
from phongforge.transformations import (
    translation, scaling, rotation_x, rotation_y, shearing, view_transform
)
from phongforge.scene_parser import SceneParser, SceneParseError, load_scene, parse_scene


SCENE_YAML = """
camera:
  width: 40
  height: 20
  field_of_view: 60
  from: [0, 1.5, -5]
  to: [0, 1, 0]
  up: [0, 1, 0]

render:
  tile_size: 8
  threads: 2
  processes: true

materials:
  wall:
    color: [1, 0.9, 0.9]
    specular: 0
  striped:
    pattern:
      type: stripe
      colors: [[1, 1, 1], "#ff0000"]
      transform:
        - [scale, 0.2, 0.2, 0.2]
    diffuse: 0.7
    specular: 0.3

objects:
  - type: plane
    material: wall
  - type: sphere
    material: striped
    transform:
      - [translate, -0.5, 1, 0.5]
  - type: sphere
    material:
      color: {r: 0.5, g: 1, b: 0.1}
    transform:
      - [scale, 0.5, 0.5, 0.5]
      - [translate, 1.5, 0.5, -0.5]

lights:
  - position: [-10, 10, -10]
    intensity: [1, 1, 1]
"""


class TestParseDict:
    """Test SceneParser.parse_dict()."""

    def test_minimal_scene(self):
        world, camera, settings = parse_scene({})
        assert world.objects == ()
        assert world.lights == ()
        assert (camera.hsize, camera.vsize) == (400, 200)
        assert camera.field_of_view == pytest.approx(math.pi / 3)
        assert settings.tile_size == 16

    def test_objects_and_materials(self):
        world, _, _ = parse_scene({
            'materials': {'red': {'color': [1, 0, 0], 'ambient': 0.3}},
            'objects': [
                {'type': 'sphere', 'material': 'red'},
                {'type': 'plane'},
            ],
        })
        sphere, plane = world.objects
        assert sphere.shape is Shape.SPHERE
        assert sphere.material == Material.from_color(Color(1, 0, 0), ambient=0.3)
        assert plane.shape is Shape.PLANE
        assert plane.material == Material()

    def test_transform_steps_apply_in_order(self):
        world, _, _ = parse_scene({
            'objects': [{
                'type': 'sphere',
                'transform': [['rotate_x', 90], ['scale', 5, 5, 5], ['translate', 10, 5, 7]],
            }],
        })
        expected = rotation_x(math.pi / 2) >> scaling(5, 5, 5) >> translation(10, 5, 7)
        assert world.objects[0].transform == expected
        assert world.objects[0].transform @ Point(1, 0, 1) == Point(15, 0, 7)

    def test_shear_and_rotate_y(self):
        world, _, _ = parse_scene({
            'objects': [{
                'type': 'sphere',
                'transform': [['shear', 1, 0, 0, 0, 0, 0], ['rotate_y', 45]],
            }],
        })
        expected = shearing(1, 0, 0, 0, 0, 0) >> rotation_y(math.pi / 4)
        assert world.objects[0].transform == expected

    def test_lights(self):
        world, _, _ = parse_scene({
            'lights': [{'position': [1, 2, 3], 'intensity': [0.5, 0.5, 0.5]}],
        })
        assert world.lights == (PointLight(Point(1, 2, 3), Color(0.5, 0.5, 0.5)),)

    def test_camera(self):
        _, camera, _ = parse_scene({
            'camera': {'width': 20, 'height': 10, 'field_of_view': 90,
                       'from': [0, 0, 8], 'to': [0, 0, 0], 'up': [0, 1, 0]},
        })
        assert (camera.hsize, camera.vsize) == (20, 10)
        assert camera.field_of_view == pytest.approx(math.pi / 2)
        assert camera.transform == translation(0, 0, -8)

    def test_parsers_are_independent(self):
        parser = SceneParser()
        parser.parse_dict({'objects': [{'type': 'sphere'}]})
        world, _, _ = SceneParser().parse_dict({})
        assert world.objects == ()


class TestParseErrors:
    """Test that bad input raises SceneParseError."""

    @pytest.mark.parametrize("data", [
        {'objects': [{'type': 'cube'}]},
        {'objects': [{'type': 'sphere', 'material': 'missing'}]},
        {'objects': [{'type': 'sphere', 'transform': [['twist', 1]]}]},
        {'objects': [{'type': 'sphere', 'transform': [['translate', 1, 2]]}]},
        {'objects': [{'type': 'sphere', 'transform': [['scale', 0, 1, 1]]}]},
        {'lights': [{'type': 'area'}]},
        {'lights': [{'position': [1, 2]}]},
        {'materials': {'bad': {'pattern': {'type': 'checker'}}}},
        {'materials': {'bad': {'ambient': -1}}},
        {'materials': {'bad': {'color': 'blue'}}},
        {'camera': {'field_of_view': 200}},
        {'camera': {'width': 0}},
        {'render': {'tile_size': 0}},
        {'render': {'threads': 'many'}},
        {'render': [8]},
        {'materials': {'bad': {'ambient': 'high'}}},
        {'materials': {'bad': {'pattern': 'stripe'}}},
        {'materials': ['wall']},
        {'camera': {'width': 'wide'}},
        {'camera': {'field_of_view': 'narrow'}},
        {'camera': [40, 20]},
        {'objects': ['sphere']},
        {'objects': {'type': 'sphere'}},
        {'lights': ['point']},
    ])
    def test_invalid_scene(self, data):
        with pytest.raises(SceneParseError):
            parse_scene(data)


class TestLoadScene:
    """Test loading scene files from disk."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(SCENE_YAML)
        world, camera, settings = load_scene(str(path))

        assert len(world.objects) == 3
        assert len(world.lights) == 1
        assert (camera.hsize, camera.vsize) == (40, 20)
        assert camera.transform == view_transform(Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0))
        assert settings.tile_size == 8
        assert settings.num_threads == 2
        assert settings.use_processes is True

        floor, striped, small = world.objects
        assert floor.material.pattern == SolidPattern(Color(1, 0.9, 0.9))
        assert floor.material.specular == 0
        assert striped.material.pattern == StripePattern(
            Color(1, 1, 1), Color(1, 0, 0), scaling(0.2, 0.2, 0.2)
        )
        assert striped.material.diffuse == 0.7
        assert striped.transform == translation(-0.5, 1, 0.5)
        assert small.material.pattern == SolidPattern(Color(0.5, 1, 0.1))
        assert small.transform == translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5)

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({
            'objects': [{'type': 'sphere'}],
            'lights': [{'position': [0, 5, 0]}],
        }))
        world, _, _ = load_scene(str(path))
        assert len(world.objects) == 1
        assert world.lights[0].intensity == Color(1, 1, 1)

    def test_scene_renders(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(SCENE_YAML)
        world, camera, _ = load_scene(str(path))
        image = camera.render(world)
        assert image.to_array().max() > 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError):
            load_scene(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("objects: [\n")
        with pytest.raises(SceneParseError):
            load_scene(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(SceneParseError):
            load_scene(str(path))
