"""
PhongForge - A Python Ray Tracer with Phong Shading and Hard Shadows

A small CPU ray tracer with support for:
- 4x4 affine transforms with cached inverses
- Spheres and infinite planes
- Phong lighting with hard shadows from point lights
- Stripe patterns with their own transforms
- Tile-based sequential, threaded or multi-process rendering
- PPM and PNG output
- YAML/JSON scene files
"""

__version__ = "0.1.0"
__author__ = "PhongForge Team"

from .vec3 import EPSILON, float_eq, Vec3, Point, Vector, Color
from .matrix import Matrix, SingularMatrixError
from .transformations import (
    identity, translation, scaling, rotation_x, rotation_y, rotation_z,
    shearing, chain, view_transform
)
from .ray import Ray
from .intersections import Intersection, Intersections, IntersectionState
from .shapes import Shape
from .patterns import Pattern, SolidPattern, StripePattern
from .materials import Material
from .lights import PointLight
from .lighting import lighting
from .objects import SceneObject
from .world import World
from .canvas import Canvas
from .ppm import PPMWriter, canvas_to_ppm
from .renderer import Renderer, RenderSettings, render_tile
from .camera import Camera
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
