"""
Camera module for generating primary rays.

The camera sits at the origin of its own frame looking down -z, with an
image plane one unit in front of it. Its transform orients the world
relative to the camera (see transformations.view_transform); rays are
mapped back into world space through the inverse of that transform.
"""

from __future__ import annotations
import math
from typing import Optional, TYPE_CHECKING

from .vec3 import Point
from .matrix import Matrix
from .ray import Ray
from .renderer import ProgressCallback, Renderer, RenderSettings

if TYPE_CHECKING:
    from .canvas import Canvas
    from .world import World

# z of the image plane in camera space
CANVAS_Z = -1.0


class Camera:
    """A pinhole camera with a fixed pixel grid."""

    def __init__(self, hsize: int, vsize: int, field_of_view: float,
                 transform: Optional[Matrix] = None):
        """Create a camera.

        Args:
            hsize: Horizontal size of the rendered canvas in pixels
            vsize: Vertical size of the rendered canvas in pixels
            field_of_view: Angle (radians) the camera can see; narrow zooms in
            transform: How the world is oriented relative to the camera
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0 < field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi), got {field_of_view}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform if transform is not None else Matrix.identity()

        # half the width of the image plane one unit in front of the eye
        half_view = math.tan(field_of_view / 2)
        aspect = hsize / vsize
        if aspect >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view

        self.pixel_size = (self.half_width * 2) / hsize

    def with_transform(self, transform: Matrix) -> Camera:
        """Return a new camera with ``transform`` applied after the current one."""
        return Camera(self.hsize, self.vsize, self.field_of_view, self.transform >> transform)

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Build the ray from the eye through the center of pixel (px, py)."""
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size

        # camera looks toward -z, so +x is on the left
        camera_x = self.half_width - x_offset
        camera_y = self.half_height - y_offset

        inverse = self.transform.inverse()
        pixel = inverse @ Point(camera_x, camera_y, CANVAS_Z)
        origin = inverse @ Point.origin()
        direction = (pixel - origin).normalize()

        return Ray(origin, direction)

    def render(self, world: World, settings: Optional[RenderSettings] = None,
               progress_callback: Optional[ProgressCallback] = None) -> Canvas:
        """Render ``world`` into a new canvas of hsize x vsize pixels.

        Args:
            world: Scene to render
            settings: Tiling and parallelism (sequential if None)
            progress_callback: Called with the completed fraction after each tile
        """
        renderer = Renderer(settings if settings is not None else RenderSettings(num_threads=1))
        renderer.set_progress_callback(progress_callback)
        return renderer.render(world, self)

    def __repr__(self) -> str:
        return f"Camera({self.hsize}x{self.vsize}, fov={self.field_of_view:.4f})"
