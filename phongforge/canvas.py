"""
Pixel buffer for rendered images.

The canvas stores linear, unclamped colors in a (height, width, 3) float64
numpy array. Clamping and quantization happen only when the image is
converted for output.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterator, Union
import numpy as np

from .vec3 import Color

logger = logging.getLogger(__name__)


class Canvas:
    """A width x height grid of colors, initially black."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> Canvas:
        """Wrap a (height, width, 3) array (copied)."""
        height, width = pixels.shape[:2]
        canvas = cls(width, height)
        canvas._pixels[:] = pixels
        return canvas

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_array()

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color.from_array(self._pixels[y, x].copy())

    def write_block(self, x0: int, y0: int, block: np.ndarray) -> None:
        """Copy a (h, w, 3) block of colors with its top-left corner at (x0, y0)."""
        h, w = block.shape[:2]
        self._check_bounds(x0, y0)
        self._check_bounds(x0 + w - 1, y0 + h - 1)
        self._pixels[y0:y0 + h, x0:x0 + w] = block

    def iter_rows(self) -> Iterator[list[Color]]:
        """Yield rows of colors from top to bottom."""
        for row in self._pixels:
            yield [Color.from_array(pixel.copy()) for pixel in row]

    def to_array(self) -> np.ndarray:
        """Return a copy of the HDR pixel data."""
        return self._pixels.copy()

    def to_ldr(self) -> np.ndarray:
        """Convert to 8-bit: clamp to [0, 1], scale to 0..255, round half up."""
        scaled = np.clip(self._pixels, 0.0, 1.0) * 255.0
        return np.floor(scaled + 0.5).astype(np.uint8)

    def save(self, filename: Union[str, Path]) -> None:
        """Save the canvas. ``.ppm`` writes plain PPM, other extensions use Pillow.

        Args:
            filename: Output filename (extension determines format)
        """
        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            from .ppm import PPMWriter
            with open(path, 'w', encoding='ascii') as f:
                PPMWriter(f).write_canvas(self)
        else:
            from PIL import Image as PILImage
            PILImage.fromarray(self.to_ldr()).save(path)
        logger.info("Saved %dx%d image to %s", self.width, self.height, path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
