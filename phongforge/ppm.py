"""
Plain-text PPM (P3) image writer.

Format:
    P3
    <width> <height>
    255
    r g b r g b ...     one line per pixel row
"""

from __future__ import annotations
import io
import math
from typing import TextIO

from .canvas import Canvas

MAGIC_NUMBER = 'P3'
MIN_PIXEL_VALUE = 0
MAX_PIXEL_VALUE = 255


class PPMWriter:
    """Serialize a canvas to any text stream."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write_canvas(self, canvas: Canvas) -> None:
        self._write_header(canvas)
        self._write_body(canvas)
        self.stream.flush()

    def _write_header(self, canvas: Canvas) -> None:
        self.stream.write(f"{MAGIC_NUMBER}\n{canvas.width} {canvas.height}\n{MAX_PIXEL_VALUE}\n")

    def _write_body(self, canvas: Canvas) -> None:
        for row in canvas.iter_rows():
            values = []
            for pixel in row:
                scaled = pixel.scale(MIN_PIXEL_VALUE, MAX_PIXEL_VALUE)
                values.extend(str(math.floor(v + 0.5)) for v in scaled)
            self.stream.write(" ".join(values))
            self.stream.write("\n")


def canvas_to_ppm(canvas: Canvas) -> str:
    """Return the PPM text for a canvas."""
    buffer = io.StringIO()
    PPMWriter(buffer).write_canvas(canvas)
    return buffer.getvalue()
