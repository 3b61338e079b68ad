"""
Render loop.

Implements:
- Tile-based rendering of a camera's pixel grid
- Sequential, multi-threaded or multi-process execution
- Progress reporting from the coordinating thread only

Every pixel is a pure function of (camera, world, x, y), so tiles are
independent and each one is written into a disjoint region of the canvas.
The sequential and parallel paths produce identical images.
"""

from __future__ import annotations
import logging
import os
import time
from concurrent.futures import Executor, ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Callable, Tuple, TYPE_CHECKING
import numpy as np

from .canvas import Canvas

if TYPE_CHECKING:
    from .camera import Camera
    from .world import World

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]
ProgressCallback = Callable[[float], None]


@dataclass
class RenderSettings:
    """Configuration for the render loop."""
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect, 1 = sequential
    use_processes: bool = False  # processes bypass the GIL

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be >= 0, got {self.num_threads}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


def render_tile(world: World, camera: Camera, tile: Tile) -> Tuple[Tile, np.ndarray]:
    """Render one tile and return it with its (h, w, 3) color block.

    Module-level so it can be shipped to worker processes.
    """
    x0, y0, x1, y1 = tile
    block = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

    for j, y in enumerate(range(y0, y1)):
        for i, x in enumerate(range(x0, x1)):
            ray = camera.ray_for_pixel(x, y)
            block[j, i] = world.color_at(ray).to_array()

    return tile, block


class Renderer:
    """Drives a camera over a world, tile by tile."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[ProgressCallback] = None

    def set_progress_callback(self, callback: Optional[ProgressCallback]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, world: World, camera: Camera) -> Canvas:
        """Render the world as seen by the camera.

        Args:
            world: The scene to render
            camera: The camera to render from

        Returns:
            Canvas of camera.hsize x camera.vsize unclamped colors
        """
        canvas = Canvas(camera.hsize, camera.vsize)
        tiles = self._generate_tiles(camera.hsize, camera.vsize)
        total_tiles = len(tiles)
        workers = self.settings.num_threads

        logger.info(
            "Rendering %dx%d in %d tiles (%s, %d worker%s)",
            camera.hsize, camera.vsize, total_tiles,
            'processes' if self.settings.use_processes and workers > 1 else 'threads',
            workers, '' if workers == 1 else 's',
        )
        start = time.perf_counter()

        if workers <= 1:
            for done, tile in enumerate(tiles, start=1):
                self._store(canvas, *render_tile(world, camera, tile))
                self._report(done, total_tiles)
        else:
            with self._make_executor(workers) as executor:
                futures = [executor.submit(render_tile, world, camera, tile) for tile in tiles]
                for done, future in enumerate(as_completed(futures), start=1):
                    self._store(canvas, *future.result())
                    self._report(done, total_tiles)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return canvas

    def _make_executor(self, workers: int) -> Executor:
        if self.settings.use_processes:
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers)

    @staticmethod
    def _store(canvas: Canvas, tile: Tile, block: np.ndarray) -> None:
        x0, y0, _, _ = tile
        canvas.write_block(x0, y0, block)

    def _report(self, done: int, total: int) -> None:
        logger.debug("Tile %d/%d complete", done, total)
        if self._progress_callback:
            self._progress_callback(done / total)

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples, row by row
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles
