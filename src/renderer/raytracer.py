# renderer/raytracer.py
import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Iterable, List, Tuple
import numpy as np
from core.config import RenderSettings
from renderer.image import save_image
from renderer.kernels import render_scene_data
from renderer.sampler import PixelSampler
from renderer.scene_data import flatten_scene
from renderer.tone_mapping import tone_map
from renderer.tracer import RayTracer

logger = logging.getLogger(__name__)

# Column ranges handed to each worker process.
CHUNKS_PER_WORKER = 4

def column_chunks(width: int, workers: int) -> List[Tuple[int, int]]:
    """Splits [0, width) into contiguous column ranges."""
    chunk = max(1, width // (workers * CHUNKS_PER_WORKER))
    return [(x, min(x + chunk, width)) for x in range(0, width, chunk)]

def render_columns(scene, x_start: int, x_end: int, entropy: int):
    """
    Renders columns [x_start, x_end) with the Python tracer.

    Each column gets its own random stream derived from (entropy, x), so the
    image doesn't depend on how columns are split between workers.

    Returns:
        (x_start, block of shape (x_end - x_start, height, 3), rays cast)
    """
    block = np.zeros((x_end - x_start, scene.height, 3), dtype=np.float64)
    tracer = RayTracer(scene)

    for x in range(x_start, x_end):
        sampler = PixelSampler(scene, tracer, np.random.default_rng([entropy, x]))
        for y in range(scene.height):
            block[x - x_start, y] = sampler.cast_ray_for_pixel(x, y).as_tuple()

    return x_start, block, tracer.rays_cast

class Renderer:
    """
    Renders a scene into a (width, height, 3) float frame, y pointing up.

    The python backend spreads column ranges over a process pool, the numba
    backend runs the compiled kernel with one thread per column batch. Both
    store the total number of rays cast in `scene.rays_cast`.
    """
    def __init__(self, settings: RenderSettings = None):
        self.settings = settings if settings is not None else RenderSettings.from_env()

    def render(self, scene) -> np.ndarray:
        settings = self.settings
        entropy = np.random.SeedSequence(settings.seed).entropy
        scene.camera.update_basis()

        logger.info("Rendering %dx%d, %d super samples, depth complexity %d, backend %s, %d workers",
                    scene.width, scene.height, scene.super_samples,
                    scene.effective_depth_complexity, settings.backend, settings.workers)
        start = time.perf_counter()

        if settings.backend == "numba":
            frame, rays_cast = self.render_numba(scene, entropy)
        else:
            frame, rays_cast = self.render_python(scene, entropy)

        scene.rays_cast = rays_cast
        logger.info("Done in %.2fs", time.perf_counter() - start)
        logger.info("Rays cast: %d", rays_cast)
        return frame

    def render_python(self, scene, entropy: int):
        width = scene.width
        frame = np.zeros((width, scene.height, 3), dtype=np.float64)
        rays_cast = 0
        columns_done = 0
        next_report = 10

        for x_start, block, rays in self.run_chunks(scene, column_chunks(width, self.settings.workers), entropy):
            frame[x_start:x_start + block.shape[0]] = block
            rays_cast += rays
            columns_done += block.shape[0]

            percentage = columns_done * 100 // width
            if percentage >= next_report:
                logger.info("%d%% of columns done", percentage)
                next_report = (percentage // 10 + 1) * 10

        return frame, rays_cast

    def run_chunks(self, scene, chunks: List[Tuple[int, int]], entropy: int) -> Iterable:
        if self.settings.workers == 1:
            for x_start, x_end in chunks:
                yield render_columns(scene, x_start, x_end, entropy)
            return

        with ProcessPoolExecutor(max_workers=self.settings.workers) as executor:
            futures = [executor.submit(render_columns, scene, x_start, x_end, entropy)
                       for x_start, x_end in chunks]
            for future in as_completed(futures):
                yield future.result()

    def render_numba(self, scene, entropy: int):
        data = flatten_scene(scene)
        logger.debug("Running compiled kernel (first call compiles)")
        return render_scene_data(data, scene.width, scene.height, scene.super_samples,
                                 scene.effective_depth_complexity, scene.max_reflections,
                                 scene.dispersion, scene.image_scale, entropy)

    def render_to_file(self, scene, path) -> np.ndarray:
        """Renders, tone maps and writes the image. Returns the 8-bit pixels."""
        frame = self.render(scene)
        pixels = tone_map(frame, self.settings.tone_mapping)
        save_image(pixels, path)
        logger.info("Wrote %s", path)
        return pixels
