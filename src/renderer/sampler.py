# renderer/sampler.py
import numpy as np
from core.color import Color
from core.ray import Ray
from core.utils import AIR_REFRACTIVE_INDEX, random_in_unit_disk
from core.vector import Vector3
from renderer.tracer import RayTracer

# Width of one pixel on the image plane before image scaling.
PIXEL_SIZE = 0.5

def sample_offsets(x: int, y: int, width: int, height: int, super_samples: int) -> list:
    """
    Image-plane offsets of the super_samples x super_samples grid covering
    pixel (x, y). The grid cells are equal, and each sample sits at the
    center of its cell.
    """
    step = PIXEL_SIZE / super_samples
    start_x = (x - width // 2) * PIXEL_SIZE - PIXEL_SIZE / 2.0 + step / 2.0
    start_y = (y - height // 2) * PIXEL_SIZE - PIXEL_SIZE / 2.0 + step / 2.0
    return [(start_x + i * step, start_y + j * step)
            for i in range(super_samples)
            for j in range(super_samples)]

class PixelSampler:
    """
    Turns pixels into primary rays: an anti-aliasing grid per pixel and,
    with dispersion enabled, several rays per grid point whose origins are
    spread over a lens disk and which all converge on the same image-plane
    point (depth of field).
    """
    def __init__(self, scene, tracer: RayTracer = None, rng: np.random.Generator = None):
        self.scene = scene
        self.tracer = tracer if tracer is not None else RayTracer(scene)
        self.rng = rng if rng is not None else np.random.default_rng()

    def cast_ray_for_pixel(self, x: int, y: int) -> Color:
        scene = self.scene
        camera = scene.camera
        sample_weight = 1.0 / (scene.super_samples * scene.super_samples)
        color = Color()

        for sample_x, sample_y in sample_offsets(x, y, scene.width, scene.height, scene.super_samples):
            point = camera.image_plane_point(sample_x, sample_y, scene.image_scale)
            color = color + self.cast_ray_at_point(point) * sample_weight

        return color

    def cast_ray_at_point(self, point: Vector3) -> Color:
        scene = self.scene
        camera = scene.camera
        depth_complexity = scene.effective_depth_complexity

        if depth_complexity == 1:
            direction = (point - camera.position).normalize()
            return self.tracer.cast_ray(Ray(camera.position, direction, scene.max_reflections,
                                            AIR_REFRACTIVE_INDEX))

        color = Color()
        weight = 1.0 / depth_complexity
        for _ in range(depth_complexity):
            origin = self.lens_origin()
            direction = (point - origin).normalize()
            view_ray = Ray(origin, direction, scene.max_reflections, AIR_REFRACTIVE_INDEX)
            color = color + self.tracer.cast_ray(view_ray) * weight

        return color

    def lens_origin(self) -> Vector3:
        """Random ray origin within the dispersion disk around the camera."""
        camera = self.scene.camera
        offset = random_in_unit_disk(self.rng) * self.scene.dispersion
        return camera.position + camera.right * offset.x + camera.view_up * offset.y
