# scene/scene.py
import logging
from typing import Dict, List
from camera.camera import Camera
from core import config
from core.errors import SceneError
from core.ray import Ray
from geometry.hittable import Intersection
from geometry.light import Light
from geometry.world import World

logger = logging.getLogger(__name__)

class Scene:
    """
    Everything one render needs: primitives, lights, named materials, the
    camera and the global parameters. The scene owns all of these for its
    whole lifetime and is read-only while rendering, apart from the
    `rays_cast` diagnostic which the renderer fills in afterwards.
    """
    def __init__(self,
                 width: int = config.WIDTH,
                 height: int = config.HEIGHT,
                 max_reflections: int = config.MAX_REFLECTIONS,
                 super_samples: int = config.SUPER_SAMPLES,
                 depth_complexity: int = config.DEPTH_COMPLEXITY,
                 dispersion: float = config.DISPERSION,
                 image_scale: float = config.IMAGE_SCALE,
                 camera: Camera = None):
        self.width = width
        self.height = height
        self.max_reflections = max_reflections
        self.super_samples = super_samples    # Square root of the samples per pixel
        self.depth_complexity = depth_complexity
        self.dispersion = dispersion
        self.image_scale = image_scale
        self.camera = camera if camera is not None else Camera()
        self.world = World()
        self.lights: List[Light] = []
        self.materials: Dict[str, object] = {}
        self.rays_cast = 0

    @property
    def objects(self) -> list:
        return self.world.objects

    @property
    def effective_depth_complexity(self) -> int:
        """Rays per sub-sample; dispersion off means a single pinhole ray."""
        if self.dispersion <= 0:
            return 1
        return max(1, self.depth_complexity)

    def add_object(self, obj):
        self.world.add(obj)

    def add_light(self, light: Light):
        self.lights.append(light)

    def add_material(self, name: str, material):
        """Registers a named material. Names are lowercase and unique."""
        if any(ch.isupper() for ch in name):
            raise SceneError(f"Invalid material name: {name}", token=name)
        if name in self.materials:
            raise SceneError(f"Duplicate material name: {name}", token=name)
        self.materials[name] = material

    def material_name(self, material):
        """Registered name of a material object, or None for inline materials."""
        for name, registered in self.materials.items():
            if registered is material:
                return name
        return None

    def closest_intersection(self, ray: Ray) -> Intersection:
        return self.world.closest_intersection(ray)

    def is_in_shadow(self, ray: Ray, light_distance: float) -> bool:
        return self.world.is_in_shadow(ray, light_distance)

    def apply_settings(self, settings):
        """Copies image size and sampling counts from a RenderSettings."""
        self.width = settings.width
        self.height = settings.height
        self.super_samples = settings.super_samples
        self.depth_complexity = settings.depth_complexity

    def describe(self) -> str:
        return (f"{len(self.objects)} objects, {len(self.lights)} lights, "
                f"{len(self.materials)} named materials, max reflections {self.max_reflections}, "
                f"dispersion {self.dispersion}, image scale {self.image_scale}")

    def __repr__(self) -> str:
        return f"Scene({self.describe()})"
