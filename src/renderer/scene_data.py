# renderer/scene_data.py
import logging
from dataclasses import dataclass
import numpy as np
from materials.material import MATERIAL_CHECKERBOARD

logger = logging.getLogger(__name__)

# Columns of SceneData.material_params
PARAM_SCALE = 0
PARAM_SHININESS = 1
PARAM_REFLECTIVITY = 2
PARAM_REFRACTIVE_INDEX = 3

@dataclass
class SceneData:
    """Scene flattened into contiguous float64/int64 arrays for the kernels."""
    sphere_centers: np.ndarray          # (n, 3)
    sphere_radii: np.ndarray            # (n,)
    sphere_materials: np.ndarray        # (n,) index into the material arrays
    material_types: np.ndarray          # (m,) MATERIAL_* type codes
    material_colors: np.ndarray         # (m, 6) primary color, secondary color
    material_params: np.ndarray         # (m, 4) scale, shininess, reflectivity, refractive index
    light_positions: np.ndarray         # (l, 3)
    light_intensities: np.ndarray       # (l,)
    camera_position: np.ndarray         # (3,)
    camera_look_at: np.ndarray          # (3,)
    camera_right: np.ndarray            # (3,)
    camera_up: np.ndarray               # (3,)

def flatten_scene(scene) -> SceneData:
    """
    Extracts spheres, materials, lights and the camera basis from a Scene.

    Materials shared by several spheres (named materials) are stored once.
    """
    objects = scene.objects
    n = len(objects)

    centers = np.zeros((n, 3), dtype=np.float64)
    radii = np.zeros(n, dtype=np.float64)
    sphere_materials = np.zeros(n, dtype=np.int64)

    material_index = {}
    materials = []
    for i, obj in enumerate(objects):
        centers[i] = [obj.center.x, obj.center.y, obj.center.z]
        radii[i] = obj.radius
        key = id(obj.material)
        if key not in material_index:
            material_index[key] = len(materials)
            materials.append(obj.material)
        sphere_materials[i] = material_index[key]

    m = len(materials)
    material_types = np.zeros(m, dtype=np.int64)
    material_colors = np.zeros((m, 6), dtype=np.float64)
    material_params = np.zeros((m, 4), dtype=np.float64)

    for i, mat in enumerate(materials):
        material_types[i] = mat.type_code
        if mat.type_code == MATERIAL_CHECKERBOARD:
            material_colors[i, 0:3] = mat.color1.as_tuple()
            material_colors[i, 3:6] = mat.color2.as_tuple()
            material_params[i, PARAM_SCALE] = mat.scale
        else:
            material_colors[i, 0:3] = mat.color.as_tuple()
            material_colors[i, 3:6] = mat.color.as_tuple()
            material_params[i, PARAM_SCALE] = 1.0
        material_params[i, PARAM_SHININESS] = mat.shininess
        material_params[i, PARAM_REFLECTIVITY] = mat.reflectivity
        material_params[i, PARAM_REFRACTIVE_INDEX] = mat.refractive_index

    lights = scene.lights
    light_positions = np.zeros((len(lights), 3), dtype=np.float64)
    light_intensities = np.zeros(len(lights), dtype=np.float64)
    for i, light in enumerate(lights):
        light_positions[i] = [light.position.x, light.position.y, light.position.z]
        light_intensities[i] = light.intensity

    camera = scene.camera
    camera.update_basis()

    logger.debug("Flattened %d spheres, %d materials, %d lights", n, m, len(lights))

    return SceneData(
        sphere_centers=centers,
        sphere_radii=radii,
        sphere_materials=sphere_materials,
        material_types=material_types,
        material_colors=material_colors,
        material_params=material_params,
        light_positions=light_positions,
        light_intensities=light_intensities,
        camera_position=np.array(list(camera.position), dtype=np.float64),
        camera_look_at=np.array(list(camera.look_at), dtype=np.float64),
        camera_right=np.array(list(camera.right), dtype=np.float64),
        camera_up=np.array(list(camera.view_up), dtype=np.float64),
    )
