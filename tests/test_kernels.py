import numpy as np
import pytest

from core.config import RenderSettings
from core.vector import Vector3
from geometry.sphere import Sphere
from materials.material import MATERIAL_CHECKERBOARD, MATERIAL_FLAT_COLOR
from renderer.raytracer import Renderer
from renderer.scene_data import (PARAM_REFLECTIVITY, PARAM_REFRACTIVE_INDEX, PARAM_SCALE,
                                 flatten_scene)


def test_flatten_scene(sample_scene):
    data = flatten_scene(sample_scene)
    assert data.sphere_centers.shape == (3, 3)
    assert data.sphere_radii.tolist() == [1.5, 1.5, 1000.0]
    # glass, mirror and the inline floor material
    assert data.material_types.tolist() == [MATERIAL_FLAT_COLOR, MATERIAL_FLAT_COLOR, MATERIAL_CHECKERBOARD]
    assert data.sphere_materials.tolist() == [0, 1, 2]
    assert data.material_params[0, PARAM_REFRACTIVE_INDEX] == 1.5
    assert data.material_params[1, PARAM_REFLECTIVITY] == 0.5
    assert data.material_params[2, PARAM_SCALE] == 0.5
    assert data.light_intensities.tolist() == [1.0, 0.5]
    assert data.camera_right.tolist() == [1.0, 0.0, 0.0]


def test_flatten_scene_shares_named_materials(sample_scene):
    sample_scene.add_object(Sphere(Vector3(4.0, 0.0, 0.0), 0.5, sample_scene.materials["glass"]))
    data = flatten_scene(sample_scene)
    assert data.sphere_materials.tolist() == [0, 1, 2, 0]
    assert len(data.material_types) == 3


@pytest.mark.slow
def test_numba_matches_python(sample_scene):
    python_frame = Renderer(RenderSettings(backend="python", workers=1)).render(sample_scene)
    python_rays = sample_scene.rays_cast

    numba_frame = Renderer(RenderSettings(backend="numba", workers=1)).render(sample_scene)

    assert numba_frame.shape == python_frame.shape
    np.testing.assert_allclose(numba_frame, python_frame, rtol=1e-9, atol=1e-12)
    assert sample_scene.rays_cast == python_rays


@pytest.mark.slow
def test_numba_white_sphere(white_sphere_scene):
    frame = Renderer(RenderSettings(backend="numba", workers=1)).render(white_sphere_scene)
    assert frame[0, 0] == pytest.approx([1.2, 1.2, 1.2])
    assert white_sphere_scene.rays_cast == 1


@pytest.mark.slow
def test_numba_dispersion_is_deterministic(sample_scene):
    sample_scene.dispersion = 3.0
    sample_scene.depth_complexity = 3
    renderer = Renderer(RenderSettings(backend="numba", seed=5, workers=1))
    first = renderer.render(sample_scene)
    second = renderer.render(sample_scene)
    np.testing.assert_array_equal(first, second)
    assert first.any()
