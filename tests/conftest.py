"""Pytest configuration and shared fixtures."""

import pytest

from core.color import Color
from core.vector import Vector3
from geometry.light import Light
from geometry.sphere import Sphere
from materials.flat_color import FlatColor
from scene.parser import read_scene
from scene.scene import Scene


SAMPLE_SCENE = """\
# Two named materials, one inline checkerboard floor
maxReflections 3
dispersion 0
imageScale 1
material glass FlatColor 0.1 0.1 0.1 -1 -1 1.5
material mirror FlatColor 0.2 0.2 0.2 40 0.5 -1
sphere 0 0 -3 1.5 glass
sphere -1.5 0.5 -8 1.5 mirror
sphere 0 -1001 0 1000 Checkerboard 1 1 1 0 0 0 0.5 -1 0.2
light 5 10 20 1
light -5 5 15 0.5  # fill light
"""


@pytest.fixture
def white():
    return FlatColor(Color(1.0, 1.0, 1.0))


@pytest.fixture
def white_sphere_scene(white):
    """One white sphere at the origin lit head-on, rendered as a single pixel."""
    scene = Scene(width=1, height=1, max_reflections=10, super_samples=1,
                  depth_complexity=1, dispersion=0.0)
    scene.add_object(Sphere(Vector3(0.0, 0.0, 0.0), 1.0, white))
    scene.add_light(Light(Vector3(0.0, 0.0, 10.0), 1.0))
    scene.camera.update_basis()
    return scene


@pytest.fixture
def sample_scene_text():
    return SAMPLE_SCENE


@pytest.fixture
def sample_scene():
    scene = read_scene(SAMPLE_SCENE, Scene(width=8, height=6, super_samples=2, depth_complexity=1))
    return scene


@pytest.fixture
def scene_file(tmp_path):
    path = tmp_path / "sample.scene"
    path.write_text(SAMPLE_SCENE, encoding="utf-8")
    return path
