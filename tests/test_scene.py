import pytest

from core.color import Color
from core.config import RenderSettings
from core.errors import SceneError
from materials.flat_color import FlatColor
from scene.scene import Scene


def test_defaults():
    scene = Scene()
    assert scene.max_reflections == 10
    assert scene.dispersion == 5.0
    assert scene.image_scale == 1.0
    assert scene.rays_cast == 0
    assert scene.objects == []


@pytest.mark.parametrize("dispersion, depth, expected", [
    (5.0, 4, 4),
    (0.0, 4, 1),
    (-1.0, 4, 1),
    (5.0, 1, 1),
])
def test_effective_depth_complexity(dispersion, depth, expected):
    scene = Scene(dispersion=dispersion, depth_complexity=depth)
    assert scene.effective_depth_complexity == expected


def test_material_names_are_lowercase_and_unique():
    scene = Scene()
    material = FlatColor(Color())
    scene.add_material("shiny", material)
    assert scene.material_name(material) == "shiny"
    assert scene.material_name(FlatColor(Color())) is None

    with pytest.raises(SceneError, match="Duplicate material name: shiny"):
        scene.add_material("shiny", FlatColor(Color()))
    with pytest.raises(SceneError, match="Invalid material name: Shiny") as excinfo:
        scene.add_material("Shiny", FlatColor(Color()))
    assert excinfo.value.token == "Shiny"


def test_apply_settings():
    scene = Scene()
    scene.apply_settings(RenderSettings(width=16, height=9, super_samples=2, depth_complexity=3,
                                        workers=1))
    assert (scene.width, scene.height, scene.super_samples, scene.depth_complexity) == (16, 9, 2, 3)
