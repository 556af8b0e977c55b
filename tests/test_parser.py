import io

import pytest

from core.color import Color
from core.errors import SceneError, SceneFileError
from core.vector import Vector3
from materials.checkerboard import Checkerboard
from materials.flat_color import FlatColor
from scene.parser import load_scene, read_scene, tokenize, write_scene
from scene.scene import Scene


def test_tokenize_drops_comments():
    lines = ["light 0 1 2 1 # key light", "# whole line", "sphere"]
    assert list(tokenize(lines)) == [
        ("light", 1), ("0", 1), ("1", 1), ("2", 1), ("1", 1), ("sphere", 3)]


def test_sample_scene(sample_scene):
    scene = sample_scene
    assert scene.max_reflections == 3
    assert scene.dispersion == 0.0
    assert len(scene.objects) == 3
    assert len(scene.lights) == 2
    assert set(scene.materials) == {"glass", "mirror"}

    glass, mirror, floor = scene.objects
    assert glass.material is scene.materials["glass"]
    assert glass.material.refractive_index == 1.5
    assert mirror.material.reflectivity == 0.5
    assert mirror.material.shininess == 40.0
    assert isinstance(floor.material, Checkerboard)
    assert floor.material.scale == 0.5
    assert floor.material.reflectivity == 0.2
    assert scene.lights[1].intensity == 0.5


def test_globals():
    scene = read_scene("""
        cameraPosition 1 2 3
        cameraLookAt 0 0 -1
        cameraUp 0 0 1
        imageScale 0.25
        dispersion 2.5
        maxReflections 4
    """)
    assert scene.camera.position == Vector3(1.0, 2.0, 3.0)
    assert scene.camera.look_at == Vector3(0.0, 0.0, -1.0)
    assert scene.camera.up == Vector3(0.0, 0.0, 1.0)
    assert scene.image_scale == 0.25
    assert scene.dispersion == 2.5
    assert scene.max_reflections == 4
    # The basis follows the final camera directives
    assert scene.camera.forward == (Vector3(-1.0, -2.0, -4.0)).normalize()


def test_inline_materials():
    scene = read_scene("sphere 0 0 0 1 FlatColor 1 0 0 -1 -1 -1\n"
                       "sphere 0 5 0 1 Checkerboard 1 1 1 0 0 0 2 10 0.5")
    flat, board = (obj.material for obj in scene.objects)
    assert isinstance(flat, FlatColor)
    assert flat.color == Color(1.0, 0.0, 0.0)
    assert board.color2 == Color(0.0, 0.0, 0.0)
    assert board.shininess == 10.0
    assert scene.materials == {}


def test_named_material_is_shared():
    scene = read_scene("material red FlatColor 1 0 0 -1 -1 -1\n"
                       "sphere 0 0 0 1 red\nsphere 3 0 0 1 red")
    a, b = scene.objects
    assert a.material is b.material


def test_material_must_be_defined_before_use():
    with pytest.raises(SceneError, match="Type not found: red"):
        read_scene("sphere 0 0 0 1 red\nmaterial red FlatColor 1 0 0 -1 -1 -1")


@pytest.mark.parametrize("text, message, token", [
    ("box 0 0 0", "Type not found: box", "box"),
    ("sphere 0 0 0 1 Marble 1 1 1", "Type not found: Marble", "Marble"),
    ("material Red FlatColor 1 0 0 -1 -1 -1", "Invalid material name: Red", "Red"),
    ("material red FlatColor 1 0 0 -1 -1 -1\nmaterial red FlatColor 0 0 1 -1 -1 -1",
     "Duplicate material name: red", "red"),
    ("light 0 0 x 1", "Expected a number", "x"),
    ("maxReflections 2.5", "Expected an integer", "2.5"),
])
def test_errors_name_the_offending_token(text, message, token):
    with pytest.raises(SceneError, match=message) as excinfo:
        read_scene(text)
    assert excinfo.value.token == token


def test_error_reports_line():
    with pytest.raises(SceneError, match=r"\(line 3\)") as excinfo:
        read_scene("light 0 0 0 1\n\nbogus")
    assert excinfo.value.line == 3


def test_truncated_input():
    with pytest.raises(SceneError, match="Unexpected end of scene"):
        read_scene("sphere 0 0 0")


def test_empty_scene():
    scene = read_scene("# nothing here\n")
    assert scene.objects == []
    assert scene.lights == []


def test_populates_given_scene():
    target = Scene(width=3, height=2)
    assert read_scene("light 0 0 0 1", target) is target
    assert target.width == 3


def test_load_scene(scene_file):
    scene = load_scene(scene_file)
    assert len(scene.objects) == 3


def test_load_scene_from_stdin(monkeypatch, sample_scene_text):
    monkeypatch.setattr("sys.stdin", io.StringIO(sample_scene_text))
    scene = load_scene("-")
    assert len(scene.lights) == 2


def test_load_missing_file(tmp_path):
    with pytest.raises(SceneFileError, match="Failed opening scene file"):
        load_scene(tmp_path / "missing.scene")


def test_write_scene_round_trip(sample_scene):
    text = write_scene(sample_scene)
    copy = read_scene(text)

    assert write_scene(copy) == text
    assert copy.max_reflections == sample_scene.max_reflections
    assert copy.camera.position == sample_scene.camera.position
    assert set(copy.materials) == set(sample_scene.materials)
    assert [o.center for o in copy.objects] == [o.center for o in sample_scene.objects]
    assert copy.objects[0].material is copy.materials["glass"]
    assert copy.objects[2].material.to_tokens() == sample_scene.objects[2].material.to_tokens()


def test_write_scene_references_named_materials(sample_scene):
    lines = write_scene(sample_scene).splitlines()
    assert "sphere 0.0 0.0 -3.0 1.5 glass" in lines
    assert "material mirror FlatColor 0.2 0.2 0.2 40.0 0.5 -1.0" in lines
