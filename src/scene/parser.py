# scene/parser.py
"""
Reader and writer for the plain-text scene format.

The input is a stream of whitespace separated tokens. A token starting with
``#`` comments out the rest of its line. Each directive is followed by a
fixed number of arguments::

    material shiny FlatColor 1 0 0 50 0.3 -1
    sphere 0 0 0 10 shiny
    sphere 0 -1010 0 1000 Checkerboard 1 1 1 0 0 0 20 -1 -1
    light 0 50 100 1
    cameraPosition 0 0 100
"""
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Tuple, Union

from core.color import Color
from core.errors import SceneError, SceneFileError
from core.vector import Vector3
from geometry.light import Light
from geometry.sphere import Sphere
from materials.checkerboard import Checkerboard
from materials.flat_color import FlatColor
from scene.scene import Scene

logger = logging.getLogger(__name__)


def tokenize(lines: Iterable[str]) -> Iterator[Tuple[str, int]]:
    """Yields (token, line number) pairs, dropping comments."""
    for line_number, line in enumerate(lines, start=1):
        for token in line.split():
            if token.startswith("#"):
                break
            yield token, line_number


class SceneReader:
    """Parses one scene description into a Scene."""

    def __init__(self, stream: Iterable[str], scene: Optional[Scene] = None):
        self.tokens = tokenize(stream)
        self.scene = scene if scene is not None else Scene()
        self.line = 0
        self.directives = {
            "material": self.read_material_directive,
            "sphere": self.read_sphere,
            "light": self.read_light,
            "dispersion": self.read_dispersion,
            "maxReflections": self.read_max_reflections,
            "cameraUp": self.read_camera_up,
            "cameraPosition": self.read_camera_position,
            "cameraLookAt": self.read_camera_look_at,
            "imageScale": self.read_image_scale,
        }

    def read(self) -> Scene:
        for token, line in self.tokens:
            self.line = line
            handler = self.directives.get(token)
            if handler is None:
                raise SceneError(f"Type not found: {token}", token=token, line=line)
            logger.debug("line %d: %s", line, token)
            handler()

        self.scene.camera.update_basis()
        return self.scene

    # Argument readers

    def next_token(self, what: str) -> str:
        try:
            token, self.line = next(self.tokens)
        except StopIteration:
            raise SceneError(f"Unexpected end of scene while reading {what}", line=self.line) from None
        return token

    def read_float(self, what: str) -> float:
        token = self.next_token(what)
        try:
            return float(token)
        except ValueError:
            raise SceneError(f"Expected a number for {what}, got: {token}", token=token, line=self.line) from None

    def read_int(self, what: str) -> int:
        token = self.next_token(what)
        try:
            return int(token)
        except ValueError:
            raise SceneError(f"Expected an integer for {what}, got: {token}", token=token, line=self.line) from None

    def read_vector(self, what: str) -> Vector3:
        return Vector3(self.read_float(what), self.read_float(what), self.read_float(what))

    def read_color(self, what: str) -> Color:
        return Color(self.read_float(what), self.read_float(what), self.read_float(what))

    # Materials

    def read_material(self):
        """Reads an inline material body or a reference to a named material."""
        token = self.next_token("material")
        if token == FlatColor.keyword:
            return FlatColor(
                self.read_color("FlatColor color"),
                shininess=self.read_float("shininess"),
                reflectivity=self.read_float("reflectivity"),
                refractive_index=self.read_float("refractive index"),
            )
        if token == Checkerboard.keyword:
            return Checkerboard(
                self.read_color("Checkerboard first color"),
                self.read_color("Checkerboard second color"),
                scale=self.read_float("Checkerboard scale"),
                shininess=self.read_float("shininess"),
                reflectivity=self.read_float("reflectivity"),
            )
        if token in self.scene.materials:
            return self.scene.materials[token]
        raise SceneError(f"Type not found: {token}", token=token, line=self.line)

    def read_material_directive(self):
        name = self.next_token("material name")
        line = self.line
        material = self.read_material()
        try:
            self.scene.add_material(name, material)
        except SceneError as error:
            raise SceneError(str(error), token=name, line=line) from None

    # Scene content

    def read_sphere(self):
        center = self.read_vector("sphere center")
        radius = self.read_float("sphere radius")
        material = self.read_material()
        self.scene.add_object(Sphere(center, radius, material))

    def read_light(self):
        position = self.read_vector("light position")
        intensity = self.read_float("light intensity")
        self.scene.add_light(Light(position, intensity))

    # Globals

    def read_dispersion(self):
        self.scene.dispersion = self.read_float("dispersion")

    def read_max_reflections(self):
        self.scene.max_reflections = self.read_int("maxReflections")

    def read_camera_up(self):
        self.scene.camera.up = self.read_vector("cameraUp")

    def read_camera_position(self):
        self.scene.camera.position = self.read_vector("cameraPosition")

    def read_camera_look_at(self):
        self.scene.camera.look_at = self.read_vector("cameraLookAt")

    def read_image_scale(self):
        self.scene.image_scale = self.read_float("imageScale")


def read_scene(stream: Union[TextIO, Iterable[str], str], scene: Optional[Scene] = None) -> Scene:
    """
    Parses a scene description.

    Args:
        stream: Open text stream, iterable of lines or the scene text itself
        scene: Scene to populate, a default one when None

    Returns:
        The populated scene

    Raises:
        SceneError: On any unknown directive, bad argument or material name
    """
    if isinstance(stream, str):
        stream = stream.splitlines()
    return SceneReader(stream, scene).read()


def load_scene(path: Union[str, Path], scene: Optional[Scene] = None) -> Scene:
    """
    Reads a scene file; "-" reads standard input.

    Raises:
        SceneFileError: If the file can't be opened or read
        SceneError: If its content is invalid
    """
    if str(path) == "-":
        scene = read_scene(sys.stdin, scene)
        logger.info("Loaded scene from stdin: %s", scene.describe())
        return scene

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise SceneFileError(f"Failed opening scene file {path}: {e.strerror or e}") from e

    scene = read_scene(text, scene)
    logger.info("Loaded scene %s: %s", path, scene.describe())
    return scene


def format_number(value) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


def format_tokens(*values) -> str:
    return " ".join(v if isinstance(v, str) else format_number(v) for v in values)


def write_scene(scene: Scene) -> str:
    """Serializes a scene back into the text format read by read_scene."""
    camera = scene.camera
    lines = [
        "# Globals",
        format_tokens("maxReflections", int(scene.max_reflections)),
        format_tokens("dispersion", scene.dispersion),
        format_tokens("imageScale", scene.image_scale),
        format_tokens("cameraPosition", *camera.position),
        format_tokens("cameraLookAt", *camera.look_at),
        format_tokens("cameraUp", *camera.up),
    ]

    if scene.materials:
        lines.append("# Materials")
        for name, material in scene.materials.items():
            lines.append(format_tokens("material", name, *material.to_tokens()))

    if scene.lights:
        lines.append("# Lights")
        for light in scene.lights:
            lines.append(format_tokens("light", *light.position, light.intensity))

    if scene.objects:
        lines.append("# Objects")
        for obj in scene.objects:
            name = scene.material_name(obj.material)
            body = [name] if name is not None else obj.material.to_tokens()
            lines.append(format_tokens("sphere", *obj.center, obj.radius, *body))

    return "\n".join(lines) + "\n"
