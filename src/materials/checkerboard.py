# materials/checkerboard.py
import math
from core.color import Color
from core.vector import Vector3
from materials.material import MATERIAL_CHECKERBOARD, NOT_SHINY, NOT_REFLECTIVE, NOT_REFRACTIVE

class Checkerboard:
    """
    Two colors alternating in square tiles of side `scale`.

    The pattern tiles the x/z plane and is extruded along y, so a floor
    sphere shows a regular board and every other sphere shows stripes of
    tiles following its silhouette. Checkerboards are never refractive.
    """
    type_code = MATERIAL_CHECKERBOARD
    keyword = "Checkerboard"

    def __init__(self, color1: Color, color2: Color, scale: float = 1.0,
                 shininess: float = NOT_SHINY, reflectivity: float = NOT_REFLECTIVE):
        self.color1 = color1
        self.color2 = color2
        self.scale = scale
        self.shininess = shininess
        self.reflectivity = reflectivity
        self.refractive_index = NOT_REFRACTIVE

    def color_at(self, point: Vector3) -> Color:
        x = math.floor(point.x / self.scale)
        z = math.floor(point.z / self.scale)
        is_even = (x + z) % 2 == 0
        return self.color1 if is_even else self.color2

    def to_tokens(self) -> list:
        return [self.keyword, *self.color1.as_tuple(), *self.color2.as_tuple(),
                self.scale, self.shininess, self.reflectivity]

    def __repr__(self) -> str:
        return (f"Checkerboard({self.color1}, {self.color2}, scale={self.scale}, "
                f"shininess={self.shininess}, reflectivity={self.reflectivity})")
