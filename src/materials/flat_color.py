# materials/flat_color.py
from core.color import Color
from core.vector import Vector3
from materials.material import MATERIAL_FLAT_COLOR, NOT_SHINY, NOT_REFLECTIVE, NOT_REFRACTIVE

class FlatColor:
    """
    A single constant color over the whole surface.
    """
    type_code = MATERIAL_FLAT_COLOR
    keyword = "FlatColor"

    def __init__(self, color: Color, shininess: float = NOT_SHINY,
                 reflectivity: float = NOT_REFLECTIVE, refractive_index: float = NOT_REFRACTIVE):
        self.color = color
        self.shininess = shininess
        self.reflectivity = reflectivity
        self.refractive_index = refractive_index

    def color_at(self, point: Vector3) -> Color:
        return self.color

    def to_tokens(self) -> list:
        return [self.keyword, *self.color.as_tuple(),
                self.shininess, self.reflectivity, self.refractive_index]

    def __repr__(self) -> str:
        return (f"FlatColor({self.color}, shininess={self.shininess}, "
                f"reflectivity={self.reflectivity}, refractive_index={self.refractive_index})")
