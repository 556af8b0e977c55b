# materials/material.py
from typing import Protocol, runtime_checkable
from core.color import Color
from core.vector import Vector3

# Sentinels shared by the scene format and the renderer.
NOT_SHINY = -1.0
NOT_REFLECTIVE = -1.0
NOT_REFRACTIVE = -1.0

# Type codes for the flattened (compiled) scene representation.
MATERIAL_FLAT_COLOR = 0
MATERIAL_CHECKERBOARD = 1

@runtime_checkable
class Material(Protocol):
    """
    Capability set every material variant provides. Variants (FlatColor,
    Checkerboard) are plain classes tagged with a type code; the renderer
    only talks to this interface and never subclasses it.
    """
    type_code: int
    shininess: float
    reflectivity: float
    refractive_index: float

    def color_at(self, point: Vector3) -> Color:
        """Surface color at a world-space hit point."""
        ...

    def to_tokens(self) -> list:
        """Scene-file body for this material (without the directive)."""
        ...
